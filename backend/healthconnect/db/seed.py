# healthconnect/db/seed.py
import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from healthconnect.db.models import DoctorModel

logger = logging.getLogger(__name__)

# Directory entries shown before any doctor has registered
SEED_DOCTORS = [
    {
        "name": "Dr. Sarah Johnson",
        "specialty": "Cardiology",
        "experience": 15,
        "region": "north",
        "clinic_name": "Heart Care Clinic",
        "address": "123 Medical Plaza, North District",
        "rating": 4.8,
        "reviews": 120,
        "consultation_fee": 75,
        "availability": "Available Today",
        "qualifications": "MBBS, MD - Cardiology",
        "about": "Specialized in heart diseases and cardiovascular health with over 15 years of experience.",
    },
    {
        "name": "Dr. Michael Chen",
        "specialty": "Dermatology",
        "experience": 10,
        "region": "south",
        "clinic_name": "Skin & Beauty Center",
        "address": "456 Health Avenue, South District",
        "rating": 4.9,
        "reviews": 95,
        "consultation_fee": 60,
        "availability": "Available Tomorrow",
        "qualifications": "MBBS, MD - Dermatology",
        "about": "Expert in skin conditions, cosmetic dermatology, and laser treatments.",
    },
    {
        "name": "Dr. Emily Williams",
        "specialty": "Pediatrics",
        "experience": 12,
        "region": "east",
        "clinic_name": "Children's Health Center",
        "address": "789 Care Street, East District",
        "rating": 5.0,
        "reviews": 150,
        "consultation_fee": 50,
        "availability": "Available Today",
        "qualifications": "MBBS, DCH - Pediatrics",
        "about": "Passionate about child healthcare, vaccinations, and developmental monitoring.",
    },
    {
        "name": "Dr. James Wilson",
        "specialty": "Orthopedics",
        "experience": 18,
        "region": "west",
        "clinic_name": "Bone & Joint Institute",
        "address": "321 Medical Center, West District",
        "rating": 4.7,
        "reviews": 88,
        "consultation_fee": 80,
        "availability": "Available on Mon, Wed",
        "qualifications": "MBBS, MS - Orthopedics",
        "about": "Specializing in sports injuries, joint replacements, and spine surgeries.",
    },
    {
        "name": "Dr. Priya Sharma",
        "specialty": "General Physician",
        "experience": 8,
        "region": "central",
        "clinic_name": "Family Wellness Clinic",
        "address": "555 Community Road, Central District",
        "rating": 4.6,
        "reviews": 110,
        "consultation_fee": 40,
        "availability": "Available Today",
        "qualifications": "MBBS, MD - General Medicine",
        "about": "Providing comprehensive primary care for all ages with a focus on preventive medicine.",
    },
    {
        "name": "Dr. Robert Taylor",
        "specialty": "Neurology",
        "experience": 20,
        "region": "north",
        "clinic_name": "Brain & Nerve Center",
        "address": "888 Neuroscience Blvd, North District",
        "rating": 4.9,
        "reviews": 75,
        "consultation_fee": 90,
        "availability": "By Appointment",
        "qualifications": "MBBS, DM - Neurology",
        "about": "Expert in treating neurological disorders, migraines, and epilepsy.",
    },
]


async def seed_doctors(db: AsyncSession) -> List[DoctorModel]:
    """Insert the seed doctors that are not in the store yet (matched by name)."""
    existing = set((await db.execute(select(DoctorModel.name))).scalars().all())

    added = []
    for row in SEED_DOCTORS:
        if row["name"] in existing:
            logger.info(f"Doctor {row['name']} already exists. Skipping.")
            continue
        doctor = DoctorModel(**row)
        db.add(doctor)
        added.append(doctor)
        logger.info(f"Added doctor: {row['name']} ({row['specialty']}, {row['region']})")

    await db.commit()
    return added
