from enum import Enum


class Region(str, Enum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"
    CENTRAL = "central"
    # cities offered on the registration form
    MUMBAI = "mumbai"
    PUNE = "pune"
    NAGPUR = "nagpur"
    NASHIK = "nashik"
    AURANGABAD = "aurangabad"
    THANE = "thane"
    KOLHAPUR = "kolhapur"
    SOLAPUR = "solapur"


# search sentinel, never stored on a doctor row
ALL_REGIONS = "all"


class SortKey(str, Enum):
    RATING = "rating"
    EXPERIENCE = "experience"
    FEE_LOW = "fee-low"
    FEE_HIGH = "fee-high"

    @classmethod
    def parse(cls, value: str | None) -> "SortKey":
        """Unknown or missing keys fall back to rating."""
        try:
            return cls(value)
        except ValueError:
            return cls.RATING


class AppointmentStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


SPECIALTIES = [
    "Cardiology",
    "Dermatology",
    "Neurology",
    "Orthopedics",
    "Pediatrics",
    "Psychiatry",
    "General Physician",
    "Other",
]

TIME_SLOTS = [
    "09:00 AM", "09:30 AM", "10:00 AM", "10:30 AM", "11:00 AM", "11:30 AM",
    "02:00 PM", "02:30 PM", "03:00 PM", "03:30 PM", "04:00 PM", "04:30 PM", "05:00 PM",
]

DOCTOR_TITLE = "Dr."
DEFAULT_RATING = 4.0
DEFAULT_REVIEWS = 0
DEFAULT_AVAILABILITY = "Available Today"
