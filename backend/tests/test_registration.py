from unittest.mock import AsyncMock

import pytest
from fastapi import HTTPException
from sqlalchemy import func, select

from healthconnect.core.errors import StoreUnavailable, ValidationFailure
from healthconnect.db.crud.doctor import find_doctors
from healthconnect.db.models import DoctorModel, UserModel
from healthconnect.routes.doctors import services
from healthconnect.routes.doctors.services import (
    consultation_fee_from,
    experience_from,
    parse_leading_int,
    register_doctor,
    validate_registration,
    with_title,
)
from healthconnect.schemas.doctor import DoctorQuery, DoctorRegisterRequest


def form(**overrides) -> DoctorRegisterRequest:
    data = {
        "name": "Jane Roe",
        "email": "jane.roe@example.com",
        "phone": "+91 98765 43210",
        "specialty": "Psychiatry",
        "experience": "7",
        "clinic_name": "Mind Matters",
        "clinic_address": "12 Lake Road, Pune",
        "region": "pune",
        "consultation_fee": "650",
        "qualifications": "MBBS, MD - Psychiatry",
        "about": "Anxiety and mood disorders.",
        "password": "s3cret-pass",
        "confirm_password": "s3cret-pass",
    }
    data.update(overrides)
    return DoctorRegisterRequest(**data)


async def count(db, model) -> int:
    return await db.scalar(select(func.count()).select_from(model))


def test_mismatched_passwords_are_reported_first():
    with pytest.raises(ValidationFailure) as exc_info:
        validate_registration(form(password="short", confirm_password="other"))
    assert exc_info.value.message == "Passwords do not match!"
    assert exc_info.value.field == "confirm_password"


def test_short_password_is_rejected():
    with pytest.raises(ValidationFailure) as exc_info:
        validate_registration(form(password="1234567", confirm_password="1234567"))
    assert exc_info.value.message == "Password must be at least 8 characters!"
    assert exc_info.value.field == "password"


def test_eight_character_password_is_enough():
    validate_registration(form(password="12345678", confirm_password="12345678"))


async def test_invalid_form_never_reaches_the_store():
    db = AsyncMock()
    with pytest.raises(ValidationFailure):
        await register_doctor(db, form(confirm_password="different"))
    db.add.assert_not_called()
    db.flush.assert_not_called()
    db.commit.assert_not_called()


@pytest.mark.parametrize(
    "raw, expected",
    [("75", 75), ("  42 years", 42), ("75 USD", 75), ("abc", None), ("", None), (None, None), (12, 12)],
)
def test_parse_leading_int(raw, expected):
    assert parse_leading_int(raw) == expected


def test_fee_falls_back_to_default():
    assert consultation_fee_from("abc") == 500
    assert consultation_fee_from(None) == 500
    assert consultation_fee_from("-20") == 500
    assert consultation_fee_from("0") == 0
    assert consultation_fee_from("1200") == 1200


def test_experience_defaults_to_zero():
    assert experience_from("") == 0
    assert experience_from("ten") == 0
    assert experience_from("10") == 10


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Jane Roe", "Dr. Jane Roe"),
        ("  Jane Roe ", "Dr. Jane Roe"),
        ("Dr. Jane Roe", "Dr. Jane Roe"),
        ("dr Jane Roe", "dr Jane Roe"),
        ("Drake Bell", "Dr. Drake Bell"),
    ],
)
def test_with_title(name, expected):
    assert with_title(name) == expected


async def test_register_creates_account_and_directory_row(db_session):
    user, doctor = await register_doctor(db_session, form())

    assert user.role == "doctor"
    assert doctor.user_id == user.id
    assert doctor.name == "Dr. Jane Roe"
    assert doctor.consultation_fee == 650
    assert doctor.experience == 7
    assert doctor.region == "pune"
    assert doctor.address == "12 Lake Road, Pune"
    assert doctor.rating == 4.0
    assert doctor.reviews == 0
    assert doctor.availability == "Available Today"

    found = await find_doctors(db_session, DoctorQuery(search_text="psych", region="pune"))
    assert [d.id for d in found] == [doctor.id]


async def test_register_with_unparseable_fee(db_session):
    _, doctor = await register_doctor(db_session, form(consultation_fee="abc"))
    assert doctor.consultation_fee == 500


async def test_duplicate_email_is_a_conflict(db_session):
    await register_doctor(db_session, form())

    with pytest.raises(HTTPException) as exc_info:
        await register_doctor(db_session, form(name="Someone Else"))
    assert exc_info.value.status_code == 409
    assert await count(db_session, DoctorModel) == 1


async def test_failed_directory_row_rolls_back_account(db_session, monkeypatch):
    original = services.doctor_fields_from

    def without_name(data):
        fields = original(data)
        fields["name"] = None
        return fields

    monkeypatch.setattr(services, "doctor_fields_from", without_name)

    with pytest.raises(StoreUnavailable) as exc_info:
        await register_doctor(db_session, form())
    assert exc_info.value.message.startswith("Failed to create doctor profile")

    assert await count(db_session, UserModel) == 0
    assert await count(db_session, DoctorModel) == 0
