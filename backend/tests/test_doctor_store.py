from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from healthconnect.core.errors import StoreUnavailable
from healthconnect.db.crud.doctor import build_doctor_query, find_doctors, get_doctor
from healthconnect.db.seed import seed_doctors
from healthconnect.schemas.doctor import DoctorQuery


def names(doctors):
    return [d.name for d in doctors]


async def test_find_all_sorted_by_rating(db_session, seeded):
    doctors = await find_doctors(db_session, DoctorQuery(region="all"))
    assert len(doctors) == 6
    assert [d.rating for d in doctors] == [5.0, 4.9, 4.9, 4.8, 4.7, 4.6]


async def test_find_by_specialty_fragment(db_session, seeded):
    doctors = await find_doctors(db_session, DoctorQuery(search_text="cardio"))
    assert names(doctors) == ["Dr. Sarah Johnson"]


async def test_find_by_region_and_fee_high(db_session, seeded):
    doctors = await find_doctors(db_session, DoctorQuery(region="north", sort="fee-high"))
    assert names(doctors) == ["Dr. Robert Taylor", "Dr. Sarah Johnson"]


async def test_fee_low_is_reverse_of_fee_high(db_session, seeded):
    low = await find_doctors(db_session, DoctorQuery(sort="fee-low"))
    high = await find_doctors(db_session, DoctorQuery(sort="fee-high"))
    assert [d.consultation_fee for d in low] == [40, 50, 60, 75, 80, 90]
    assert names(high) == list(reversed(names(low)))


async def test_like_wildcards_are_literal(db_session, seeded):
    assert await find_doctors(db_session, DoctorQuery(search_text="%")) == []
    assert await find_doctors(db_session, DoctorQuery(search_text="_")) == []


async def test_unknown_region_matches_nothing(db_session, seeded):
    assert await find_doctors(db_session, DoctorQuery(region="atlantis")) == []


def test_query_has_tie_breakers():
    sql = str(build_doctor_query(DoctorQuery(sort="experience")))
    assert "ORDER BY doctors.experience DESC, doctors.created_at ASC, doctors.name ASC" in sql


async def test_get_doctor_by_id(db_session, seeded):
    doctor = await get_doctor(db_session, seeded[0].id)
    assert doctor.name == "Dr. Sarah Johnson"


async def test_get_doctor_unknown_id(db_session, seeded):
    assert await get_doctor(db_session, "no-such-id") is None


async def test_get_doctor_without_id_skips_the_store():
    db = AsyncMock()
    assert await get_doctor(db, None) is None
    assert await get_doctor(db, "") is None
    assert await get_doctor(db, "   ") is None
    db.execute.assert_not_called()


async def test_store_error_is_reported_as_unavailable():
    db = AsyncMock()
    db.execute.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))

    with pytest.raises(StoreUnavailable) as exc_info:
        await find_doctors(db, DoctorQuery())
    assert exc_info.value.message.startswith("Failed to fetch doctors")


async def test_seeding_is_idempotent(db_session, seeded):
    assert len(seeded) == 6
    assert await seed_doctors(db_session) == []


async def test_rating_ties_fall_back_to_name(db_session, seeded):
    # seeded in one transaction, so created_at is shared
    doctors = await find_doctors(db_session, DoctorQuery(sort="rating"))
    assert names(doctors)[1:3] == ["Dr. Michael Chen", "Dr. Robert Taylor"]
