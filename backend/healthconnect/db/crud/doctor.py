import logging
from typing import Optional, List

from sqlalchemy import select, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from healthconnect.config.constants import ALL_REGIONS, SortKey
from healthconnect.core.errors import StoreUnavailable
from healthconnect.db.models import DoctorModel
from healthconnect.schemas.doctor import DoctorQuery

logger = logging.getLogger(__name__)

_ORDERING = {
    SortKey.RATING: DoctorModel.rating.desc(),
    SortKey.EXPERIENCE: DoctorModel.experience.desc(),
    SortKey.FEE_LOW: DoctorModel.consultation_fee.asc(),
    SortKey.FEE_HIGH: DoctorModel.consultation_fee.desc(),
}


def build_doctor_query(params: DoctorQuery) -> Select:
    """
    Translate directory search inputs into a SELECT.

    Search text matches specialty OR name case-insensitively; a region other
    than "all" must match exactly. Rows tied on the sort column are ordered
    by created_at, then name; rows written in one transaction share
    created_at, so name decides between them.
    """
    query = select(DoctorModel)

    if params.search_text:
        query = query.where(
            or_(
                DoctorModel.specialty.icontains(params.search_text, autoescape=True),
                DoctorModel.name.icontains(params.search_text, autoescape=True),
            )
        )

    if params.region and params.region != ALL_REGIONS:
        query = query.where(DoctorModel.region == params.region)

    sort_key = SortKey.parse(params.sort)
    return query.order_by(
        _ORDERING[sort_key], DoctorModel.created_at.asc(), DoctorModel.name.asc()
    )


async def find_doctors(db: AsyncSession, params: DoctorQuery) -> List[DoctorModel]:
    """Run a directory search against the store."""
    logger.debug(
        f"Searching doctors: text='{params.search_text}', region='{params.region}', sort='{params.sort}'"
    )
    try:
        result = await db.execute(build_doctor_query(params))
    except SQLAlchemyError as e:
        logger.error(f"Error searching for doctors: {e}", exc_info=True)
        raise StoreUnavailable(f"Failed to fetch doctors: {e}") from e

    doctors = list(result.scalars().all())
    logger.info(f"Found {len(doctors)} doctors matching criteria")
    return doctors


async def get_doctor(db: AsyncSession, doctor_id: Optional[str]) -> Optional[DoctorModel]:
    """
    Fetch one doctor by id. A missing or blank id does not touch the store and
    returns None, as does an id with no row behind it.
    """
    if not doctor_id or not doctor_id.strip():
        return None

    try:
        result = await db.execute(select(DoctorModel).where(DoctorModel.id == doctor_id))
    except SQLAlchemyError as e:
        logger.error(f"Error fetching doctor {doctor_id}: {e}", exc_info=True)
        raise StoreUnavailable(f"Failed to fetch doctor: {e}") from e

    doctor = result.scalar_one_or_none()
    if doctor is None:
        logger.warning(f"No doctor found with id={doctor_id}")
    return doctor
