# healthconnect/routes/doctors/router.py
import json
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, WebSocket, WebSocketDisconnect, status
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from healthconnect.core.auth import create_tokens_for_user, set_session_cookies
from healthconnect.core.errors import NotFound
from healthconnect.core.middleware import get_db
from healthconnect.db.crud.doctor import find_doctors, get_doctor
from healthconnect.db.session import store_session
from healthconnect.routes.doctors.search import DoctorQueryController
from healthconnect.routes.doctors.services import register_doctor
from healthconnect.schemas.doctor import (
    DoctorOut,
    DoctorQuery,
    DoctorRegisterRequest,
    DoctorSearchState,
)

router = APIRouter(prefix="/doctors", tags=["doctors"])
logger = logging.getLogger(__name__)


@router.get("/", response_model=List[DoctorOut])
async def list_doctors(
    q: Optional[str] = Query(None, description="Specialty or name fragment"),
    disease: Optional[str] = Query(None, description="Alias of q used by the home page search"),
    region: Optional[str] = Query(None, description="Region code, or 'all'"),
    sort: Optional[str] = Query(None, description="rating | experience | fee-low | fee-high"),
    db: AsyncSession = Depends(get_db),
):
    """Directory search."""
    params = DoctorQuery(search_text=q or disease, region=region, sort=sort)
    return await find_doctors(db, params)


@router.post("/register", response_model=DoctorOut, status_code=status.HTTP_201_CREATED)
async def register(
    data: DoctorRegisterRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    user, doctor = await register_doctor(db, data)
    set_session_cookies(response, create_tokens_for_user(user))
    return doctor


async def _fetch_from_store(params: DoctorQuery):
    async with store_session() as db:
        return await find_doctors(db, params)


@router.websocket("/live")
async def live_directory(websocket: WebSocket):
    """
    Live directory view. The client sends JSON messages with any of
    `search_text`, `region`, `sort`; each message replaces the parameter set
    and the server pushes `DoctorSearchState` snapshots as the search runs.
    """
    await websocket.accept()

    async def push(state: DoctorSearchState):
        await websocket.send_json(state.model_dump(mode="json"))

    controller = DoctorQueryController(_fetch_from_store, listener=push)
    controller.update(DoctorQuery())

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000))
            data = message.get("text")
            if data is None:
                await websocket.send_json({"type": "error", "detail": "Search parameters must be sent as text frames"})
                continue
            try:
                params = DoctorQuery.model_validate(json.loads(data))
            except (json.JSONDecodeError, ValidationError) as e:
                await websocket.send_json({"type": "error", "detail": f"Invalid search parameters: {e}"})
                continue
            controller.update(params)
    except WebSocketDisconnect:
        logger.info("Live directory client disconnected.")
    finally:
        await controller.close()


@router.get("/{doctor_id}", response_model=DoctorOut)
async def get_doctor_route(doctor_id: str, db: AsyncSession = Depends(get_db)):
    doctor = await get_doctor(db, doctor_id)
    if doctor is None:
        raise NotFound("Doctor not found")
    return doctor
