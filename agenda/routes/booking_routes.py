import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError, field_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from agenda.auth.dependencies import get_current_user
from agenda.database import ensure_appointment_schema, get_db
from agenda.models.appointment import Appointment
from agenda.models.user import User
from agenda.services.appointment_status import apply_action, parse_action
from agenda.services.widgets import parse_widget, render_widget

router = APIRouter(tags=['booking'])

logger = logging.getLogger(__name__)

RESPONSE_CODE_OK = 'OK'
RESPONSE_CODE_ERROR = 'ERROR'


class BookingActionRequest(BaseModel):
    business: int
    appointment: int
    action: str = ''
    widget: str = ''

    @field_validator('action', 'widget', mode='before')
    @classmethod
    def normalize_name(cls, value: str | None) -> str:
        if value is None:
            return ''
        return str(value).strip()


class BookingActionResponse(BaseModel):
    code: str
    changed: bool
    status: str
    widget: str | None = None
    content: dict | None = None


def get_now() -> datetime:
    return datetime.now()


def ensure_database_ready() -> None:
    try:
        ensure_appointment_schema()
    except SQLAlchemyError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail='Database unavailable. Verify DATABASE_URL and database credentials.',
        ) from exc


async def read_booking_action_request(request: Request) -> BookingActionRequest:
    content_type = request.headers.get('content-type', '')
    if content_type.startswith('application/json'):
        try:
            payload = await request.json()
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail='Request body is not valid JSON.',
            ) from exc
    else:
        payload = dict(await request.form())

    try:
        return BookingActionRequest.model_validate(payload)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc


def can_manage_appointment(user: User, appointment: Appointment) -> bool:
    if appointment.issuer_id == user.id:
        return True
    return appointment.business is not None and appointment.business.is_owned_by(user)


def perform_booking_action(
    data: BookingActionRequest,
    current_user: User,
    db: Session,
    now: datetime,
) -> BookingActionResponse:
    ensure_database_ready()

    try:
        appointment = (
            db.query(Appointment)
            .filter(Appointment.id == data.appointment)
            .with_for_update()
            .first()
        )
        if appointment is None or appointment.business_id != data.business:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail='Appointment not found.',
            )

        if not can_manage_appointment(current_user, appointment):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail='Only business owners or the issuer can act on this appointment.',
            )

        action = parse_action(data.action)
        if action is None:
            logger.warning('Ignoring invalid action %r on appointment %s', data.action, appointment.id)

        changed = apply_action(appointment, action, now)
        db.commit()
        db.refresh(appointment)

        widget = parse_widget(data.widget)
        if widget is None:
            logger.warning('Invalid widget %r requested for appointment %s', data.widget, appointment.id)
            return BookingActionResponse(
                code=RESPONSE_CODE_ERROR,
                changed=changed,
                status=appointment.status,
            )

        content = render_widget(appointment, widget, now)
        return BookingActionResponse(
            code=RESPONSE_CODE_OK,
            changed=changed,
            status=appointment.status,
            widget=widget.value,
            content=content.model_dump(mode='json'),
        )
    except SQLAlchemyError as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail='Database unavailable. Verify DATABASE_URL and database credentials.',
        ) from exc


@router.post('/action', response_model=BookingActionResponse)
async def post_booking_action(
    request: Request,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    data = await read_booking_action_request(request)
    return perform_booking_action(data, current_user, db, now)
