"""Response payloads for the appointment widgets shown in the agenda."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel

from agenda.models.appointment import Appointment
from agenda.services.appointment_status import available_actions, parse_status


class WidgetType(str, Enum):
    ROW = "row"
    PANEL = "panel"


class AppointmentRowWidget(BaseModel):
    id: int
    code: str
    status: str
    status_label: str
    contact_name: str
    service_name: str
    start_at: datetime
    actions: list[str]


class AppointmentPanelWidget(AppointmentRowWidget):
    business_name: str
    issuer_email: str | None = None
    duration_minutes: int | None = None
    finish_at: datetime | None = None
    comments: str | None = None
    vacancy_id: int | None = None


def parse_widget(raw: str | None) -> WidgetType | None:
    if raw is None:
        return None
    try:
        return WidgetType(raw.strip().lower())
    except ValueError:
        return None


def _row_fields(appointment: Appointment, now: datetime) -> dict:
    status = parse_status(appointment.status)
    return {
        'id': appointment.id,
        'code': appointment.code,
        'status': appointment.status,
        # Statuses set upstream keep their raw value as label.
        'status_label': status.label if status else appointment.status,
        'contact_name': appointment.contact.full_name if appointment.contact else '',
        'service_name': appointment.service.name if appointment.service else '',
        'start_at': appointment.start_at,
        'actions': [action.value for action in available_actions(appointment, now)],
    }


def render_widget(appointment: Appointment, widget: WidgetType, now: datetime) -> AppointmentRowWidget:
    if widget is WidgetType.ROW:
        return AppointmentRowWidget(**_row_fields(appointment, now))

    if widget is WidgetType.PANEL:
        return AppointmentPanelWidget(
            **_row_fields(appointment, now),
            business_name=appointment.business.name if appointment.business else '',
            issuer_email=appointment.issuer.email if appointment.issuer else None,
            duration_minutes=appointment.duration,
            finish_at=appointment.finish_at,
            comments=appointment.comments,
            vacancy_id=appointment.vacancy_id,
        )

    raise ValueError(f'Unsupported widget: {widget!r}')
