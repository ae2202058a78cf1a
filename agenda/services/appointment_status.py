"""Appointment status transitions driven by booking actions."""

import logging
from datetime import datetime
from enum import Enum

from agenda.models.appointment import Appointment, AppointmentStatus

logger = logging.getLogger(__name__)


class BookingAction(str, Enum):
    ANNULATE = "annulate"
    CONFIRM = "confirm"
    SERVE = "serve"


TERMINAL_STATUSES = frozenset({AppointmentStatus.SERVED, AppointmentStatus.ANNULATED})

# (current status, action) -> target status. Missing keys are no-ops.
TRANSITIONS = {
    (AppointmentStatus.RESERVED, BookingAction.ANNULATE): AppointmentStatus.ANNULATED,
    (AppointmentStatus.RESERVED, BookingAction.SERVE): AppointmentStatus.SERVED,
}


def parse_action(raw: str | None) -> BookingAction | None:
    if raw is None:
        return None
    try:
        return BookingAction(raw.strip().lower())
    except ValueError:
        return None


def parse_status(raw: str | AppointmentStatus | None) -> AppointmentStatus | None:
    try:
        return AppointmentStatus(raw)
    except ValueError:
        return None


def is_terminal(status: str | AppointmentStatus) -> bool:
    return parse_status(status) in TERMINAL_STATUSES


def _guard_allows(action: BookingAction, start_at: datetime, now: datetime) -> bool:
    if action is BookingAction.SERVE:
        return start_at <= now
    return True


def next_status(
    status: str | AppointmentStatus,
    action: BookingAction | None,
    start_at: datetime,
    now: datetime,
) -> AppointmentStatus | None:
    """Return the status ``action`` moves ``status`` to, or None when nothing changes.

    Terminal statuses never move. Any pair missing from ``TRANSITIONS`` or
    failing its guard is a no-op rather than an error.
    """
    if action is None:
        return None

    current = parse_status(status)
    if current is None or current in TERMINAL_STATUSES:
        return None

    target = TRANSITIONS.get((current, action))
    if target is None or not _guard_allows(action, start_at, now):
        return None
    return target


def apply_action(appointment: Appointment, action: BookingAction | None, now: datetime) -> bool:
    """Move ``appointment.status`` according to ``action`` at instant ``now``.

    Returns True when the status changed. Persisting the record is left to the
    caller.
    """
    target = next_status(appointment.status, action, appointment.start_at, now)
    if target is None:
        if action is not None and not is_terminal(appointment.status):
            logger.info(
                'Action %s left appointment %s unchanged (status=%s, start_at=%s)',
                action.value,
                appointment.id,
                appointment.status,
                appointment.start_at,
            )
        return False

    logger.info(
        'Appointment %s moved %s -> %s by %s',
        appointment.id,
        appointment.status,
        target.value,
        action.value,
    )
    appointment.status = target.value
    return True


def available_actions(appointment: Appointment, now: datetime) -> list[BookingAction]:
    return [
        action
        for action in BookingAction
        if next_status(appointment.status, action, appointment.start_at, now) is not None
    ]
