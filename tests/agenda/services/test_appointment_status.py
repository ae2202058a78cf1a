from datetime import datetime, timedelta

import pytest

from agenda.models.appointment import Appointment, AppointmentStatus
from agenda.services.appointment_status import (
    BookingAction,
    apply_action,
    available_actions,
    is_terminal,
    next_status,
    parse_action,
    parse_status,
)

NOW = datetime(2026, 1, 5, 10, 0)
PAST = NOW - timedelta(days=1)
FUTURE = NOW + timedelta(days=5)


def _appointment(status: str, start_at: datetime) -> Appointment:
    return Appointment(id=1, business_id=1, status=status, start_at=start_at)


@pytest.mark.parametrize(
    ('raw', 'expected'),
    [
        ('annulate', BookingAction.ANNULATE),
        (' Serve ', BookingAction.SERVE),
        ('confirm', BookingAction.CONFIRM),
        ('some-invalid-action', None),
        ('', None),
        (None, None),
    ],
)
def test_parse_action_maps_known_names_only(raw, expected) -> None:
    assert parse_action(raw) == expected


def test_is_terminal_flags_served_and_annulated() -> None:
    assert is_terminal(Appointment.STATUS_SERVED)
    assert is_terminal(AppointmentStatus.ANNULATED)
    assert not is_terminal(Appointment.STATUS_RESERVED)


@pytest.mark.parametrize(
    ('status', 'action', 'start_at', 'expected'),
    [
        (AppointmentStatus.RESERVED, BookingAction.ANNULATE, FUTURE, AppointmentStatus.ANNULATED),
        (AppointmentStatus.RESERVED, BookingAction.ANNULATE, PAST, AppointmentStatus.ANNULATED),
        (AppointmentStatus.RESERVED, BookingAction.SERVE, PAST, AppointmentStatus.SERVED),
        (AppointmentStatus.RESERVED, BookingAction.SERVE, NOW, AppointmentStatus.SERVED),
        (AppointmentStatus.RESERVED, BookingAction.SERVE, FUTURE, None),
        (AppointmentStatus.RESERVED, BookingAction.CONFIRM, FUTURE, None),
        (AppointmentStatus.RESERVED, None, FUTURE, None),
        (AppointmentStatus.SERVED, BookingAction.CONFIRM, FUTURE, None),
        (AppointmentStatus.SERVED, BookingAction.ANNULATE, PAST, None),
        (AppointmentStatus.ANNULATED, BookingAction.SERVE, PAST, None),
    ],
)
def test_next_status_follows_transition_table(status, action, start_at, expected) -> None:
    assert next_status(status, action, start_at, NOW) == expected


def test_apply_action_annulates_reserved_appointment() -> None:
    appointment = _appointment(Appointment.STATUS_RESERVED, FUTURE)

    assert apply_action(appointment, BookingAction.ANNULATE, NOW) is True
    assert appointment.status == Appointment.STATUS_ANNULATED


def test_apply_action_is_idempotent_for_terminal_results() -> None:
    appointment = _appointment(Appointment.STATUS_RESERVED, FUTURE)

    apply_action(appointment, BookingAction.ANNULATE, NOW)
    changed_again = apply_action(appointment, BookingAction.ANNULATE, NOW)

    assert changed_again is False
    assert appointment.status == Appointment.STATUS_ANNULATED


def test_apply_action_keeps_future_appointment_reserved_on_serve() -> None:
    appointment = _appointment(Appointment.STATUS_RESERVED, FUTURE)

    assert apply_action(appointment, BookingAction.SERVE, NOW) is False
    assert appointment.status == Appointment.STATUS_RESERVED


def test_apply_action_ignores_unknown_action() -> None:
    appointment = _appointment(Appointment.STATUS_RESERVED, PAST)

    assert apply_action(appointment, parse_action('some-invalid-action'), NOW) is False
    assert appointment.status == Appointment.STATUS_RESERVED


def test_available_actions_depend_on_start_time_and_status() -> None:
    assert available_actions(_appointment(Appointment.STATUS_RESERVED, PAST), NOW) == [
        BookingAction.ANNULATE,
        BookingAction.SERVE,
    ]
    assert available_actions(_appointment(Appointment.STATUS_RESERVED, FUTURE), NOW) == [BookingAction.ANNULATE]
    assert available_actions(_appointment(Appointment.STATUS_SERVED, PAST), NOW) == []
    assert available_actions(_appointment(Appointment.STATUS_ANNULATED, PAST), NOW) == []


def test_status_set_upstream_is_not_terminal_and_has_no_edges() -> None:
    assert parse_status('P') is None
    assert not is_terminal('P')
    assert next_status('P', BookingAction.SERVE, PAST, NOW) is None
    assert next_status('P', BookingAction.ANNULATE, PAST, NOW) is None


def test_apply_action_leaves_status_set_upstream_untouched() -> None:
    appointment = _appointment('P', PAST)

    assert apply_action(appointment, BookingAction.SERVE, NOW) is False
    assert appointment.status == 'P'
    assert available_actions(appointment, NOW) == []
