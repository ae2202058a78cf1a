import os
from datetime import date, datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

os.environ.setdefault('DATABASE_URL', 'sqlite:///./test.db')

from agenda.database import Base  # noqa: E402
from agenda.models.appointment import Appointment  # noqa: E402
from agenda.models.business import Business  # noqa: E402
from agenda.models.contact import Contact  # noqa: E402
from agenda.models.service import Service  # noqa: E402
from agenda.models.user import User  # noqa: E402
from agenda.models.vacancy import Vacancy  # noqa: E402

NOW = datetime(2026, 1, 5, 10, 0)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def appointment_db():
    engine = create_engine('sqlite:///:memory:')
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    db = testing_session_local()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def fixture_rows(appointment_db):
    issuer = User(email='issuer@example.com', name='Issuer', hashed_password='', role='manager')
    business = Business(name='Hair Studio', slug='hair-studio', owners=[issuer])
    appointment_db.add_all([issuer, business])
    appointment_db.flush()

    contact = Contact(business_id=business.id, firstname='John', lastname='Doe', email='john@example.com')
    service = Service(business_id=business.id, name='Haircut', slug='haircut', duration=30)
    appointment_db.add_all([contact, service])
    appointment_db.flush()

    vacancy = Vacancy(
        business_id=business.id,
        service_id=service.id,
        date=date(2026, 1, 10),
        start_at=datetime(2026, 1, 10, 9, 0),
        finish_at=datetime(2026, 1, 10, 18, 0),
        capacity=1,
    )
    appointment_db.add(vacancy)
    appointment_db.commit()

    return {
        'issuer': issuer,
        'business': business,
        'contact': contact,
        'service': service,
        'vacancy': vacancy,
    }


@pytest.fixture
def make_appointment(appointment_db, fixture_rows):
    def _make(status: str = Appointment.STATUS_RESERVED, start_at: datetime | None = None, **overrides) -> Appointment:
        values = {
            'business_id': fixture_rows['business'].id,
            'issuer_id': fixture_rows['issuer'].id,
            'contact_id': fixture_rows['contact'].id,
            'service_id': fixture_rows['service'].id,
            'vacancy_id': fixture_rows['vacancy'].id,
            'status': status,
            'start_at': start_at or NOW + timedelta(days=5),
            'duration': fixture_rows['service'].duration,
        }
        values.update(overrides)
        appointment = Appointment(**values)
        appointment_db.add(appointment)
        appointment_db.commit()
        appointment_db.refresh(appointment)
        return appointment

    return _make
