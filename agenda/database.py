from threading import Lock

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.orm import declarative_base, sessionmaker

from agenda.core import config


connect_args = {"check_same_thread": False} if config.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    config.DATABASE_URL,
    echo=config.DATABASE_ECHO,
    connect_args=connect_args,
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()

_schema_lock = Lock()
_appointment_schema_checked = False


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def ensure_appointment_schema() -> None:
    global _appointment_schema_checked

    if _appointment_schema_checked:
        return

    with _schema_lock:
        if _appointment_schema_checked:
            return

        inspector = inspect(engine)

        if 'appointments' not in inspector.get_table_names():
            _appointment_schema_checked = True
            return

        existing_columns = {column['name'] for column in inspector.get_columns('appointments')}
        migration_steps = [
            ('duration', 'ALTER TABLE appointments ADD COLUMN duration INTEGER'),
            ('comments', 'ALTER TABLE appointments ADD COLUMN comments VARCHAR'),
            ('hash', 'ALTER TABLE appointments ADD COLUMN hash VARCHAR(32)'),
            ('vacancy_id', 'ALTER TABLE appointments ADD COLUMN vacancy_id INTEGER'),
        ]

        with engine.begin() as connection:
            for column_name, statement in migration_steps:
                if column_name not in existing_columns:
                    connection.execute(text(statement))
            connection.execute(
                text('CREATE INDEX IF NOT EXISTS idx_appointments_business_start ON appointments(business_id, start_at)')
            )
            connection.execute(
                text('CREATE INDEX IF NOT EXISTS idx_appointments_status_start ON appointments(status, start_at)')
            )

        _appointment_schema_checked = True
