import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from agenda.core import config
from agenda.database import Base, engine, ensure_appointment_schema
from agenda.models import appointment  # noqa: F401  registers every mapped table
from agenda.routes import auth_routes, booking_routes

logging.basicConfig(level=config.LOG_LEVEL)

config.validate_runtime_config()

app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

logger = logging.getLogger(__name__)


@app.on_event('startup')
def initialize_database() -> None:
    try:
        Base.metadata.create_all(bind=engine)
        ensure_appointment_schema()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')


@app.get('/')
def root():
    return {'status': 'Agenda API Running'}


app.include_router(auth_routes.router, prefix='/auth')
app.include_router(booking_routes.router, prefix='/api/booking')
