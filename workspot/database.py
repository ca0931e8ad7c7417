import logging

from sqlmodel import Session, SQLModel, create_engine

from workspot.config import DATABASE_URL, DB_ECHO

logger = logging.getLogger(__name__)

# SQLite needs this to be shared with the threadpool FastAPI runs sync routes in
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, echo=DB_ECHO, pool_pre_ping=True, connect_args=connect_args)


def create_db_and_tables():
    # models must be imported so their tables are registered on the metadata
    from workspot.models import business, daily_hours, desk, reservation, user  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info("Database tables ready")


def get_session():
    with Session(engine) as session:
        yield session
