from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from strayspot.core.config import get_settings
from strayspot.models.base import Base

settings = get_settings()

if not settings.database_url:
    # The app can still start, but any DB access will fail until DATABASE_URL is set.
    _engine = None
    SessionLocal = None
else:
    _engine = create_engine(settings.database_url, pool_pre_ping=True)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_engine)


def init_db(engine=None):
    # Importing the model modules registers their tables on Base.metadata.
    from strayspot.models import (  # noqa: F401
        adopter_model,
        adoption_application_model,
        audit_entry_model,
        org_model,
        pet_model,
    )

    target = engine or _engine
    if target is None:
        raise RuntimeError("DATABASE_URL is not set")
    Base.metadata.create_all(bind=target)


def get_db():
    if SessionLocal is None:
        raise RuntimeError("DATABASE_URL is not set")
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
