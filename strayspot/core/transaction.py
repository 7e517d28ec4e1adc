from contextlib import contextmanager

import structlog
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from strayspot.core.errors import ConcurrentUpdate

log = structlog.get_logger(__name__)


@contextmanager
def transaction(db: Session):
    """Commit everything done in the block, or nothing.

    A version mismatch on any flushed row means another request changed it
    first; that surfaces as ``ConcurrentUpdate``.
    """
    try:
        yield db
        db.commit()
    except StaleDataError as exc:
        db.rollback()
        log.info("concurrent_update_detected", error=str(exc))
        raise ConcurrentUpdate() from exc
    except Exception:
        db.rollback()
        raise
