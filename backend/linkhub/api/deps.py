from collections.abc import Generator

from sqlalchemy.orm import Session

from linkhub.db.session import SessionLocal
from linkhub.services.imports.flags import ImportFlagStore


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_import_flags() -> ImportFlagStore:
    return ImportFlagStore.from_url()
