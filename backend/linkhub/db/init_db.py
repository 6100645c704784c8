from linkhub.db import base  # noqa: F401  registers models on Base.metadata
from linkhub.db.session import engine
from linkhub.models.base import Base


def init_db() -> None:
    Base.metadata.create_all(bind=engine)
