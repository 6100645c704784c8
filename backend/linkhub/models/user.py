from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from linkhub.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class User(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = 'users'

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    name: Mapped[str | None] = mapped_column(String(255))

    memberships = relationship('WorkspaceUser', back_populates='user', cascade='all, delete-orphan')
