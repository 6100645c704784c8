import uuid

from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from linkhub.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Domain(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = 'domains'

    workspace_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), ForeignKey('workspaces.id', ondelete='CASCADE'), nullable=False)
    slug: Mapped[str] = mapped_column(String(190), unique=True, nullable=False)

    workspace = relationship('Workspace', back_populates='domains')
