import uuid

from sqlalchemy import ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from linkhub.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from linkhub.models.link import link_tags


class Tag(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = 'tags'
    __table_args__ = (UniqueConstraint('workspace_id', 'name', name='uq_tags_workspace_name'),)

    workspace_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), ForeignKey('workspaces.id', ondelete='CASCADE'), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    color: Mapped[str] = mapped_column(String(20), default='blue', nullable=False)

    workspace = relationship('Workspace', back_populates='tags')
    links = relationship('Link', secondary=link_tags, back_populates='tags')
