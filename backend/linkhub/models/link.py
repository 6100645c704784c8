import uuid

from sqlalchemy import Boolean, Column, ForeignKey, Index, String, Table, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from linkhub.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

link_tags = Table(
    'link_tags',
    Base.metadata,
    Column('link_id', Uuid(as_uuid=True), ForeignKey('links.id', ondelete='CASCADE'), primary_key=True),
    Column('tag_id', Uuid(as_uuid=True), ForeignKey('tags.id', ondelete='CASCADE'), primary_key=True),
)


class Link(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = 'links'
    __table_args__ = (Index('ix_links_workspace_domain_created', 'workspace_id', 'domain', 'created_at'),)

    workspace_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), ForeignKey('workspaces.id', ondelete='CASCADE'), nullable=False)
    user_id: Mapped[uuid.UUID | None] = mapped_column(Uuid(as_uuid=True), ForeignKey('users.id', ondelete='SET NULL'))
    folder_id: Mapped[uuid.UUID | None] = mapped_column(Uuid(as_uuid=True), ForeignKey('folders.id', ondelete='SET NULL'))

    domain: Mapped[str] = mapped_column(String(190), nullable=False)
    key: Mapped[str] = mapped_column(String(190), nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    short_link: Mapped[str] = mapped_column(String(400), unique=True, nullable=False)
    title: Mapped[str | None] = mapped_column(Text)
    archived: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    workspace = relationship('Workspace', back_populates='links')
    folder = relationship('Folder', back_populates='links')
    tags = relationship('Tag', secondary=link_tags, back_populates='links')
