import uuid

from sqlalchemy import Enum, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from linkhub.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from linkhub.models.enums import WorkspaceRole


class Workspace(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = 'workspaces'

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    users = relationship('WorkspaceUser', back_populates='workspace', cascade='all, delete-orphan')
    domains = relationship('Domain', back_populates='workspace', cascade='all, delete-orphan')
    folders = relationship('Folder', back_populates='workspace', cascade='all, delete-orphan')
    tags = relationship('Tag', back_populates='workspace', cascade='all, delete-orphan')
    links = relationship('Link', back_populates='workspace', cascade='all, delete-orphan')


class WorkspaceUser(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = 'workspace_users'
    __table_args__ = (UniqueConstraint('workspace_id', 'user_id', name='uq_workspace_users_workspace_user'),)

    workspace_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), ForeignKey('workspaces.id', ondelete='CASCADE'), nullable=False)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    role: Mapped[WorkspaceRole] = mapped_column(
        Enum(WorkspaceRole, name='workspace_role', native_enum=False),
        default=WorkspaceRole.MEMBER,
        nullable=False,
    )

    workspace = relationship('Workspace', back_populates='users')
    user = relationship('User', back_populates='memberships')
