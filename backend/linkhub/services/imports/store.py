import uuid
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy.orm import Session

from linkhub.core.logging import get_logger
from linkhub.models.enums import WorkspaceRole
from linkhub.models.link import Link, link_tags
from linkhub.models.tag import Tag
from linkhub.models.user import User
from linkhub.models.workspace import Workspace, WorkspaceUser
from linkhub.services.imports.types import NormalizedLink

logger = get_logger('imports.store')


@dataclass
class SampleLink:
    domain: str
    key: str
    created_at: datetime


@dataclass
class WorkspaceImportSummary:
    name: str
    slug: str
    owner_email: str | None
    links: list[SampleLink] = field(default_factory=list)


class LinkImportStore:
    def __init__(self, db: Session) -> None:
        self.db = db

    def find_existing_short_links(self, short_links: list[str]) -> set[str]:
        if not short_links:
            return set()
        rows = self.db.query(Link.short_link).filter(Link.short_link.in_(set(short_links))).all()
        return {row[0] for row in rows}

    def bulk_create_links(self, links: list[NormalizedLink]) -> int:
        rows: list[Link] = []
        tag_rows: list[dict] = []
        seen: set[str] = set()

        for item in links:
            if item.short_link in seen:
                logger.warning('Duplicate short link in import batch, keeping first: %s', item.short_link)
                continue
            seen.add(item.short_link)

            link_id = uuid.uuid4()
            rows.append(
                Link(
                    id=link_id,
                    workspace_id=item.workspace_id,
                    user_id=item.user_id,
                    folder_id=item.folder_id,
                    domain=item.domain,
                    key=item.key,
                    url=item.url,
                    short_link=item.short_link,
                    title=item.title,
                    archived=item.archived,
                    created_at=item.created_at,
                )
            )
            # unmapped tag names arrive as None
            for tag_id in dict.fromkeys(tag for tag in item.tag_ids if tag):
                tag_rows.append({'link_id': link_id, 'tag_id': uuid.UUID(str(tag_id))})

        if not rows:
            return 0

        self.db.add_all(rows)
        self.db.flush()
        if tag_rows:
            self.db.execute(link_tags.insert(), tag_rows)
        self.db.commit()
        return len(rows)

    def ensure_tags(self, workspace_id: uuid.UUID, names: list[str]) -> dict[str, str]:
        wanted = list(dict.fromkeys(name.strip() for name in names if name and name.strip()))
        if not wanted:
            return {}

        existing = self.db.query(Tag).filter(Tag.workspace_id == workspace_id, Tag.name.in_(wanted)).all()
        by_name = {tag.name: tag for tag in existing}
        for name in wanted:
            if name not in by_name:
                tag = Tag(id=uuid.uuid4(), workspace_id=workspace_id, name=name)
                self.db.add(tag)
                by_name[name] = tag

        self.db.commit()
        return {name: str(tag.id) for name, tag in by_name.items()}

    def delete_unused_tags(self, workspace_id: uuid.UUID) -> int:
        unused = [
            row[0]
            for row in self.db.query(Tag.id).filter(Tag.workspace_id == workspace_id, ~Tag.links.any()).all()
        ]
        if not unused:
            return 0

        self.db.query(Tag).filter(Tag.id.in_(unused)).delete(synchronize_session=False)
        self.db.commit()
        return len(unused)

    def get_import_summary(self, workspace_id: uuid.UUID, domains: list[str], limit: int = 5) -> WorkspaceImportSummary | None:
        workspace = self.db.query(Workspace).filter(Workspace.id == workspace_id).first()
        if not workspace:
            return None

        owner = (
            self.db.query(User.email)
            .join(WorkspaceUser, WorkspaceUser.user_id == User.id)
            .filter(WorkspaceUser.workspace_id == workspace_id, WorkspaceUser.role == WorkspaceRole.OWNER)
            .order_by(WorkspaceUser.created_at.asc())
            .first()
        )
        recent = (
            self.db.query(Link)
            .filter(Link.workspace_id == workspace_id, Link.domain.in_(list(domains)))
            .order_by(Link.created_at.desc())
            .limit(limit)
            .all()
        )
        return WorkspaceImportSummary(
            name=workspace.name,
            slug=workspace.slug,
            owner_email=owner[0] if owner else None,
            links=[SampleLink(domain=link.domain, key=link.key, created_at=link.created_at) for link in recent],
        )
