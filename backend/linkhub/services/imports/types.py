import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum


@dataclass(frozen=True)
class ImportRequest:
    workspace_id: uuid.UUID
    user_id: uuid.UUID
    bitly_group: str
    domains: tuple[str, ...]
    api_key: str = field(repr=False)
    folder_id: uuid.UUID | None = None
    tag_mapping: dict[str, str] | None = None
    search_after: str | None = None
    count: int = 0

    def next_page(self, search_after: str, count: int) -> 'ImportRequest':
        return replace(self, search_after=search_after, count=count)


@dataclass(frozen=True)
class NormalizedLink:
    workspace_id: uuid.UUID
    user_id: uuid.UUID
    domain: str
    key: str
    url: str
    short_link: str
    title: str | None
    archived: bool
    created_at: datetime
    tag_ids: tuple[str | None, ...] = ()
    folder_id: uuid.UUID | None = None


class SkipReason(str, Enum):
    INVALID_RECORD = 'invalid_record'
    MISSING_FIELDS = 'missing_fields'
    INVALID_ID = 'invalid_id'
    FOREIGN_DOMAIN = 'foreign_domain'
    EMPTY_URL = 'empty_url'
    INVALID_ALIAS = 'invalid_alias'
    FOREIGN_ALIAS_DOMAIN = 'foreign_alias_domain'


@dataclass(frozen=True)
class SkippedRecord:
    record_id: str | None
    reason: SkipReason
    detail: str | None = None


@dataclass
class TransformResult:
    links: list[NormalizedLink] = field(default_factory=list)
    skipped: list[SkippedRecord] = field(default_factory=list)


class ImportState(str, Enum):
    HAS_MORE = 'has_more'
    DONE = 'done'


@dataclass
class ImportPageResult:
    state: ImportState
    count: int
    imported: int
    created: int
    skipped: int
    next_cursor: str
