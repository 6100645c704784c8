import re
import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Bitly sends offsets without a colon, e.g. 2021-04-08T11:37:10+0000
BITLY_OFFSET_RE = re.compile(r'([+-]\d{2})(\d{2})$')


class BitlyLinkRecord(BaseModel):
    model_config = ConfigDict(extra='ignore')

    id: str | None = None
    long_url: str | None = None
    title: str | None = None
    archived: bool = False
    created_at: datetime | None = None
    custom_bitlinks: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)

    @field_validator('created_at', mode='before')
    @classmethod
    def normalize_offset(cls, value):
        if isinstance(value, str):
            return BITLY_OFFSET_RE.sub(r'\1:\2', value.strip())
        return value

    @field_validator('archived', mode='before')
    @classmethod
    def none_as_false(cls, value):
        return False if value is None else value

    @field_validator('custom_bitlinks', mode='before')
    @classmethod
    def none_as_empty(cls, value):
        return [] if value is None else value

    @field_validator('tags', mode='before')
    @classmethod
    def tag_names(cls, value):
        if value is None:
            return []
        if isinstance(value, list):
            return [str(tag) for tag in value if tag is not None and tag != '']
        return value


class BitlyPagination(BaseModel):
    model_config = ConfigDict(extra='ignore')

    search_after: str = ''


class BitlinksPage(BaseModel):
    model_config = ConfigDict(extra='ignore')

    # records stay raw so one malformed link cannot fail the whole page
    links: list[dict] = Field(default_factory=list)
    pagination: BitlyPagination

    @property
    def next_cursor(self) -> str:
        return self.pagination.search_after


class BitlyImportCreate(BaseModel):
    api_key: str = Field(min_length=1)
    bitly_group: str = Field(min_length=1)
    domains: list[str] = Field(min_length=1)
    user_id: uuid.UUID
    folder_id: uuid.UUID | None = None
    import_tags: bool = False

    @field_validator('domains')
    @classmethod
    def normalize_domains(cls, value: list[str]) -> list[str]:
        normalized = []
        for domain in value:
            item = domain.strip().lower()
            if item and item not in normalized:
                normalized.append(item)
        if not normalized:
            raise ValueError('At least one domain is required')
        return normalized


class BitlyImportMessage(BaseModel):
    """Continuation payload. Secrets stay in the flag store, never on the queue."""

    workspace_id: uuid.UUID
    user_id: uuid.UUID
    bitly_group: str
    domains: list[str]
    folder_id: uuid.UUID | None = None
    import_tags: bool = False
    search_after: str | None = None
    count: int = 0


class BitlyImportStarted(BaseModel):
    status: str
    mode: str
    task_id: str | None = None


class BitlyImportStatus(BaseModel):
    workspace_id: uuid.UUID
    importing: bool
