import uuid

import redis

from linkhub.core.config import settings


class ImportFlagStore:
    """Per-workspace import state kept in Redis.

    ``import:{provider}:{workspace}`` holds the provider API key while an import
    runs, ``import:{provider}:{workspace}:tags`` the tag name -> tag id mapping.
    """

    def __init__(self, client: redis.Redis) -> None:
        self.client = client

    @classmethod
    def from_url(cls, url: str | None = None) -> 'ImportFlagStore':
        return cls(redis.Redis.from_url(url or settings.redis_url, decode_responses=True))

    @staticmethod
    def key(provider: str, workspace_id: uuid.UUID | str) -> str:
        return f'import:{provider}:{workspace_id}'

    @classmethod
    def tags_key(cls, provider: str, workspace_id: uuid.UUID | str) -> str:
        return f'{cls.key(provider, workspace_id)}:tags'

    def save_api_key(self, provider: str, workspace_id: uuid.UUID | str, api_key: str) -> None:
        self.client.set(self.key(provider, workspace_id), api_key)

    def get_api_key(self, provider: str, workspace_id: uuid.UUID | str) -> str | None:
        return self.client.get(self.key(provider, workspace_id))

    def is_importing(self, provider: str, workspace_id: uuid.UUID | str) -> bool:
        return bool(self.client.exists(self.key(provider, workspace_id)))

    def save_tag_mapping(self, provider: str, workspace_id: uuid.UUID | str, mapping: dict[str, str]) -> None:
        if mapping:
            self.client.hset(self.tags_key(provider, workspace_id), mapping=mapping)

    def get_tag_mapping(self, provider: str, workspace_id: uuid.UUID | str) -> dict[str, str]:
        return dict(self.client.hgetall(self.tags_key(provider, workspace_id)) or {})

    def clear(self, provider: str, workspace_id: uuid.UUID | str) -> None:
        self.client.delete(self.key(provider, workspace_id))
        self.client.delete(self.tags_key(provider, workspace_id))
