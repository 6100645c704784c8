from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', case_sensitive=False, extra='ignore')

    app_name: str = 'Linkhub'
    api_v1_prefix: str = '/api'
    debug: bool = False
    log_level: str = 'INFO'

    database_url: str = 'postgresql+psycopg://linkhub:password@db:5432/linkhub'
    redis_url: str = 'redis://redis:6379/0'
    request_timeout_seconds: int = 30

    bitly_api_base_url: str = 'https://api-ssl.bitly.com/v4'
    # /groups/{group}/bitlinks allows 150 requests per minute
    import_page_size: int = Field(default=100, ge=1, le=100)
    import_page_delay_seconds: float = 0.5
    import_sample_links: int = 5
    import_task_max_retries: int = 3

    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_username: str | None = None
    smtp_password: str | None = None
    email_from: str = 'Linkhub <system@linkhub.app>'


settings = Settings()
