import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from linkhub.core.config import settings
from linkhub.core.logging import get_logger
from linkhub.schemas.imports import BitlinksPage

logger = get_logger('imports.bitly_client')


class BitlyClient:
    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.bitly_api_base_url).rstrip('/')
        self.timeout = timeout if timeout is not None else settings.request_timeout_seconds
        self.transport = transport
        self.headers = {
            'Content-Type': 'application/json',
            'Authorization': f'Bearer {api_key}',
        }

    @retry(
        retry=retry_if_exception_type((httpx.RequestError, httpx.TimeoutException)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        reraise=True,
    )
    def _get(self, path: str, params: dict | None = None) -> dict:
        with httpx.Client(base_url=self.base_url, timeout=self.timeout, transport=self.transport) as client:
            response = client.get(path, params=params, headers=self.headers)
            response.raise_for_status()
            return response.json()

    def fetch_links_page(self, group_id: str, search_after: str | None = None, size: int | None = None) -> BitlinksPage:
        params: dict[str, str | int] = {'size': size or settings.import_page_size}
        if search_after:
            params['search_after'] = search_after

        payload = self._get(f'/groups/{group_id}/bitlinks', params=params)
        page = BitlinksPage.model_validate(payload)
        logger.debug('Fetched %s bitlinks for group %s', len(page.links), group_id)
        return page

    def fetch_group_tags(self, group_id: str) -> list[str]:
        payload = self._get(f'/groups/{group_id}/tags')
        return [str(tag) for tag in payload.get('tags') or [] if tag]
