import time
from collections.abc import Callable

from linkhub.core.config import settings
from linkhub.core.logging import get_logger
from linkhub.models.enums import ImportProvider
from linkhub.services.imports.bitly_client import BitlyClient
from linkhub.services.imports.bitly_transform import transform_page
from linkhub.services.imports.types import ImportPageResult, ImportRequest, ImportState, NormalizedLink
from linkhub.services.notifications.templates import render_links_imported_email

logger = get_logger('imports.bitly')


class BitlyImporter:
    """Imports one page of Bitly links per call and decides what happens next.

    A non-empty ``search_after`` cursor re-queues the import for the next page;
    an empty cursor finalizes it. Collaborators are passed in so the worker task
    wires real Redis/SQL/SMTP/Celery clients and tests pass fakes.
    """

    provider = ImportProvider.BITLY.value
    provider_name = 'Bitly'

    def __init__(
        self,
        client: BitlyClient,
        store,
        queue,
        flags,
        notifier,
        page_size: int | None = None,
        page_delay_seconds: float | None = None,
        sample_size: int | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.client = client
        self.store = store
        self.queue = queue
        self.flags = flags
        self.notifier = notifier
        self.page_size = page_size or settings.import_page_size
        self.page_delay_seconds = settings.import_page_delay_seconds if page_delay_seconds is None else page_delay_seconds
        self.sample_size = sample_size or settings.import_sample_links
        self.sleep = sleep

    def run(self, request: ImportRequest) -> ImportPageResult:
        page = self.client.fetch_links_page(request.bitly_group, request.search_after, self.page_size)
        next_cursor = page.next_cursor

        result = transform_page(page.links, request)
        for skipped in result.skipped:
            logger.info('Skipped %s: %s %s', skipped.record_id, skipped.reason.value, skipped.detail or '')

        created = self.persist_new_links(result.links)
        count = request.count + len(result.links)
        logger.info(
            'Bitly import for workspace %s: imported=%s count=%s next_cursor=%r',
            request.workspace_id,
            len(result.links),
            count,
            next_cursor,
        )

        # stay under the 150 requests/minute limit on /bitlinks
        self.sleep(self.page_delay_seconds)

        if next_cursor == '':
            self.finalize(request, count)
            state = ImportState.DONE
        else:
            self.queue.publish(request.next_page(next_cursor, count))
            state = ImportState.HAS_MORE

        return ImportPageResult(
            state=state,
            count=count,
            imported=len(result.links),
            created=len(created),
            skipped=len(result.skipped),
            next_cursor=next_cursor,
        )

    def persist_new_links(self, links: list[NormalizedLink]) -> list[NormalizedLink]:
        if not links:
            return []

        existing = self.store.find_existing_short_links([link.short_link for link in links])
        to_create = [link for link in links if link.short_link not in existing]
        logger.info(
            'Found %s links that have already been imported, skipping them and creating %s new links...',
            len(links) - len(to_create),
            len(to_create),
        )

        if to_create:
            self.store.bulk_create_links(to_create)
        return to_create

    def finalize(self, request: ImportRequest, count: int) -> int:
        summary = self.store.get_import_summary(request.workspace_id, list(request.domains), self.sample_size)

        deleted = self.store.delete_unused_tags(request.workspace_id)
        if deleted:
            logger.info('Deleted %s unused tags in workspace %s', deleted, request.workspace_id)

        if not summary or not summary.owner_email:
            logger.warning('Workspace %s has no owner email, skipping import notification', request.workspace_id)
            self.flags.clear(self.provider, request.workspace_id)
            return count

        subject, body = render_links_imported_email(
            provider=self.provider_name,
            count=count,
            links=summary.links,
            domains=list(request.domains),
            workspace_name=summary.name,
            workspace_slug=summary.slug,
        )
        self.notifier.send(to_email=summary.owner_email, subject=subject, body=body)
        # last step: a redelivered page still needs the API key
        self.flags.clear(self.provider, request.workspace_id)
        logger.info('Bitly import for workspace %s finished with %s links', request.workspace_id, count)
        return count
