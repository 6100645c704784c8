import smtplib

import httpx
import redis
from celery import states
from celery.exceptions import Ignore
from sqlalchemy.exc import SQLAlchemyError

from linkhub.core.config import settings
from linkhub.core.logging import get_logger
from linkhub.db.session import SessionLocal
from linkhub.models.enums import ImportProvider
from linkhub.schemas.imports import BitlyImportMessage
from linkhub.services.imports.bitly_client import BitlyClient
from linkhub.services.imports.flags import ImportFlagStore
from linkhub.services.imports.importer import BitlyImporter
from linkhub.services.imports.queue import CeleryImportQueue, LocalImportQueue
from linkhub.services.imports.store import LinkImportStore
from linkhub.services.imports.types import ImportRequest
from linkhub.services.notifications.email_sender import EmailNotifier
from linkhub.tasks.celery_app import IMPORT_BITLY_TASK, celery_app

logger = get_logger('tasks.imports')

# redelivered by Celery; per-record problems never reach this level
UPSTREAM_ERRORS = (httpx.HTTPError, SQLAlchemyError, smtplib.SMTPException, redis.RedisError)


def _safe_update_state(task, state: str, meta: dict) -> None:
    if not getattr(task.request, 'id', None):
        return
    task.update_state(state=state, meta=meta)


def build_import_request(message: BitlyImportMessage, flags: ImportFlagStore) -> ImportRequest | None:
    provider = ImportProvider.BITLY.value
    api_key = flags.get_api_key(provider, message.workspace_id)
    if not api_key:
        return None

    tag_mapping = flags.get_tag_mapping(provider, message.workspace_id) if message.import_tags else None
    return ImportRequest(
        workspace_id=message.workspace_id,
        user_id=message.user_id,
        bitly_group=message.bitly_group,
        domains=tuple(message.domains),
        api_key=api_key,
        folder_id=message.folder_id,
        tag_mapping=tag_mapping,
        search_after=message.search_after,
        count=message.count,
    )


@celery_app.task(
    bind=True,
    name=IMPORT_BITLY_TASK,
    autoretry_for=UPSTREAM_ERRORS,
    retry_backoff=True,
    retry_backoff_max=600,
    max_retries=settings.import_task_max_retries,
)
def import_bitly_links_task(self, payload: dict, local: bool = False):
    message = BitlyImportMessage.model_validate(payload)
    db = SessionLocal()
    try:
        flags = ImportFlagStore.from_url()
        request = build_import_request(message, flags)
        if request is None:
            logger.warning('No active Bitly import for workspace %s, dropping page', message.workspace_id)
            _safe_update_state(self, state=states.FAILURE, meta={'reason': 'Import is not active'})
            raise Ignore()

        importer = BitlyImporter(
            client=BitlyClient(request.api_key),
            store=LinkImportStore(db),
            queue=LocalImportQueue(run_local_import) if local else CeleryImportQueue(),
            flags=flags,
            notifier=EmailNotifier(),
        )
        result = importer.run(request)
        return {
            'ok': True,
            'workspace_id': str(request.workspace_id),
            'state': result.state.value,
            'count': result.count,
            'created': result.created,
            'next_cursor': result.next_cursor,
        }
    except UPSTREAM_ERRORS:
        db.rollback()
        logger.exception('Bitly import page failed for workspace %s (cursor=%s)', message.workspace_id, message.search_after)
        raise
    finally:
        db.close()


def run_local_import(payload: dict):
    """Run one import page in-process; its continuation stays in-process too."""
    return import_bitly_links_task.run(payload, local=True)
