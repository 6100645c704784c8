from collections.abc import Callable

from linkhub.core.logging import get_logger
from linkhub.schemas.imports import BitlyImportMessage
from linkhub.services.imports.types import ImportRequest
from linkhub.services.local_runner import run_in_background
from linkhub.tasks.celery_app import IMPORT_BITLY_TASK, celery_app

logger = get_logger('imports.queue')


def build_import_message(request: ImportRequest) -> BitlyImportMessage:
    return BitlyImportMessage(
        workspace_id=request.workspace_id,
        user_id=request.user_id,
        bitly_group=request.bitly_group,
        domains=list(request.domains),
        folder_id=request.folder_id,
        import_tags=request.tag_mapping is not None,
        search_after=request.search_after,
        count=request.count,
    )


class CeleryImportQueue:
    def publish(self, request: ImportRequest) -> str:
        message = build_import_message(request)
        result = celery_app.send_task(IMPORT_BITLY_TASK, kwargs={'payload': message.model_dump(mode='json')})
        logger.info(
            'Queued next Bitly page for workspace %s (cursor=%s, count=%s, task=%s)',
            request.workspace_id,
            request.search_after,
            request.count,
            result.id,
        )
        return result.id


class LocalImportQueue:
    """Runs each continuation on a local background thread instead of Celery."""

    def __init__(self, handler: Callable[[dict], object]) -> None:
        self.handler = handler

    def publish(self, request: ImportRequest) -> None:
        payload = build_import_message(request).model_dump(mode='json')
        logger.info(
            'Running next Bitly page locally for workspace %s (cursor=%s, count=%s)',
            request.workspace_id,
            request.search_after,
            request.count,
        )
        run_in_background(lambda: self.handler(payload), name=f'linkhub-bitly-import-{request.workspace_id}')
