from linkhub.core.logging import get_logger
from linkhub.services.local_runner import run_in_background
from linkhub.tasks.celery_app import celery_app
from linkhub.tasks.import_tasks import import_bitly_links_task, run_local_import

logger = get_logger('task_dispatcher')


def celery_worker_available(timeout: float = 0.8) -> bool:
    """Best-effort check for at least one reachable Celery worker."""
    try:
        inspector = celery_app.control.inspect(timeout=timeout)
        if not inspector:
            return False
        return bool(inspector.ping())
    except Exception:
        return False


def dispatch_bitly_import(payload: dict) -> tuple[str, str | None]:
    """Start an import on Celery, or in a local thread chain when no worker answers.

    Returns the dispatch mode and the Celery task id, if any.
    """
    if celery_worker_available():
        task = import_bitly_links_task.delay(payload)
        logger.info('Bitly import queued for workspace %s (task=%s)', payload['workspace_id'], task.id)
        return 'celery', task.id

    logger.warning('No Celery worker detected; running Bitly import in local background worker.')
    run_in_background(lambda: run_local_import(payload), name=f'linkhub-bitly-import-{payload["workspace_id"]}')
    return 'local_background', None
