from celery import Celery

from linkhub.core.config import settings

IMPORT_BITLY_TASK = 'linkhub.tasks.import_bitly_links'

celery_app = Celery(
    'linkhub',
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=['linkhub.tasks.import_tasks'],
)

celery_app.conf.update(
    task_track_started=True,
    task_serializer='json',
    result_serializer='json',
    accept_content=['json'],
    timezone='UTC',
    enable_utc=True,
)
