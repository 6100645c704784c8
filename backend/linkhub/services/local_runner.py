import threading
from collections.abc import Callable

from linkhub.core.logging import get_logger

logger = get_logger('local_runner')


def run_in_background(func: Callable[[], object], name: str = 'linkhub-local-task') -> None:
    """Run ``func`` on a daemon thread. Failures are logged since no worker will retry them."""

    def _target() -> None:
        try:
            func()
        except Exception:
            logger.exception('Local background job %s failed', name)

    thread = threading.Thread(target=_target, name=name, daemon=True)
    thread.start()
