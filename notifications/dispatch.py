import logging
from concurrent.futures import ThreadPoolExecutor

from django.conf import settings
from django.db import connections, transaction

logger = logging.getLogger(__name__)

_executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="notify")


def _run(task, *args):
    # 알림 실패는 이미 커밋된 요청 결과에 영향을 주지 않는다
    try:
        task(*args)
    except Exception:
        logger.exception("Notification task %s failed", task.__name__)


def _run_in_thread(task, *args):
    try:
        _run(task, *args)
    finally:
        connections.close_all()


def dispatch(task, *args):
    if settings.NOTIFICATIONS_ASYNC:
        _executor.submit(_run_in_thread, task, *args)
    else:
        _run(task, *args)


def notify_after_commit(task, *args):
    """현재 트랜잭션이 커밋된 뒤에 알림 작업을 실행한다. 롤백되면 실행하지 않는다."""
    transaction.on_commit(lambda: dispatch(task, *args))
