import logging

from django.contrib.sessions.models import Session
from django.db import models, transaction
from django.utils import timezone

from common.exceptions import CapabilityRequired

logger = logging.getLogger(__name__)

SESSION_KEY = "granted_capabilities"


class Capability(models.TextChoices):
    REVIEW_ACCESS = "review_access", "후기 작성"
    BULK_ACCESS = "bulk_access", "대량 구매"
    MEMBER_ACCESS = "member_access", "회원가 구매"


def granted(session) -> frozenset:
    return frozenset(session.get(SESSION_KEY, ()))


def has(session, capability) -> bool:
    return Capability(capability).value in granted(session)


def _update_stored(session, change):
    """
    세션 저장소의 행을 잠근 상태에서 저장된 capability 집합에 change를 적용한다.
    (변경 전, 변경 후) 집합을 돌려주고, 저장된 행이 없으면 None.
    """
    with transaction.atomic():
        row = (
            Session.objects.select_for_update()
            .filter(session_key=session.session_key, expire_date__gt=timezone.now())
            .first()
        )
        if row is None:
            return None

        data = row.get_decoded()
        before = frozenset(data.get(SESSION_KEY, ()))
        after = frozenset(change(before))
        if after != before:
            data[SESSION_KEY] = sorted(after)
            row.session_data = session.encode(data)
            row.save(update_fields=["session_data"])

    # 요청 객체의 세션도 저장소와 맞춘다
    session[SESSION_KEY] = sorted(after)
    return before, after


def grant(session, capability) -> None:
    value = Capability(capability).value

    # 이미 저장된 세션이면 잠근 행을 기준으로 추가 (그 사이 소비된 capability를 되살리지 않음)
    if session.session_key and _update_stored(session, lambda current: current | {value}) is not None:
        return

    session[SESSION_KEY] = sorted(granted(session) | {value})
    # 익명 사용자라도 세션 행이 있어야 이후 consume 시 잠글 수 있다
    if not session.session_key:
        session.save()


def require(session, capability) -> None:
    """capability가 없으면 CapabilityRequired(403). 소비는 하지 않는다."""
    if not has(session, capability):
        raise CapabilityRequired()


def consume(session, capability) -> bool:
    """
    세션 저장소의 행을 잠근 상태에서 capability 존재 여부를 확인하고 제거한다.
    같은 세션으로 동시에 들어온 요청 중 하나만 True를 받는다.
    """
    value = Capability(capability).value
    if not session.session_key:
        return False

    result = _update_stored(session, lambda current: current - {value})
    if result is None:
        return False

    present = value in result[0]
    if present:
        logger.info("Capability %s consumed", value)
    return present
