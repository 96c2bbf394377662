import logging

from rest_framework.throttling import BaseThrottle

from .models import AuditLog

logger = logging.getLogger(__name__)


def record_audit(request, action, entity_type, entity_id, old=None, new=None) -> AuditLog:
    """관리자 변경 작업을 감사 로그에 남긴다. 호출한 트랜잭션 안에서 함께 저장된다."""
    user = request.user if request.user.is_authenticated else None

    entry = AuditLog.objects.create(
        user=user,
        action=action,
        entity_type=entity_type,
        entity_id=str(entity_id),
        old_values=old,
        new_values=new,
        ip_address=BaseThrottle().get_ident(request) or None,
        user_agent=request.META.get("HTTP_USER_AGENT", "")[:255],
    )
    logger.info("Audit: %s %s#%s by user %s", action, entity_type, entity_id, user.pk if user else None)
    return entry
