import logging
import re

from django.contrib.auth.hashers import check_password
from django.db import models

from common.exceptions import InvalidPasscode, InvalidPasscodeFormat
from . import capabilities
from .capabilities import Capability
from .services import site_settings
from .throttles import PasscodeLockout

logger = logging.getLogger(__name__)

PASSCODE_PATTERN = re.compile(r"[0-9]{4}")


class PasscodeKind(models.TextChoices):
    REVIEW = "review", "후기 작성"
    BULK = "bulk", "대량 구매"
    MEMBER = "member", "회원가 구매"


# 종류별 해시 저장 필드 / 성공 시 부여할 capability
HASH_FIELDS = {
    PasscodeKind.REVIEW: "review_passcode",
    PasscodeKind.BULK: "bulk_purchase_passcode",
    PasscodeKind.MEMBER: "member_discount_code",
}
GRANTS = {
    PasscodeKind.REVIEW: Capability.REVIEW_ACCESS,
    PasscodeKind.BULK: Capability.BULK_ACCESS,
    PasscodeKind.MEMBER: Capability.MEMBER_ACCESS,
}


def is_valid_format(candidate) -> bool:
    return isinstance(candidate, str) and PASSCODE_PATTERN.fullmatch(candidate) is not None


def validate_format(candidate) -> str:
    if not is_valid_format(candidate):
        raise InvalidPasscodeFormat()
    return candidate


class PasscodeGate:
    def __init__(self, settings_service=site_settings, lockout=None):
        self.settings_service = settings_service
        self.lockout = lockout or PasscodeLockout()

    def verify(self, kind, candidate) -> bool:
        """형식 검사를 먼저 하고, 통과한 경우에만 저장된 해시와 비교한다."""
        kind = PasscodeKind(kind)
        validate_format(candidate)

        # 관리자가 방금 바꾼 값도 반영되도록 매번 다시 읽음
        stored = getattr(self.settings_service.get(refresh=True), HASH_FIELDS[kind])
        return check_password(candidate, stored)

    def unlock(self, request, kind, candidate) -> Capability:
        """
        passcode가 맞으면 요청 세션에 해당 capability를 부여하고 반환한다.
        형식 오류는 InvalidPasscodeFormat(400), 불일치는 InvalidPasscode(401),
        연속 실패로 잠긴 경우 PasscodeLocked(429).
        """
        kind = PasscodeKind(kind)
        validate_format(candidate)

        idents = self.lockout.get_idents(request)
        self.lockout.check(idents, kind.value)

        if not self.verify(kind, candidate):
            failures = self.lockout.register_failure(idents, kind.value)
            logger.info("Passcode mismatch (kind=%s, ident=%s, failures=%d)", kind.value, idents[0], failures)
            raise InvalidPasscode()

        self.lockout.reset(idents, kind.value)
        capability = GRANTS[kind]
        capabilities.grant(request.session, capability)
        return capability


passcode_gate = PasscodeGate()
