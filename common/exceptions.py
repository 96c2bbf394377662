import logging

from rest_framework import status
from rest_framework.exceptions import APIException, Throttled, ValidationError
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class CapabilityRequired(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "권한이 없습니다."
    default_code = "capability_required"


class InvalidTransition(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "허용되지 않는 상태 변경입니다."
    default_code = "invalid_transition"


class AmountMismatch(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "결제 금액이 주문 금액과 일치하지 않습니다."
    default_code = "amount_mismatch"


class PaymentAlreadyProcessed(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "이미 처리된 결제입니다."
    default_code = "payment_already_processed"


class PaymentProviderError(APIException):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "결제 승인 처리 중 오류가 발생했습니다."
    default_code = "payment_provider_error"


class InvalidPasscodeFormat(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "4자리 비밀번호를 입력해주세요."
    default_code = "invalid_passcode_format"


class InvalidPasscode(APIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "올바른 비밀번호를 입력해주세요."
    default_code = "invalid_passcode"


class PasscodeLocked(Throttled):
    default_detail = "시도 횟수를 초과했습니다. 잠시 후 다시 시도해주세요."
    default_code = "passcode_locked"
    extra_detail_singular = "{wait}초 후 다시 시도할 수 있습니다."
    extra_detail_plural = "{wait}초 후 다시 시도할 수 있습니다."


def envelope_exception_handler(exc, context):
    """
    DRF 기본 예외 처리 결과를 {"success": False, "message", "code"} 형태로 감싼다.
    ValidationError는 필드별 오류를 errors에 그대로 담는다.
    """
    response = exception_handler(exc, context)
    if response is None:
        view = context.get("view")
        logger.exception("Unhandled error in %s", view.__class__.__name__ if view else "view")
        return None

    data = response.data
    if isinstance(exc, ValidationError):
        response.data = {
            "success": False,
            "message": "입력 정보를 확인해주세요.",
            "code": "invalid",
            "errors": data,
        }
        return response

    detail = data.get("detail") if isinstance(data, dict) else None
    response.data = {
        "success": False,
        "message": str(detail) if detail is not None else "요청을 처리할 수 없습니다.",
        "code": getattr(detail, "code", None) or "error",
    }
    return response
