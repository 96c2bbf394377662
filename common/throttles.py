from rest_framework.settings import api_settings
from rest_framework.throttling import ScopedRateThrottle

# 기본 throttle + 뷰에 throttle_scope = "strict"가 지정된 경우의 추가 제한
STRICT_THROTTLES = list(api_settings.DEFAULT_THROTTLE_CLASSES) + [ScopedRateThrottle]


class StrictWriteThrottleMixin:
    """POST 요청에만 strict 제한을 추가로 적용 (조회는 기본 제한만)"""
    throttle_scope = "strict"
    strict_methods = ("POST",)

    def get_throttles(self):
        if self.request.method in self.strict_methods:
            return [throttle() for throttle in STRICT_THROTTLES]
        return super().get_throttles()
