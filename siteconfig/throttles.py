from django.conf import settings
from django.core.cache import cache as default_cache
from rest_framework.throttling import BaseThrottle

from common.exceptions import PasscodeLocked


class PasscodeLockout:
    """
    passcode 검증 실패를 종류별로 세어 연속 실패가 한도를 넘으면 일정 시간 잠근다.
    실패는 클라이언트 주소와 세션 키(있으면) 양쪽에 기록하고, 어느 한쪽이라도 잠기면 거절한다.
    성공하면 카운터를 초기화한다.
    """

    cache_format = "passcode-failures:%(kind)s:%(ident)s"

    def __init__(self, max_failures=None, lockout_seconds=None, cache=None):
        self.max_failures = max_failures or settings.PASSCODE_MAX_FAILURES
        self.lockout_seconds = lockout_seconds or settings.PASSCODE_LOCKOUT_SECONDS
        self.cache = cache or default_cache

    def get_ident(self, request) -> str:
        # NUM_PROXIES 설정을 따르므로 임의의 X-Forwarded-For 값으로 바꿀 수 없다
        return BaseThrottle().get_ident(request)

    def get_idents(self, request) -> list:
        idents = [f"addr:{self.get_ident(request)}"]
        session_key = request.session.session_key
        if session_key:
            idents.append(f"session:{session_key}")
        return idents

    def get_cache_key(self, ident, kind) -> str:
        return self.cache_format % {"kind": kind, "ident": ident}

    def check(self, idents, kind) -> None:
        keys = [self.get_cache_key(ident, kind) for ident in idents]
        counts = self.cache.get_many(keys)
        if any(count >= self.max_failures for count in counts.values()):
            raise PasscodeLocked(wait=self.lockout_seconds)

    def register_failure(self, idents, kind) -> int:
        return max(self._increment(self.get_cache_key(ident, kind)) for ident in idents)

    def reset(self, idents, kind) -> None:
        self.cache.delete_many([self.get_cache_key(ident, kind) for ident in idents])

    def _increment(self, key) -> int:
        self.cache.add(key, 0, self.lockout_seconds)
        try:
            failures = self.cache.incr(key)
        except ValueError:
            # add와 incr 사이에 만료된 경우
            failures = 1
            self.cache.set(key, failures, self.lockout_seconds)

        if failures >= self.max_failures:
            # 잠금은 마지막 실패 시점부터 lockout_seconds 동안 유지
            self.cache.set(key, failures, self.lockout_seconds)
        return failures
