import enum

from django.core.exceptions import ImproperlyConfigured
from rest_framework.exceptions import NotAuthenticated, PermissionDenied
from rest_framework.permissions import BasePermission

from .models import User


class AccessTier(enum.Enum):
    ANONYMOUS = "anonymous"
    USER = "user"
    ADMIN = "admin"


_ROLE_TIERS = {
    User.Role.ADMIN: AccessTier.ADMIN,
    User.Role.USER: AccessTier.USER,
}

# Role이 추가되면 여기서 매핑을 강제
if set(_ROLE_TIERS) != set(User.Role):
    raise ImproperlyConfigured("Every User.Role must map to an AccessTier")


def resolve_tier(user) -> AccessTier:
    if user is None or not user.is_authenticated:
        return AccessTier.ANONYMOUS
    # 알 수 없는 role 문자열은 ValueError로 그대로 실패시킨다
    return _ROLE_TIERS[User.Role(user.role)]


class IsAuthenticatedIdentity(BasePermission):
    """세션에 로그인 정보가 있어야 통과 (401)"""

    def has_permission(self, request, view):
        if resolve_tier(request.user) is AccessTier.ANONYMOUS:
            raise NotAuthenticated("로그인이 필요합니다.")
        return True


class IsAdminRole(BasePermission):
    """관리자만 통과. 미로그인은 401, 로그인했지만 관리자가 아니면 403"""

    def has_permission(self, request, view):
        tier = resolve_tier(request.user)
        if tier is AccessTier.ANONYMOUS:
            raise NotAuthenticated("로그인이 필요합니다.")
        if tier is AccessTier.USER:
            raise PermissionDenied("관리자 권한이 필요합니다.")
        if tier is AccessTier.ADMIN:
            return True
        raise ImproperlyConfigured(f"Unhandled access tier: {tier}")
