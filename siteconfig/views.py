import logging

from rest_framework.views import APIView

from accounts.guards import IsAdminRole
from common.responses import success_response
from common.throttles import STRICT_THROTTLES
from dashboard.audit import record_audit
from .models import PASSCODE_FIELDS
from .passcodes import passcode_gate
from .serializers import PublicSiteSettingsSerializer, SiteSettingsSerializer
from .services import site_settings

logger = logging.getLogger(__name__)


class PasscodeVerifyView(APIView):
    """
    passcode 검증 뷰의 공통 동작.
    하위 클래스는 passcode_kind와 success_message만 지정한다.
    """
    throttle_classes = STRICT_THROTTLES
    throttle_scope = "strict"

    passcode_kind = None
    success_message = "인증되었습니다."
    gate = passcode_gate

    def post(self, request):
        capability = self.gate.unlock(request, self.passcode_kind, request.data.get("passcode"))
        return success_response(self.success_message, capability=capability.value)


class PublicSettingsView(APIView):

    def get(self, request):
        return success_response(
            "ok",
            settings=PublicSiteSettingsSerializer(site_settings.get(refresh=True)).data,
        )


class SiteSettingsView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request):
        instance = site_settings.get(refresh=True)
        return success_response("ok", settings=SiteSettingsSerializer(instance).data)

    def patch(self, request):
        instance = site_settings.get(refresh=True)
        before = SiteSettingsSerializer(instance).data

        serializer = SiteSettingsSerializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        changed_passcodes = [field for field in PASSCODE_FIELDS if field in serializer.validated_data]
        serializer.save()
        site_settings.invalidate()

        after = dict(serializer.data)
        if changed_passcodes:
            after["passcodes_changed"] = changed_passcodes
        record_audit(request, "settings.update", "site_settings", instance.pk, old=dict(before), new=after)
        logger.info("Site settings updated by user %s", request.user.pk)

        return success_response("설정이 저장되었습니다.", settings=serializer.data)
