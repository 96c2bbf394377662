import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed, NotFound
from rest_framework.permissions import AllowAny
from rest_framework.views import APIView

from accounts.guards import IsAdminRole
from common.responses import success_response
from common.throttles import STRICT_THROTTLES, StrictWriteThrottleMixin
from dashboard.audit import record_audit
from notifications import events
from notifications.dispatch import notify_after_commit
from siteconfig import capabilities
from siteconfig.capabilities import Capability
from siteconfig.passcodes import passcode_gate
from .models import Application, normalize_phone
from .serializers import (
    ApplicationCreateSerializer,
    ApplicationLookupSerializer,
    ApplicationReceiptSerializer,
    ApplicationSerializer,
    ApplicationStatusUpdateSerializer,
    AttendeeVerifySerializer,
)

logger = logging.getLogger(__name__)

User = get_user_model()

ATTENDEE_FAILED_MESSAGE = "세미나 참석자 인증에 실패했습니다."


class ApplicationListCreateView(StrictWriteThrottleMixin, APIView):

    def get_permissions(self):
        if self.request.method == "GET":
            return [IsAdminRole()]
        return [AllowAny()]

    def get(self, request):
        queryset = Application.objects.all()

        status_filter = request.query_params.get("status")
        if status_filter:
            queryset = queryset.filter(status=status_filter)

        return success_response("ok", applications=ApplicationSerializer(queryset, many=True).data)

    def post(self, request):
        serializer = ApplicationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        with transaction.atomic():
            application = serializer.save()
            notify_after_commit(events.application_submitted, application.pk)

        logger.info("Seminar application %s submitted", application.pk)
        return success_response(
            "세미나 신청이 접수되었습니다.",
            status_code=status.HTTP_201_CREATED,
            application=ApplicationReceiptSerializer(application).data,
        )


class ApplicationStatusUpdateView(APIView):
    permission_classes = [IsAdminRole]

    def patch(self, request, pk):
        serializer = ApplicationStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        new_status = serializer.validated_data["status"]

        with transaction.atomic():
            application = get_object_or_404(Application.objects.select_for_update(), pk=pk)
            previous_status = application.status

            application.transition_to(new_status)
            update_fields = ["status", "updated"]
            if "admin_memo" in serializer.validated_data:
                application.admin_memo = serializer.validated_data["admin_memo"]
                update_fields.append("admin_memo")
            application.save(update_fields=update_fields)

            record_audit(
                request, "application.status", "application", application.pk,
                old={"status": previous_status},
                new={"status": application.status},
            )
            notify_after_commit(events.application_status_changed, application.pk, previous_status)

        return success_response(
            "신청 상태가 업데이트되었습니다.",
            application=ApplicationSerializer(application).data,
        )


class ApplicationLookupView(APIView):
    """신청자가 이름 + 연락처로 자신의 신청 상태를 조회 (읽기 전용)"""
    throttle_classes = STRICT_THROTTLES
    throttle_scope = "strict"

    def post(self, request):
        serializer = ApplicationLookupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        phone = normalize_phone(serializer.validated_data["phone"])
        candidates = Application.objects.filter(name=serializer.validated_data["name"].strip())
        application = next((a for a in candidates if normalize_phone(a.phone) == phone), None)

        if application is None or not phone:
            raise NotFound("신청 내역을 찾을 수 없습니다.")

        return success_response("ok", application=ApplicationReceiptSerializer(application).data)


class AttendeeVerifyView(APIView):
    """참가 확정된 세미나 참석자에게 회원가 구매 권한 부여"""
    throttle_classes = STRICT_THROTTLES
    throttle_scope = "strict"

    lockout_kind = "attendee"

    def post(self, request):
        serializer = AttendeeVerifySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data["email"]
        password = serializer.validated_data["password"]

        lockout = passcode_gate.lockout
        idents = lockout.get_idents(request)
        lockout.check(idents, self.lockout_kind)

        is_attendee = Application.objects.filter(
            email__iexact=email,
            status=Application.Status.CONFIRMED,
        ).exists()
        user = User.objects.filter(email__iexact=email).first()

        if user is None:
            # 존재하지 않는 계정도 해시 비용을 동일하게 소모
            User().set_password(password)
            password_ok = False
        else:
            password_ok = user.check_password(password)

        if not (is_attendee and password_ok):
            lockout.register_failure(idents, self.lockout_kind)
            raise AuthenticationFailed(ATTENDEE_FAILED_MESSAGE)

        lockout.reset(idents, self.lockout_kind)
        capabilities.grant(request.session, Capability.MEMBER_ACCESS)
        return success_response(
            "세미나 참석자 인증이 완료되었습니다.",
            capability=Capability.MEMBER_ACCESS.value,
        )
