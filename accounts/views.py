import logging

from django.contrib.auth import login, logout
from rest_framework.views import APIView

from common.responses import success_response
from common.throttles import STRICT_THROTTLES
from .guards import IsAuthenticatedIdentity
from .serializers import AuthSerializer, PasswordChangeSerializer, UserSerializer

logger = logging.getLogger(__name__)


class LoginView(APIView):
    throttle_classes = STRICT_THROTTLES
    throttle_scope = "strict"

    def post(self, request):
        serializer = AuthSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data['user']

        # 세션에 로그인 정보 저장 (session key 교체)
        login(request, user)

        return success_response(
            "로그인 성공",
            user=UserSerializer(user).data,
        )


class LogoutView(APIView):

    def post(self, request):
        logout(request)
        return success_response("로그아웃 완료")


class MeView(APIView):
    permission_classes = [IsAuthenticatedIdentity]

    def get(self, request):
        return success_response("ok", user=UserSerializer(request.user).data)


class PasswordChangeView(APIView):
    permission_classes = [IsAuthenticatedIdentity]
    throttle_classes = STRICT_THROTTLES
    throttle_scope = "strict"

    def post(self, request):
        serializer = PasswordChangeSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)

        user = request.user
        user.set_password(serializer.validated_data["new_password"])
        user.save(update_fields=["password"])

        # 비밀번호가 바뀌면 현재 세션은 즉시 폐기하고 재로그인 요구
        logout(request)
        logger.info("Password changed for user %s; session destroyed", user.pk)

        return success_response(
            "비밀번호가 변경되었습니다. 다시 로그인해주세요.",
            reauthenticate=True,
        )
