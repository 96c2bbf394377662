from rest_framework.authentication import SessionAuthentication


class SessionIdentityAuthentication(SessionAuthentication):
    """
    Django 세션 로그인을 그대로 사용한다.

    DRF는 authenticate_header가 없는 인증 클래스에서 미인증(NotAuthenticated)을
    403으로 바꿔 응답하므로, challenge 값을 돌려줘서 401(미인증)과
    403(권한 없음)이 구분되도록 한다.
    """

    def authenticate_header(self, request):
        return 'Session realm="api"'
