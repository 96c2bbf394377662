from rest_framework import status
from rest_framework.response import Response


def success_response(message: str, status_code: int = status.HTTP_200_OK, **payload) -> Response:
    body = {"success": True, "message": message}
    body.update(payload)
    return Response(body, status=status_code)
