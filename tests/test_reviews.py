import pytest

from dashboard.models import AuditLog
from reviews.models import Review
from tests.conftest import granted_capabilities

pytestmark = pytest.mark.django_db

CLEAN_BODY = "매트가 두껍고 미끄럽지 않아서 아이들 수업에 잘 쓰고 있습니다."


def unlock(client):
    response = client.post("/api/reviews/verify-passcode", {"passcode": "1234"}, format="json")
    assert response.status_code == 200


def test_submit_without_review_access_is_forbidden(api_client, site):
    response = api_client.post("/api/reviews", {"review_body": CLEAN_BODY}, format="json")

    assert response.status_code == 403
    assert response.data["code"] == "capability_required"
    assert not Review.objects.exists()


def test_capability_checked_before_validation(api_client, site):
    response = api_client.post("/api/reviews", {"review_body": "짧음"}, format="json")
    assert response.status_code == 403


def test_clean_review_is_pending(api_client, site):
    unlock(api_client)

    response = api_client.post(
        "/api/reviews",
        {"review_body": CLEAN_BODY, "author_name": "수원맘", "rating": 4, "status": "approved"},
        format="json",
    )

    assert response.status_code == 201
    review = Review.objects.get()
    assert review.status == Review.Status.PENDING
    assert review.review_body == CLEAN_BODY
    assert review.author_name == "수원맘"
    assert review.rating == 4
    assert review.filter_flagged is False


def test_review_access_is_single_use(api_client, site):
    unlock(api_client)

    first = api_client.post("/api/reviews", {"review_body": CLEAN_BODY}, format="json")
    second = api_client.post("/api/reviews", {"review_body": CLEAN_BODY}, format="json")

    assert first.status_code == 201
    assert second.status_code == 403
    assert Review.objects.count() == 1
    assert "review_access" not in granted_capabilities(api_client)


def test_redacted_review_is_hidden_by_filter(api_client, site):
    unlock(api_client)
    body = "무료체험 010-1234-5678 후기 남겨요 연락주세요"

    response = api_client.post("/api/reviews", {"review_body": body}, format="json")

    assert response.status_code == 201
    review = Review.objects.get()
    assert review.status == Review.Status.HIDDEN_BY_FILTER
    assert review.review_body == "**체험 " + "*" * 13 + " 후기 남겨요 연락주세요"
    assert review.filter_flagged is True
    assert review.filter_reason == "스팸 또는 홍보성 내용이 감지되었습니다."


def test_flagged_but_unredacted_review_stays_pending(api_client, site):
    unlock(api_client)
    body = "지금 바로 신청하세요 정말 좋은 세미나였습니다"

    api_client.post("/api/reviews", {"review_body": body}, format="json")

    review = Review.objects.get()
    assert review.status == Review.Status.PENDING
    assert review.filter_flagged is True
    assert review.filter_reason == "내용 검토가 필요합니다."


def test_invalid_body_keeps_review_access(api_client, site):
    unlock(api_client)

    invalid = api_client.post("/api/reviews", {"review_body": "짧은 후기"}, format="json")
    assert invalid.status_code == 400
    assert "review_access" in granted_capabilities(api_client)

    valid = api_client.post("/api/reviews", {"review_body": CLEAN_BODY}, format="json")
    assert valid.status_code == 201


def test_default_author_name(api_client, site):
    unlock(api_client)
    api_client.post("/api/reviews", {"review_body": CLEAN_BODY, "author_name": "  "}, format="json")
    assert Review.objects.get().author_name == "익명"


def test_rating_out_of_range(api_client, site):
    unlock(api_client)
    response = api_client.post("/api/reviews", {"review_body": CLEAN_BODY, "rating": 6}, format="json")
    assert response.status_code == 400


def test_public_list_shows_only_approved(api_client, site):
    Review.objects.create(review_body=CLEAN_BODY, status=Review.Status.APPROVED)
    Review.objects.create(review_body=CLEAN_BODY, status=Review.Status.PENDING)
    Review.objects.create(review_body="*" * 12, status=Review.Status.HIDDEN_BY_FILTER)

    response = api_client.get("/api/reviews")

    assert response.status_code == 200
    assert len(response.data["reviews"]) == 1
    assert "filter_reason" not in response.data["reviews"][0]


def test_admin_lists_and_moderates(admin_client, api_client, site):
    review = Review.objects.create(review_body=CLEAN_BODY)

    assert api_client.get("/api/reviews/all").status_code == 401
    listing = admin_client.get("/api/reviews/all")
    assert listing.status_code == 200
    assert listing.data["reviews"][0]["filter_flagged"] is False

    response = admin_client.patch(f"/api/reviews/{review.pk}/status", {"status": "approved"}, format="json")

    assert response.status_code == 200
    review.refresh_from_db()
    assert review.status == Review.Status.APPROVED
    assert AuditLog.objects.filter(action="review.status", entity_id=str(review.pk)).exists()
