import dataclasses

import pytest

from moderation.filters import (
    PROFANITY_REASON,
    REVIEW_REASON,
    SPAM_REASON,
    ContentFilter,
    evaluate,
)
from moderation.rules import DEFAULT_RULES, DEFAULT_TERMS, FilterRules

SAMPLES = [
    "정말 좋은 매트입니다. 아이들이 좋아해요!",
    "무료체험 010-1234-5678 후기",
    "카톡으로 연락주세요 www.example.com",
    "HTTP 링크 클릭하면 쿠폰 드려요",
    "이거 완전 바보같은 제품 시발",
    "대출 가능 급전 필요하신 분 02-123-4567",
    "",
    "!!!!!!!!!!",
    "인스타그램 유튜브 페이스북 텔레그램",
]


def test_clean_text_passes_unchanged():
    result = evaluate("정말 튼튼하고 미끄럽지 않아서 수업할 때 잘 쓰고 있어요")

    assert result.cleaned == "정말 튼튼하고 미끄럽지 않아서 수업할 때 잘 쓰고 있어요"
    assert result.flagged is False
    assert result.reason is None


def test_free_trial_with_phone_number_is_redacted():
    text = "무료체험 010-1234-5678 후기"
    result = evaluate(text)

    assert result.cleaned == "**체험 " + "*" * 13 + " 후기"
    assert len(result.cleaned) == len(text)
    assert result.flagged is True
    assert result.reason == SPAM_REASON


@pytest.mark.parametrize("text", SAMPLES)
def test_cleaned_keeps_length_and_removes_terms(text):
    cleaned = evaluate(text).cleaned

    assert len(cleaned) == len(text)
    lowered = cleaned.lower()
    for term in DEFAULT_TERMS:
        assert term.lower() not in lowered


@pytest.mark.parametrize("text", SAMPLES)
def test_refiltering_cleaned_text_is_noop(text):
    cleaned = evaluate(text).cleaned
    assert evaluate(cleaned).cleaned == cleaned


def test_terms_match_case_insensitively():
    result = evaluate("Visit HtTp site now")
    assert result.cleaned == "Visit **** site now"
    assert result.flagged is True


def test_every_occurrence_is_replaced():
    result = evaluate("광고 광고 광고입니다")
    assert result.cleaned == "** ** **입니다"


def test_profanity_reason():
    result = evaluate("이 제품 진짜 바보 같아요")
    assert result.reason == PROFANITY_REASON
    assert result.cleaned == "이 제품 진짜 ** 같아요"


def test_spam_reason_wins_over_profanity():
    result = evaluate("멍청한 광고 문의는 010 1234 5678")
    assert result.reason == SPAM_REASON


@pytest.mark.parametrize("text", [
    "좋아요ㅋㅋㅋㅋㅋ 최고",         # 같은 문자 5번 이상 반복
    "!?!?!?!?좋아",                  # 특수문자 비율 30% 초과
    "지금 바로 신청하세요 후회 없어요",
    "100% 효과 보장합니다 여러분",
    "Free 7 day trial for everyone",
])
def test_heuristics_flag_without_redaction(text):
    result = evaluate(text)

    assert result.flagged is True
    assert result.cleaned == text
    assert result.reason == REVIEW_REASON


def test_empty_text():
    result = evaluate("")
    assert result.cleaned == ""
    assert result.flagged is False


def test_custom_rules_without_changing_call_site():
    rules = FilterRules.build(terms=["foo"], spam_patterns=[], suspicious_patterns=[])
    content_filter = ContentFilter(rules)

    result = content_filter.evaluate("foo and FOO bar")
    assert result.cleaned == "*** and *** bar"
    assert result.reason == PROFANITY_REASON

    # 기본 규칙 단어는 걸리지 않는다
    assert content_filter.evaluate("광고 문의").cleaned == "광고 문의"


def test_rules_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_RULES.terms = ()


def test_same_input_same_result():
    text = "텔레그램 문의 주세요"
    assert evaluate(text) == evaluate(text)
