from dataclasses import dataclass
from typing import Optional

from .rules import DEFAULT_RULES, FilterRules

SPAM_REASON = "스팸 또는 홍보성 내용이 감지되었습니다."
PROFANITY_REASON = "부적절한 언어가 감지되었습니다."
REVIEW_REASON = "내용 검토가 필요합니다."


@dataclass(frozen=True)
class FilterResult:
    cleaned: str
    flagged: bool
    reason: Optional[str] = None


class ContentFilter:
    """
    사용자 입력 텍스트를 검사해 가림 처리된 텍스트와 판정을 돌려준다.
    상태가 없으므로 같은 입력에는 항상 같은 결과가 나온다.
    """

    def __init__(self, rules: FilterRules = DEFAULT_RULES):
        self.rules = rules
        self._term_patterns = rules.term_patterns

    def evaluate(self, text: str) -> FilterResult:
        has_term = any(pattern.search(text) for pattern in self._term_patterns)
        has_spam = any(pattern.search(text) for pattern in self.rules.spam_patterns)
        flagged = has_term or has_spam or self.is_suspicious(text)

        return FilterResult(
            cleaned=self.redact(text),
            flagged=flagged,
            reason=self._reason(has_spam, has_term) if flagged else None,
        )

    def redact(self, text: str) -> str:
        # 일치한 부분은 같은 길이의 '*'로 바꾼다 (단어 먼저, 그 다음 패턴)
        cleaned = text
        for pattern in self._term_patterns + self.rules.spam_patterns:
            cleaned = pattern.sub(_mask, cleaned)
        return cleaned

    def is_suspicious(self, text: str) -> bool:
        if text:
            special_count = len(self.rules.special_characters.findall(text))
            if special_count / len(text) > self.rules.special_ratio_threshold:
                return True

        if self.rules.repeated_character.search(text):
            return True

        return any(pattern.search(text) for pattern in self.rules.suspicious_patterns)

    @staticmethod
    def _reason(has_spam: bool, has_term: bool) -> str:
        if has_spam:
            return SPAM_REASON
        if has_term:
            return PROFANITY_REASON
        return REVIEW_REASON


def _mask(match) -> str:
    return "*" * len(match.group(0))


default_filter = ContentFilter()


def evaluate(text: str) -> FilterResult:
    return default_filter.evaluate(text)
