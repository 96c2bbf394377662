import re
from dataclasses import dataclass
from typing import Tuple

# 욕설 / 스팸 / 상업성 단어 (대소문자 무시, 부분 문자열 일치)
DEFAULT_TERMS = (
    # 욕설
    "시발", "씨발", "개새끼", "병신", "미친", "또라이", "바보", "멍청",
    "존나", "좆", "꺼져", "죽어", "닥쳐", "염병", "쓰레기", "개놈",
    # 스팸
    "돈벌기", "부업", "대출", "홍보", "광고", "클릭", "http", "www",
    "카톡", "카카오톡", "텔레그램", "인스타", "페이스북", "링크",
    # 상업성
    "무료", "공짜", "이벤트", "당첨", "할인", "쿠폰", "포인트",
)

DEFAULT_SPAM_PATTERNS = (
    r"\d{3}-\d{4}-\d{4}",          # 전화번호
    r"\d{2,3}-\d{3,4}-\d{4}",      # 전화번호 변형
    r"010[\s-]?\d{4}[\s-]?\d{4}",  # 휴대폰
    r"https?://",
    r"www\.",
    r"\.com",
    r"\.kr",
    r"카톡|카카오톡",
    r"텔레그램",
    r"인스타그램?",
    r"페이스북",
    r"유튜브",
    r"대출|돈벌기|부업|홍보|광고",
)

# 과장/유혹성 문구
DEFAULT_SUSPICIOUS_PATTERNS = (
    r"무료.*체험",
    r"100%.*보장",
    r"지금.*신청",
    r"한정.*이벤트",
    r"급전.*필요",
    r"대출.*가능",
    r"free.*trial",
    r"100%.*guaranteed",
    r"apply.*now",
    r"limited.*event",
)

SPECIAL_CHARACTERS = r"""[!@#$%^&*()_+\-=\[\]{};':"\\|,.<>?]"""


def _compile(patterns) -> Tuple[re.Pattern, ...]:
    return tuple(re.compile(pattern, re.IGNORECASE) for pattern in patterns)


@dataclass(frozen=True)
class FilterRules:
    """
    필터 규칙 묶음. 값이 바뀌면 새 FilterRules를 만들어 ContentFilter에 넘긴다.
    terms는 정규식이 아니라 문자 그대로 비교한다.
    """
    terms: Tuple[str, ...] = DEFAULT_TERMS
    spam_patterns: Tuple[re.Pattern, ...] = _compile(DEFAULT_SPAM_PATTERNS)
    suspicious_patterns: Tuple[re.Pattern, ...] = _compile(DEFAULT_SUSPICIOUS_PATTERNS)
    special_characters: re.Pattern = re.compile(SPECIAL_CHARACTERS)
    special_ratio_threshold: float = 0.3
    repeated_character: re.Pattern = re.compile(r"(.)\1{4,}")

    @property
    def term_patterns(self) -> Tuple[re.Pattern, ...]:
        return tuple(re.compile(re.escape(term), re.IGNORECASE) for term in self.terms if term)

    @classmethod
    def build(cls, terms=DEFAULT_TERMS, spam_patterns=DEFAULT_SPAM_PATTERNS,
              suspicious_patterns=DEFAULT_SUSPICIOUS_PATTERNS, **kwargs) -> "FilterRules":
        return cls(
            terms=tuple(terms),
            spam_patterns=_compile(spam_patterns),
            suspicious_patterns=_compile(suspicious_patterns),
            **kwargs,
        )


DEFAULT_RULES = FilterRules()
