"""Pattern and keyword tables used by the scorers.

All tables are immutable module-level data. Header patterns run against the
normalized (trimmed, lower-cased) header; content patterns run against the
lower-cased sample text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from rolesculpt.core.types import Role


@dataclass(frozen=True)
class RolePatterns:
    """Tiered header patterns for one role."""

    primary: tuple[re.Pattern, ...]
    strong: tuple[re.Pattern, ...]
    medium: tuple[re.Pattern, ...]
    weak: tuple[re.Pattern, ...]
    ultra_clear: tuple[str, ...]


@dataclass(frozen=True)
class NegativePattern:
    """Header pattern that lowers an otherwise matching header score."""

    pattern: re.Pattern
    penalty: float


def _exact(*words: str) -> tuple[re.Pattern, ...]:
    return tuple(re.compile(rf"^{re.escape(w)}$") for w in words)


def _contains(*words: str) -> tuple[re.Pattern, ...]:
    return tuple(re.compile(re.escape(w)) for w in words)


# Question-style prompts used as answer headers
ANSWER_PROMPT_PATTERNS = (
    re.compile(r"どう.*思い?.*ますか"),
    re.compile(r"と思い?.*ますか"),
    re.compile(r"書きましょう"),
    re.compile(r"述べ"),
    re.compile(r"説明して"),
    re.compile(r"気づいたこと"),
    re.compile(r"観察して"),
    re.compile(r"what.*do you think"),
    re.compile(r"how.*do you feel"),
    re.compile(r"explain.*your"),
)

ROLE_PATTERNS: dict[Role, RolePatterns] = {
    Role.ANSWER: RolePatterns(
        primary=_exact("回答", "answer", "答え", "解答"),
        strong=_contains("回答", "答え", "解答", "answer", "意見", "考え", "感想", "response")
        + ANSWER_PROMPT_PATTERNS,
        medium=_contains("コメント", "comment", "予想", "記述", "opinion", "気づき", "feedback"),
        weak=_contains("質問", "question", "問", "テキスト", "text", "内容"),
        ultra_clear=("回答", "answer"),
    ),
    Role.REASON: RolePatterns(
        primary=_exact("理由", "reason", "根拠"),
        strong=_contains("理由", "reason", "根拠", "なぜ", "どうして", "why"),
        medium=_contains("原因", "わけ", "because", "説明", "explanation", "rationale"),
        weak=_contains("背景", "basis", "補足", "note"),
        ultra_clear=("理由", "reason"),
    ),
    Role.CLASS_LABEL: RolePatterns(
        primary=_exact("クラス", "class", "組", "学級"),
        strong=_contains("クラス", "class", "学級", "学年", "組"),
        medium=_contains("group", "グループ", "班", "grade", "section"),
        weak=_contains("チーム", "team", "所属"),
        ultra_clear=("クラス", "class"),
    ),
    Role.PERSON_NAME: RolePatterns(
        primary=_exact("名前", "name", "氏名", "お名前"),
        strong=_contains("名前", "氏名", "name", "生徒名", "児童名"),
        medium=_contains("生徒", "児童", "student", "ニックネーム", "nickname", "記入者"),
        weak=_contains("担当", "作成者", "author", "user", "ユーザー"),
        ultra_clear=("名前", "氏名", "name"),
    ),
}

# Checked in order; only the first match applies
NEGATIVE_PATTERNS: tuple[NegativePattern, ...] = (
    NegativePattern(
        re.compile(r"^(いいね|like|understand|curious|highlight|理解|気になる|ハイライト)[!！]*$"),
        40.0,
    ),
    NegativePattern(re.compile(r"^(yes|no|はい|いいえ|ok)$"), 35.0),
    NegativePattern(re.compile(r"[!！]$"), 30.0),
    NegativePattern(re.compile(r"^(wow|great|nice|good|すごい|なるほど)$"), 20.0),
)

# Headers that never compete for a role
SYSTEM_HEADER_PATTERNS = (
    re.compile(r"^タイムスタンプ$", re.IGNORECASE),
    re.compile(r"^timestamp$", re.IGNORECASE),
    re.compile(r"^日時$"),
    re.compile(r"^日付$"),
    re.compile(r"^understand$", re.IGNORECASE),
    re.compile(r"^like$", re.IGNORECASE),
    re.compile(r"^curious$", re.IGNORECASE),
    re.compile(r"^highlight$", re.IGNORECASE),
    re.compile(r"^理解$"),
    re.compile(r"^いいね$"),
    re.compile(r"^気になる$"),
    re.compile(r"^ハイライト$"),
    re.compile(r"^_"),  # internal columns
)

# Content patterns
QUESTION_MARK_PATTERN = re.compile(r"[?？]")
CAUSAL_PATTERN = re.compile(r"から|ので|ため|なぜなら|because|since|therefore")
REASONING_WORD_PATTERN = re.compile(
    r"から|ので|ため|なぜなら|because|therefore|since", re.IGNORECASE
)
POLITE_ENDING_PATTERN = re.compile(r"です|ます")
OPINION_PATTERN = re.compile(r"思う|思います|考える|考えます|i think|in my opinion")
CONJECTURE_PATTERN = re.compile(r"でしょう|かもしれない|maybe|perhaps|probably")
I_THINK_PATTERN = re.compile(r"と思う|と思います|i think|i believe")
EXPLANATION_PATTERN = re.compile(r"ということ|つまり|例えば|for example")
CLASS_TOKEN_PATTERN = re.compile(r"(?:^|\s)\d{1,2}\s*-?[a-z](?=\s|$)")
GRADE_PATTERN = re.compile(r"\d+\s*年")
GROUP_PATTERN = re.compile(r"\d+\s*組")
CLASS_VOCABULARY_PATTERN = re.compile(r"class|grade|クラス|学年")
HONORIFIC_PATTERN = re.compile(r"さん|くん|君|ちゃん|様|先生|mr\.|ms\.|mrs\.")
SPACED_NAME_PATTERN = re.compile(
    r"[\u3040-\u30ff\u4e00-\u9fff]+[ \u3000][\u3040-\u30ff\u4e00-\u9fff]+"
)
DIGIT_PATTERN = re.compile(r"\d")

# Sample-shape patterns for the feature vector
KANA_KANJI_NAME_PATTERN = re.compile(r"[\u3040-\u30ff\u4e00-\u9fff]{2,4}")
SPACED_KANA_KANJI_NAME_PATTERN = re.compile(
    r"[\u3040-\u30ff\u4e00-\u9fff]{1,4}[ \u3000][\u3040-\u30ff\u4e00-\u9fff]{1,4}"
)
LATIN_NAME_PATTERN = re.compile(r"[A-Z][a-z]+ [A-Z][a-z]+")
DIGIT_LETTER_CLASS_PATTERN = re.compile(r"\d+\s*-?\s*(?:[A-Za-z]|組)")
YEAR_GROUP_CLASS_PATTERN = re.compile(r"\d+\s*年\s*[A-Za-z\d]+\s*組?")
BARE_DIGITS_PATTERN = re.compile(r"\d{1,2}")
BARE_LETTERS_PATTERN = re.compile(r"[A-Za-z]{1,2}")

# Role vocabularies for keyword density
ROLE_KEYWORDS: dict[Role, tuple[str, ...]] = {
    Role.ANSWER: ("思", "考え", "予想", "気づ", "think", "believe", "opinion"),
    Role.REASON: ("から", "ので", "ため", "なぜなら", "because", "since", "理由"),
    Role.CLASS_LABEL: ("年", "組", "class", "grade", "group", "班"),
    Role.PERSON_NAME: ("さん", "くん", "ちゃん", "様", "mr", "ms"),
}
