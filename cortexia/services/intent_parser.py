"""
Intent Parser
=============

Local, regex-based classification of quick-capture text into one of
the record types the dashboard can create:

1. expense           - money keywords or a $-prefixed number
2. task              - action verbs, with an optional deadline
3. study_session     - study verbs, with duration and subject
4. habit_completion  - "did / finished / went to the gym" phrasing
5. journal           - mood and feeling phrasing
6. task (default)    - anything else, title only

Checks run in that order and the first match wins. Confidence is a
fixed value per branch, not a measure of match strength.

Used when the remote AI parser is unavailable or fails.
"""

import math
import re
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Any, Optional


class IntentType(str, Enum):
    EXPENSE = "expense"
    TASK = "task"
    STUDY_SESSION = "study_session"
    HABIT_COMPLETION = "habit_completion"
    JOURNAL = "journal"


CONFIDENCE = {
    IntentType.EXPENSE: 0.85,
    IntentType.TASK: 0.8,
    IntentType.STUDY_SESSION: 0.75,
    IntentType.HABIT_COMPLETION: 0.7,
    IntentType.JOURNAL: 0.65,
}
DEFAULT_CONFIDENCE = 0.5

DEFAULT_STUDY_MINUTES = 30
POMODORO_MINUTES = 25


@dataclass(frozen=True)
class ParsedIntent:
    """Classification result with the extracted fields."""

    type: IntentType
    data: dict[str, Any] = field(default_factory=dict)
    confidence: float = DEFAULT_CONFIDENCE
    source: str = "local"

    def to_api(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "data": self.data,
            "confidence": self.confidence,
            "source": self.source,
        }


# =============================================================================
# Patterns
# =============================================================================

_EXPENSE = re.compile(r"\b(?:spent|paid|bought|cost|costs|expense)\b|\$\s?\d", re.I)
_AMOUNT = re.compile(r"\$?\s?(\d+(?:,\d{3})*(?:\.\d+)?)")

_EXPENSE_CATEGORIES: tuple[tuple[str, re.Pattern], ...] = (
    ("food", re.compile(
        r"\b(?:food|lunch|dinner|breakfast|brunch|coffee|groceries|grocery|restaurant|snacks?|pizza)\b",
        re.I,
    )),
    ("transport", re.compile(
        r"\b(?:uber|lyft|taxi|cab|bus|train|metro|gas|fuel|parking|transport)\b",
        re.I,
    )),
    ("entertainment", re.compile(
        r"\b(?:movies?|cinema|netflix|spotify|games?|concert|tickets?)\b",
        re.I,
    )),
)

_TASK = re.compile(
    r"\b(?:finish|complete|submit|send|call|email|write|review|prepare|fix|"
    r"schedule|book|buy|pay|clean|organize|remind me to|need to|have to)\b",
    re.I,
)
_URGENT = re.compile(r"\b(?:urgent|asap|important|critical)\b", re.I)

_WEEKDAYS = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
}
_WEEKDAY_PHRASE = re.compile(
    r"\b(?:(?:by|on|before|due|next|this)\s+)?(" + "|".join(_WEEKDAYS) + r")\b",
    re.I,
)
_RELATIVE_DAY = re.compile(r"\b(?:(?:by|due)\s+)?(tomorrow|today|tonight)\b", re.I)

_STUDY_VERBS = r"studied|studying|study|learned|learnt|learning|practiced|practised|practicing|revised"
_STUDY = re.compile(rf"\b(?:{_STUDY_VERBS})\b", re.I)
_FILLER_WORDS = r"for|about|on|the|some|a|an|up"
_STUDY_SUBJECT = re.compile(
    rf"\b(?:{_STUDY_VERBS})\s+(?:(?:{_FILLER_WORDS})\s+)*(?!(?:{_FILLER_WORDS})\b)([A-Za-z][\w+#.\-]*)",
    re.I,
)
_DURATION = re.compile(r"(\d+(?:\.\d+)?)\s*(hours?|hrs?|h|minutes?|mins?|m)\b", re.I)

_HABIT = re.compile(
    r"\b(?:did|done|completed|finished|went to (?:the )?gym|worked out|"
    r"meditated|exercised|journaled|stretched|ran|walked)\b",
    re.I,
)

_JOURNAL = re.compile(
    r"\b(?:feel|feeling|felt|mood|grateful|stressed|anxious|happy|sad|tired|"
    r"exhausted|excited|frustrated|today was|day was)\b",
    re.I,
)

# Checked top to bottom; first hit sets the mood
_MOOD_LADDER: tuple[tuple[int, re.Pattern], ...] = (
    (9, re.compile(r"\b(?:amazing|fantastic|excellent|perfect|great)\b", re.I)),
    (8, re.compile(r"\b(?:good|happy|nice|wonderful|excited)\b", re.I)),
    (6, re.compile(r"\b(?:okay|ok|fine|alright|decent)\b", re.I)),
    (4, re.compile(r"\b(?:tired|exhausted|drained)\b", re.I)),
    (3, re.compile(r"\b(?:sad|bad|upset|frustrated|angry)\b", re.I)),
    (2, re.compile(r"\b(?:terrible|awful|horrible|depressed)\b", re.I)),
)
NEUTRAL_MOOD = 5


# =============================================================================
# Field extraction
# =============================================================================

def next_weekday(today: date, weekday: int) -> date:
    """Next occurrence of ``weekday`` strictly after ``today``."""
    days_ahead = (weekday - today.weekday()) % 7
    return today + timedelta(days=days_ahead or 7)


def extract_deadline(text: str, today: date) -> tuple[Optional[date], str]:
    """
    Find a deadline phrase.

    Returns the resolved date (or None) and the text with the phrase
    removed, for use as a title.
    """
    relative = _RELATIVE_DAY.search(text)
    if relative:
        word = relative.group(1).lower()
        due = today + timedelta(days=1) if word == "tomorrow" else today
        return due, _RELATIVE_DAY.sub("", text, count=1)

    weekday = _WEEKDAY_PHRASE.search(text)
    if weekday:
        due = next_weekday(today, _WEEKDAYS[weekday.group(1).lower()])
        return due, _WEEKDAY_PHRASE.sub("", text, count=1)

    return None, text


def extract_amount(text: str) -> Optional[float]:
    match = _AMOUNT.search(text)
    if match is None:
        return None
    return float(match.group(1).replace(",", ""))


def expense_category(text: str) -> str:
    for category, pattern in _EXPENSE_CATEGORIES:
        if pattern.search(text):
            return category
    return "other"


def extract_duration_minutes(text: str) -> Optional[int]:
    match = _DURATION.search(text)
    if match is None:
        return None
    value = float(match.group(1))
    if match.group(2).lower().startswith("h"):
        value *= 60
    return max(int(round(value)), 1)


def infer_mood(text: str) -> int:
    for mood, pattern in _MOOD_LADDER:
        if pattern.search(text):
            return mood
    return NEUTRAL_MOOD


def _as_title(text: str) -> str:
    title = re.sub(r"\s+", " ", text).strip(" .,-")
    return title[:1].upper() + title[1:]


# =============================================================================
# Classifier
# =============================================================================

def parse_intent(text: str, today: date) -> ParsedIntent:
    """
    Classify ``text`` and extract fields.

    Args:
        text: Raw quick-capture input
        today: Reference date for relative deadlines

    Returns:
        ParsedIntent with a fixed per-branch confidence
    """
    text = text.strip()

    if _EXPENSE.search(text):
        return ParsedIntent(
            type=IntentType.EXPENSE,
            data={
                "amount": extract_amount(text),
                "category": expense_category(text),
                "description": text,
                "date": today.isoformat(),
            },
            confidence=CONFIDENCE[IntentType.EXPENSE],
        )

    if _TASK.search(text):
        due, remainder = extract_deadline(text, today)
        return ParsedIntent(
            type=IntentType.TASK,
            data={
                "title": _as_title(remainder),
                "dueDate": due.isoformat() if due else None,
                "priority": "high" if _URGENT.search(text) else "medium",
            },
            confidence=CONFIDENCE[IntentType.TASK],
        )

    if _STUDY.search(text):
        minutes = extract_duration_minutes(text) or DEFAULT_STUDY_MINUTES
        subject = _STUDY_SUBJECT.search(text)
        return ParsedIntent(
            type=IntentType.STUDY_SESSION,
            data={
                "subject": subject.group(1).rstrip(".-") if subject else "General",
                "durationMinutes": minutes,
                "pomodoros": math.ceil(minutes / POMODORO_MINUTES),
            },
            confidence=CONFIDENCE[IntentType.STUDY_SESSION],
        )

    if _HABIT.search(text):
        return ParsedIntent(
            type=IntentType.HABIT_COMPLETION,
            data={"activity": text, "completed": True},
            confidence=CONFIDENCE[IntentType.HABIT_COMPLETION],
        )

    if _JOURNAL.search(text):
        return ParsedIntent(
            type=IntentType.JOURNAL,
            data={"content": text, "mood": infer_mood(text)},
            confidence=CONFIDENCE[IntentType.JOURNAL],
        )

    return ParsedIntent(
        type=IntentType.TASK,
        data={"title": _as_title(text), "dueDate": None, "priority": "medium"},
        confidence=DEFAULT_CONFIDENCE,
    )


def intent_from_ai(payload: dict[str, Any]) -> Optional[ParsedIntent]:
    """
    Accept a remote parser result, or None when its type is unknown.

    A missing or malformed confidence falls back to the local value for
    the same type.
    """
    try:
        intent_type = IntentType(payload.get("type"))
    except ValueError:
        return None

    data = payload.get("data")
    try:
        confidence = float(payload.get("confidence"))
    except (TypeError, ValueError):
        confidence = CONFIDENCE[intent_type]

    return ParsedIntent(
        type=intent_type,
        data=data if isinstance(data, dict) else {},
        confidence=min(max(confidence, 0.0), 1.0),
        source="ai",
    )
