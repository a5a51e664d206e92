"""
Intent Parser Tests
===================

Tests for the local quick-capture classifier and acceptance of remote
parser results.
"""

from datetime import date

import pytest

from cortexia.services.intent_parser import (
    CONFIDENCE,
    DEFAULT_CONFIDENCE,
    IntentType,
    extract_duration_minutes,
    infer_mood,
    intent_from_ai,
    next_weekday,
    parse_intent,
)


# Tuesday
TODAY = date(2026, 2, 10)


class TestExpense:

    def test_keyword_amount_and_category(self):
        intent = parse_intent("Spent $45 on lunch", TODAY)

        assert intent.type == IntentType.EXPENSE
        assert intent.data["amount"] == 45.0
        assert intent.data["category"] == "food"
        assert intent.data["date"] == "2026-02-10"
        assert intent.confidence == 0.85

    def test_dollar_prefix_alone_is_enough(self):
        intent = parse_intent("$12.50 uber to the office", TODAY)

        assert intent.type == IntentType.EXPENSE
        assert intent.data["amount"] == 12.5
        assert intent.data["category"] == "transport"

    def test_thousands_separator_and_other_category(self):
        intent = parse_intent("paid 1,200 rent", TODAY)

        assert intent.data["amount"] == 1200.0
        assert intent.data["category"] == "other"

    def test_expense_wins_over_task_verbs(self):
        intent = parse_intent("Paid the electricity bill", TODAY)

        assert intent.type == IntentType.EXPENSE
        assert intent.data["amount"] is None


class TestTask:

    def test_weekday_deadline(self):
        intent = parse_intent("Finish report by Friday", TODAY)

        assert intent.type == IntentType.TASK
        assert intent.data["title"] == "Finish report"
        assert intent.data["dueDate"] == "2026-02-13"
        assert intent.data["priority"] == "medium"
        assert intent.confidence == 0.8

    def test_tomorrow(self):
        intent = parse_intent("Call mom tomorrow", TODAY)

        assert intent.data["title"] == "Call mom"
        assert intent.data["dueDate"] == "2026-02-11"

    def test_same_weekday_resolves_to_next_week(self):
        intent = parse_intent("Submit the urgent form on Tuesday", TODAY)

        assert intent.data["dueDate"] == "2026-02-17"
        assert intent.data["priority"] == "high"

    def test_task_wins_over_study(self):
        assert parse_intent("Finish studying chapter 3", TODAY).type == IntentType.TASK

    def test_no_deadline(self):
        assert parse_intent("email the landlord", TODAY).data["dueDate"] is None


class TestStudy:

    def test_hours_and_subject(self):
        intent = parse_intent("Studied python for 2 hours", TODAY)

        assert intent.type == IntentType.STUDY_SESSION
        assert intent.data["subject"] == "python"
        assert intent.data["durationMinutes"] == 120
        assert intent.data["pomodoros"] == 5
        assert intent.confidence == 0.75

    def test_default_duration(self):
        intent = parse_intent("learned about React hooks", TODAY)

        assert intent.data["subject"] == "React"
        assert intent.data["durationMinutes"] == 30
        assert intent.data["pomodoros"] == 2

    def test_subject_falls_back_to_general(self):
        intent = parse_intent("studying for 45 minutes", TODAY)

        assert intent.data["subject"] == "General"
        assert intent.data["durationMinutes"] == 45


class TestHabitAndJournal:

    def test_habit_completion(self):
        intent = parse_intent("Went to the gym", TODAY)

        assert intent.type == IntentType.HABIT_COMPLETION
        assert intent.data == {"activity": "Went to the gym", "completed": True}
        assert intent.confidence == 0.7

    def test_journal_with_mood(self):
        intent = parse_intent("Feeling great today", TODAY)

        assert intent.type == IntentType.JOURNAL
        assert intent.data["mood"] == 9
        assert intent.confidence == 0.65

    @pytest.mark.parametrize("text, mood", [
        ("feeling good", 8),
        ("I feel okay", 6),
        ("so tired", 4),
        ("kind of sad", 3),
        ("an awful day", 2),
        ("nothing special", 5),
    ])
    def test_mood_ladder(self, text, mood):
        assert infer_mood(text) == mood


class TestDefault:

    def test_plain_text_becomes_a_task(self):
        intent = parse_intent("  dentist appointment  ", TODAY)

        assert intent.type == IntentType.TASK
        assert intent.data["title"] == "Dentist appointment"
        assert intent.confidence == DEFAULT_CONFIDENCE
        assert intent.to_api()["source"] == "local"


class TestHelpers:

    def test_next_weekday_is_strictly_after_today(self):
        assert next_weekday(TODAY, 1) == date(2026, 2, 17)
        assert next_weekday(TODAY, 2) == date(2026, 2, 11)
        assert next_weekday(TODAY, 0) == date(2026, 2, 16)

    @pytest.mark.parametrize("text, minutes", [
        ("1.5 hours", 90),
        ("90 min", 90),
        ("2h", 120),
        ("no duration", None),
    ])
    def test_duration(self, text, minutes):
        assert extract_duration_minutes(text) == minutes


class TestIntentFromAI:

    def test_accepts_known_type(self):
        intent = intent_from_ai({"type": "expense", "data": {"amount": 5}, "confidence": 0.95})

        assert intent.type == IntentType.EXPENSE
        assert intent.data == {"amount": 5}
        assert intent.confidence == 0.95
        assert intent.source == "ai"

    def test_rejects_unknown_type(self):
        assert intent_from_ai({"type": "reminder", "data": {}}) is None
        assert intent_from_ai({}) is None

    def test_bad_confidence_uses_local_value(self):
        intent = intent_from_ai({"type": "journal", "data": {}, "confidence": "high"})
        assert intent.confidence == CONFIDENCE[IntentType.JOURNAL]
