from __future__ import annotations

from datetime import datetime, timezone

from moneymentor.core.challenges import (
    DEFAULT_GOAL,
    DEFAULT_TITLE,
    ChallengeRecord,
    Parsed,
    Unparseable,
    extract_goal,
    extract_task,
    extract_title,
    parse_challenge,
)

NOW = datetime(2025, 3, 28, 12, 0, tzinfo=timezone.utc)

CHALLENGE_TEXT = (
    "**Challenge Title:** Skip the Coffee\n"
    "**Daily Task:** Put the money for one coffee into DigiSave.\n"
    "Track it every evening.\n\n"
    "**Why:** Reach a goal of GHS 50 in two weeks."
)


def make_record(**overrides) -> ChallengeRecord:
    values = {
        "id": 12,
        "generated_challenge": CHALLENGE_TEXT,
        "challenge_type": "Savings Challenge",
        "status": "active",
        "challenge_duration": 14,
        "last_updated": "2025-03-22T00:00:00Z",
        "progress": "10",
    }
    values.update(overrides)
    return ChallengeRecord.model_validate(values)


def test_parses_markers_from_generated_text():
    outcome = parse_challenge(make_record(), now=NOW)

    assert isinstance(outcome, Parsed)
    challenge = outcome.challenge
    assert challenge.id == "12"
    assert challenge.title == "Skip the Coffee"
    assert challenge.description == "Put the money for one coffee into DigiSave.\nTrack it every evening."
    assert challenge.type == "savings"
    assert challenge.goal == 50.0
    assert challenge.current_progress == 10.0
    assert challenge.duration == 14
    assert challenge.is_completed is False
    assert challenge.start_date == datetime(2025, 3, 22, tzinfo=timezone.utc)


def test_combined_task_marker_wins():
    text = (
        "**Challenge Title:** Invest Weekly\n"
        "**Weekly Task:** fallback\n\n"
        "**Daily/Weekly Task:** Buy one EuroBond unit."
    )

    assert extract_task(text) == "Buy one EuroBond unit."


def test_goal_accepts_cedi_symbol_and_case():
    assert extract_goal("Hit a Goal of GH₵ 120 this month") == 120.0
    assert extract_goal("no goal here") is None


def test_explicit_financial_goal_beats_text():
    outcome = parse_challenge(make_record(financial_goal="75"), now=NOW)

    assert isinstance(outcome, Parsed)
    assert outcome.challenge.goal == 75.0


def test_missing_pieces_fall_back_to_defaults():
    record = make_record(
        generated_challenge="**Daily Task:** Save GHS 5.",
        challenge_type="Investment",
        status="completed",
        challenge_duration=None,
        last_updated=None,
        progress=None,
    )

    outcome = parse_challenge(record, now=NOW)

    assert isinstance(outcome, Parsed)
    challenge = outcome.challenge
    assert challenge.title == DEFAULT_TITLE
    assert challenge.goal == DEFAULT_GOAL
    assert challenge.type == "investment"
    assert challenge.current_progress == 0.0
    assert challenge.duration == 30
    assert challenge.is_completed is True
    assert challenge.last_updated == NOW


def test_garbage_progress_counts_as_zero():
    outcome = parse_challenge(make_record(progress="n/a"), now=NOW)

    assert isinstance(outcome, Parsed)
    assert outcome.challenge.current_progress == 0.0


def test_text_without_markers_is_unparseable():
    outcome = parse_challenge(make_record(generated_challenge="Save more money!"), now=NOW)

    assert isinstance(outcome, Unparseable)
    assert outcome.id == "12"
    assert "marker" in outcome.reason


def test_blank_text_is_unparseable():
    outcome = parse_challenge(make_record(generated_challenge="   "), now=NOW)

    assert isinstance(outcome, Unparseable)


def test_title_needs_text_after_marker():
    assert extract_title("**Challenge Title:**\n**Daily Task:** x") is None
    assert extract_title("**Challenge Title:** Round Up") == "Round Up"


def test_progress_ratio_and_days_remaining():
    outcome = parse_challenge(make_record(progress="30", financial_goal=20), now=NOW)

    assert isinstance(outcome, Parsed)
    challenge = outcome.challenge
    assert challenge.progress_ratio == 1.0
    # started 2025-03-22, runs 14 days, ends 2025-04-05
    assert challenge.days_remaining(NOW) == 8
    assert challenge.days_remaining(datetime(2025, 5, 1)) == 0


def test_null_text_is_unparseable():
    outcome = parse_challenge(make_record(generated_challenge=None, challenge_type=None), now=NOW)

    assert isinstance(outcome, Unparseable)
    assert outcome.reason == "generated_challenge is empty"
