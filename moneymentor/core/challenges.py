"""Typed parser for challenge records returned by the coaching service.

The service stores each micro-challenge as a free-text blob
(``generated_challenge``) with markdown-style markers::

    **Challenge Title:** Skip the Coffee
    **Daily Task:** Put the money for one coffee into DigiSave.

    **Why:** Reach a goal of GHS 50 in two weeks.

Parsing never raises on malformed text: it returns either ``Parsed`` or
``Unparseable`` and the caller decides what to show.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict

DEFAULT_TITLE = "Untitled Challenge"
DEFAULT_GOAL = 500.0
DEFAULT_DURATION_DAYS = 30

_TITLE_RE = re.compile(r"\*\*Challenge Title:\*\*[ \t]*(.*?)(?:\n|$)")
# first match wins, most specific marker first
_TASK_RES = [
    re.compile(r"\*\*Daily/Weekly Task:\*\*(.*?)(?:\n\n\*\*|$)", re.DOTALL),
    re.compile(r"\*\*Daily Task:\*\*(.*?)(?:\n\n\*\*|$)", re.DOTALL),
    re.compile(r"\*\*Weekly Task:\*\*(.*?)(?:\n\n\*\*|$)", re.DOTALL),
]
_GOAL_RE = re.compile(r"goal of (?:GHS|GH₵)?\s*(\d+)", re.IGNORECASE)


class ChallengeRecord(BaseModel):
    """Raw record as served by the remote challenge API."""

    model_config = ConfigDict(extra="ignore")

    id: Union[int, str]
    generated_challenge: Optional[str] = None
    challenge_type: Optional[str] = None
    status: Optional[str] = None
    challenge_duration: Optional[int] = None
    last_updated: Optional[str] = None
    progress: Union[float, str, None] = None
    financial_goal: Union[float, str, None] = None


class ParsedChallenge(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    type: Literal["savings", "investment"]
    goal: float
    current_progress: float
    duration: int
    start_date: datetime
    last_updated: datetime
    is_completed: bool

    @property
    def progress_ratio(self) -> float:
        if self.goal <= 0:
            return 0.0
        return min(1.0, max(0.0, self.current_progress / self.goal))

    def days_remaining(self, today: Optional[datetime] = None) -> int:
        today = _as_utc(today or datetime.now(timezone.utc))
        end = _as_utc(self.start_date) + timedelta(days=self.duration)
        remaining = (end - today).total_seconds() / 86400
        return max(0, math.ceil(remaining))


@dataclass(frozen=True)
class Parsed:
    challenge: ParsedChallenge
    kind: Literal["parsed"] = "parsed"


@dataclass(frozen=True)
class Unparseable:
    id: str
    reason: str
    kind: Literal["unparseable"] = "unparseable"


ParseResult = Union[Parsed, Unparseable]


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _to_number(value: Union[float, str, None]) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _parse_timestamp(value: Optional[str], default: datetime) -> datetime:
    if not value:
        return default
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return default


def extract_title(text: str) -> Optional[str]:
    match = _TITLE_RE.search(text)
    if match and match.group(1).strip():
        return match.group(1).strip()
    return None


def extract_task(text: str) -> Optional[str]:
    for pattern in _TASK_RES:
        match = pattern.search(text)
        if match:
            return match.group(1).strip()
    return None


def extract_goal(text: str) -> Optional[float]:
    match = _GOAL_RE.search(text)
    return float(match.group(1)) if match else None


def parse_challenge(record: ChallengeRecord, now: Optional[datetime] = None) -> ParseResult:
    """Turn a raw record into a ParsedChallenge, or explain why it can't be."""
    record_id = str(record.id)
    text = record.generated_challenge or ""
    if not text.strip():
        return Unparseable(id=record_id, reason="generated_challenge is empty")

    title = extract_title(text)
    task = extract_task(text)
    if title is None and task is None:
        return Unparseable(id=record_id, reason="no challenge title or task marker found")

    # explicit numeric goal beats the one mentioned in the text
    goal = _to_number(record.financial_goal)
    if goal is None or goal <= 0:
        goal = extract_goal(text)
    if goal is None:
        goal = DEFAULT_GOAL

    now = now or datetime.now(timezone.utc)
    last_updated = _parse_timestamp(record.last_updated, now)

    challenge = ParsedChallenge(
        id=record_id,
        title=title or DEFAULT_TITLE,
        description=task or "",
        type="savings" if "savings" in (record.challenge_type or "").lower() else "investment",
        goal=goal,
        current_progress=_to_number(record.progress) or 0.0,
        duration=record.challenge_duration or DEFAULT_DURATION_DAYS,
        start_date=last_updated,
        last_updated=last_updated,
        is_completed=record.status == "completed",
    )
    return Parsed(challenge=challenge)


__all__ = [
    "DEFAULT_TITLE",
    "DEFAULT_GOAL",
    "DEFAULT_DURATION_DAYS",
    "ChallengeRecord",
    "ParsedChallenge",
    "Parsed",
    "Unparseable",
    "ParseResult",
    "extract_title",
    "extract_task",
    "extract_goal",
    "parse_challenge",
]
