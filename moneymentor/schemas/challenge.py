"""Pydantic schemas for the challenge parsing endpoint."""

from typing import List

from pydantic import BaseModel

from moneymentor.core.challenges import ParsedChallenge


class ParsedChallengeOut(ParsedChallenge):
    progress: float
    days_left: int


class UnparseableOut(BaseModel):
    id: str
    reason: str


class ChallengeParseResponse(BaseModel):
    challenges: List[ParsedChallengeOut]
    unparseable: List[UnparseableOut]
