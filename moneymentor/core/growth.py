from __future__ import annotations

import logging
import math
import random
from typing import List, Optional, Protocol

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

DEFAULT_MAX_CHART_POINTS = 20


class InvalidInput(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


class RandomSource(Protocol):
    """Anything with uniform(a, b): random.Random, numpy Generator, ..."""

    def uniform(self, a: float, b: float) -> float: ...


# -----------------------------
# Data model
# -----------------------------


class SimulationParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    principal: float
    daily_rate: float
    volatility: float = 0.0
    duration_days: int
    deposit_amount: float = 0.0
    deposit_interval_days: int = 0  # 0 disables deposits whatever deposit_amount is
    max_chart_points: int = DEFAULT_MAX_CHART_POINTS


class DayPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: int
    amount: float


class SeriesResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    final_amount: float
    total_gain: float
    return_rate: float
    series: List[DayPoint]


class RealisticResult(SeriesResult):
    # extrema over every simulated day, not only the sampled chart points
    worst_day: DayPoint
    best_day: DayPoint


class Difference(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount: float
    percentage: float


class ProjectionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    ideal: SeriesResult
    real: RealisticResult
    difference: Difference
    total_contributions: float
    numeric_anomaly: bool = False


# -----------------------------
# Helpers
# -----------------------------


def _validate(params: SimulationParams) -> None:
    errors: List[str] = []
    if not math.isfinite(params.principal) or params.principal <= 0:
        errors.append("principal must be a finite amount greater than 0")
    if params.duration_days < 1:
        errors.append("duration_days must be at least 1")
    if params.max_chart_points < 1:
        errors.append("max_chart_points must be at least 1")
    if errors:
        raise InvalidInput(errors)


def chart_interval(duration_days: int, max_chart_points: int) -> int:
    """Sampling step, rounded up so at most max_chart_points days past day 0 are kept.

    Flooring days / max_chart_points (the mobile app's formula) keeps every day of a
    30-day run with a 20 point budget. Rounding up keeps the chart within
    max_chart_points + 2 points, but samples differently whenever the division is
    inexact: 365 days at 20 points samples every 19 days instead of every 18.
    """
    return max(1, -(-duration_days // max_chart_points))


def _ratio(numerator: float, denominator: float) -> float:
    if denominator == 0 or not math.isfinite(numerator) or not math.isfinite(denominator):
        return 0.0
    return numerator / denominator


def _finite_or_zero(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def estimate_final_amount(principal: float, daily_rate: float, days: int) -> float:
    """Closed-form ideal value without deposits, used for quick previews."""
    return principal * (1 + daily_rate) ** days


# -----------------------------
# Projection
# -----------------------------


def project(params: SimulationParams, rng: Optional[RandomSource] = None) -> ProjectionResult:
    """
    Day-by-day compounding of an ideal (steady rate) and a realistic
    (volatility-perturbed) series.

    Order of operations (per day):
      1) Add the deposit when the day lands on the deposit interval.
      2) Grow the ideal amount at daily_rate.
      3) Grow the realistic amount at daily_rate + u * volatility, u ~ U[-1, 1].
      4) Reset any non-finite amount to the principal (flagged as an anomaly).
      5) Track best/worst realistic day.
      6) Record chart points every `interval` days and on the final day.
    """
    _validate(params)
    rng = rng if rng is not None else random.Random()

    principal = float(params.principal)
    days = params.duration_days
    deposits_enabled = params.deposit_interval_days > 0
    interval = chart_interval(days, params.max_chart_points)

    ideal_amount = principal
    real_amount = principal
    ideal_series: List[DayPoint] = [DayPoint(day=0, amount=principal)]
    real_series: List[DayPoint] = [DayPoint(day=0, amount=principal)]

    total_contributions = principal
    worst_day = DayPoint(day=0, amount=principal)
    best_day = DayPoint(day=0, amount=principal)
    anomaly = False

    for day in range(1, days + 1):
        # 1) deposits land before the day's growth
        if deposits_enabled and day % params.deposit_interval_days == 0:
            ideal_amount += params.deposit_amount
            real_amount += params.deposit_amount
            total_contributions += params.deposit_amount
            if not math.isfinite(total_contributions):
                total_contributions = principal
                anomaly = True

        # 2) ideal growth
        ideal_amount *= 1 + params.daily_rate

        # 3) realistic growth, one independent draw per day
        u = rng.uniform(-1.0, 1.0)
        real_amount *= 1 + (params.daily_rate + u * params.volatility)

        # 4) numeric guard
        if not math.isfinite(ideal_amount):
            ideal_amount = principal
            anomaly = True
        if not math.isfinite(real_amount):
            real_amount = principal
            anomaly = True

        # 5) extrema, strict so ties keep the earliest day
        if real_amount < worst_day.amount:
            worst_day = DayPoint(day=day, amount=real_amount)
        if real_amount > best_day.amount:
            best_day = DayPoint(day=day, amount=real_amount)

        # 6) chart sampling
        if day % interval == 0 or day == days:
            ideal_series.append(DayPoint(day=day, amount=ideal_amount))
            real_series.append(DayPoint(day=day, amount=real_amount))

    if anomaly:
        logger.warning(
            "Non-finite amount clamped to principal (principal=%s, daily_rate=%s, volatility=%s, days=%s)",
            principal,
            params.daily_rate,
            params.volatility,
            days,
        )

    ideal_gain = _finite_or_zero(ideal_amount - total_contributions)
    real_gain = _finite_or_zero(real_amount - total_contributions)
    difference_amount = _finite_or_zero(real_amount - ideal_amount)

    logger.debug(
        "Projected %s days: ideal=%.2f real=%.2f contributions=%.2f",
        days,
        ideal_amount,
        real_amount,
        total_contributions,
    )

    return ProjectionResult(
        ideal=SeriesResult(
            final_amount=ideal_amount,
            total_gain=ideal_gain,
            return_rate=_ratio(ideal_gain, total_contributions),
            series=ideal_series,
        ),
        real=RealisticResult(
            final_amount=real_amount,
            total_gain=real_gain,
            return_rate=_ratio(real_gain, total_contributions),
            series=real_series,
            worst_day=worst_day,
            best_day=best_day,
        ),
        difference=Difference(
            amount=difference_amount,
            percentage=_ratio(difference_amount, ideal_amount),
        ),
        total_contributions=total_contributions,
        numeric_anomaly=anomaly,
    )


def project_seeded(params: SimulationParams, seed: int) -> ProjectionResult:
    """Reproducible projection: the realistic series is drawn from random.Random(seed)."""
    return project(params, rng=random.Random(seed))


__all__ = [
    "DEFAULT_MAX_CHART_POINTS",
    "InvalidInput",
    "RandomSource",
    "SimulationParams",
    "DayPoint",
    "SeriesResult",
    "RealisticResult",
    "Difference",
    "ProjectionResult",
    "chart_interval",
    "estimate_final_amount",
    "project",
    "project_seeded",
]
