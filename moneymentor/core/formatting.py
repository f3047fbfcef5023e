"""Display helpers shared by the API responses."""

import math
from typing import Dict, Iterable, List, Optional, Union

from moneymentor.core.growth import DayPoint

CURRENCY_SYMBOL = "GH₵"


def format_currency(value: Optional[float], decimals: int = 2) -> str:
    """Format an amount as ``GH₵ 1,234.50``; missing or non-finite values render as zero."""
    if value is None or not math.isfinite(value):
        value = 0.0
    return f"{CURRENCY_SYMBOL} {value:,.{decimals}f}"


def format_percentage(ratio: Optional[float], decimals: int = 2) -> str:
    if ratio is None or not math.isfinite(ratio):
        ratio = 0.0
    return f"{ratio * 100:.{decimals}f}%"


def chart_data(series: Iterable[DayPoint]) -> Dict[str, List[Union[str, float]]]:
    """Labels/values pair for a line chart, skipping points that can't be drawn."""
    points = [point for point in series if math.isfinite(point.amount)]
    return {
        "labels": [str(point.day) for point in points],
        "data": [point.amount for point in points],
    }
