"""Data contracts for the simulation endpoints."""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from moneymentor.core.growth import ProjectionResult
from moneymentor.core.products import Product

# largest amount the simulator accepts for the principal or a single deposit
MAX_AMOUNT = 1_000_000_000.0


class SimulationRequest(BaseModel):
    """Inputs sent by the simulator screen."""

    model_config = ConfigDict(extra="forbid")

    product_id: str = Field(..., min_length=1, description="Product identifier, e.g. 'balanced'.")
    amount: float = Field(
        ...,
        gt=0,
        le=MAX_AMOUNT,
        allow_inf_nan=False,
        description="Initial amount invested on day 0.",
    )
    days: int = Field(..., ge=1, le=3650, description="Number of days to simulate.")
    deposit_amount: float = Field(
        0.0,
        ge=0,
        le=MAX_AMOUNT,
        allow_inf_nan=False,
        description="Amount added on every deposit day.",
    )
    frequency: int = Field(
        0,
        ge=0,
        description="Days between deposits; 0 disables recurring deposits.",
    )
    max_chart_points: Optional[int] = Field(
        None,
        ge=1,
        le=365,
        description="Chart point budget; defaults to the server setting.",
    )
    seed: Optional[int] = Field(
        None,
        description="Seed for the realistic series, for reproducible runs.",
    )


class SimulationSummary(BaseModel):
    """Pre-formatted strings for the results screen."""

    ideal_final: str
    real_final: str
    ideal_gain: str
    real_gain: str
    ideal_return: str
    real_return: str
    lowest_point: str
    highest_point: str


class SimulationResponse(BaseModel):
    product: Product
    result: ProjectionResult
    summary: SimulationSummary
    charts: Dict[str, Dict[str, List]]


class ProductsResponse(BaseModel):
    products: List[Product]
    durations: List[int]
    frequencies: Dict[str, int]
