"""Financial products offered in the simulator and their growth constants."""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping

from pydantic import BaseModel, ConfigDict, Field

from moneymentor.core.growth import DEFAULT_MAX_CHART_POINTS, SimulationParams

DEFAULT_PRODUCTS: Dict[str, Dict[str, object]] = {
    "conservative": {
        "label": "DigiSave",
        "description": "Low Risk",
        "daily_rate": 0.0002,
        "volatility": 0.001,
        "performance": "12%",
    },
    "balanced": {
        "label": "EuroBond",
        "description": "Medium Risk",
        "daily_rate": 0.0004,
        "volatility": 0.002,
        "performance": "17%",
    },
    "aggressive": {
        "label": "Global Tech",
        "description": "High Risk",
        "daily_rate": 0.0007,
        "volatility": 0.004,
        "performance": "24%",
    },
}

# choices offered by the input screen, in days
DURATION_PRESETS: List[int] = [30, 90, 180, 365]
DEPOSIT_FREQUENCY_PRESETS: Dict[str, int] = {
    "none": 0,
    "daily": 1,
    "weekly": 7,
    "monthly": 30,
}


class UnknownProduct(KeyError):
    pass


class Product(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    label: str
    description: str = ""
    daily_rate: float
    volatility: float = Field(0.0, ge=0)
    performance: str = ""


class ProductCatalog:
    """Ordered, read-only lookup of products by id."""

    def __init__(self, products: Iterable[Product]):
        self._products: Dict[str, Product] = {}
        for product in products:
            self._products[product.id] = product

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Mapping[str, object]]) -> "ProductCatalog":
        return cls(Product.model_validate({"id": key, **dict(value)}) for key, value in mapping.items())

    def get(self, product_id: str) -> Product:
        try:
            return self._products[product_id]
        except KeyError:
            raise UnknownProduct(product_id) from None

    def all(self) -> List[Product]:
        return list(self._products.values())

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._products

    def __len__(self) -> int:
        return len(self._products)


def build_params(
    product: Product,
    amount: float,
    days: int,
    deposit_amount: float = 0.0,
    deposit_interval_days: int = 0,
    max_chart_points: int = DEFAULT_MAX_CHART_POINTS,
) -> SimulationParams:
    return SimulationParams(
        principal=amount,
        daily_rate=product.daily_rate,
        volatility=product.volatility,
        duration_days=days,
        deposit_amount=deposit_amount,
        deposit_interval_days=deposit_interval_days,
        max_chart_points=max_chart_points,
    )


__all__ = [
    "DEFAULT_PRODUCTS",
    "DURATION_PRESETS",
    "DEPOSIT_FREQUENCY_PRESETS",
    "UnknownProduct",
    "Product",
    "ProductCatalog",
    "build_params",
]
