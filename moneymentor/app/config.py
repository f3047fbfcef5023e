import os

from moneymentor.core.growth import DEFAULT_MAX_CHART_POINTS
from moneymentor.core.products import DEFAULT_PRODUCTS


def _csv(value):
    return [item.strip() for item in value.split(",") if item.strip()]


class Config:
    # App configuration
    VERSION = "0.1.0"
    TESTING = False
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Frontend dev servers (Expo web, Vite)
    CORS_ORIGINS = _csv(
        os.environ.get(
            "CORS_ORIGINS",
            "http://localhost:8081,http://localhost:19006,http://localhost:5173",
        )
    )

    # Simulation configuration
    MAX_CHART_POINTS = int(os.environ.get("MAX_CHART_POINTS", DEFAULT_MAX_CHART_POINTS))
    PRODUCTS = DEFAULT_PRODUCTS


class TestingConfig(Config):
    TESTING = True
    LOG_LEVEL = "DEBUG"
