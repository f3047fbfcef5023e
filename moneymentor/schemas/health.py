"""Pydantic schema for the health-check endpoint."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    version: str
    products: int
