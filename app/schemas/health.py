"""Pydantic schema for the health check response."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Service status plus result of the database probe."""

    status: Literal["ok"] = Field(default="ok", description="Service status")
    environment: str = Field(description="APP_ENV the service runs with (dev or prod)")
    database: Literal["connected", "disconnected"] = Field(
        description="Whether SELECT 1 against DATABASE_URL succeeded",
    )
