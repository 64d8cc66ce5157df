"""
Health check endpoint schemas.

The health endpoint is PUBLIC (no authentication required).
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """
    Response model for GET /health.

    Used by load balancers and deployment checks.
    """

    status: str = Field(
        default="ok",
        description="Health status of the API (always 'ok' if responding)",
        examples=["ok"]
    )
    service: str = Field(
        default="beeconta-api",
        description="Service name"
    )
    environment: str = Field(
        ...,
        description="Deployment environment",
        examples=["development", "production"]
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"status": "ok", "service": "beeconta-api", "environment": "development"}
            ]
        }
    }
