from pydantic import BaseModel, Field


class ServicesStatus(BaseModel):
    """Status of services the API depends on."""

    database: str = Field(description="Database connectivity: 'healthy' or 'unhealthy'")


class HealthCheckResponse(BaseModel):
    """Health check response model."""

    version: str = Field(description="API version")
    status: str = Field(description="Overall health status")
    timestamp: str = Field(description="Current timestamp")
    services: ServicesStatus = Field(description="Status of dependent services")
