"""Pydantic schemas for the service catalog."""

from pydantic import BaseModel, ConfigDict, Field

from salonbook.models.service import ServiceStatus


class ServiceCreate(BaseModel):
    """Schema for adding a service."""

    name: str = Field(..., min_length=1, max_length=255, description="Service name")
    description: str = Field("", description="Service description")
    icon: str = Field("Star", max_length=50, description="Icon name shown next to the service")


class ServiceUpdate(BaseModel):
    """Schema for updating a service (all fields optional)."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    icon: str | None = Field(None, max_length=50)
    status: ServiceStatus | None = None

    model_config = ConfigDict(extra="forbid")


class ServiceResponse(BaseModel):
    """Schema for service responses."""

    id: str
    name: str
    description: str
    icon: str
    status: ServiceStatus
    sort_order: int

    model_config = ConfigDict(from_attributes=True)
