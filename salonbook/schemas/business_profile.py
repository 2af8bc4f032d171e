"""Business profile schemas."""

from pydantic import BaseModel, ConfigDict, Field


class BusinessProfileUpdate(BaseModel):
    """Schema for updating the profile - all fields optional."""

    owner_name: str | None = Field(None, max_length=255)
    business_name: str | None = Field(None, max_length=255)

    model_config = ConfigDict(extra="forbid")


class BusinessProfileResponse(BaseModel):
    """Schema for profile responses."""

    owner_name: str
    business_name: str

    model_config = ConfigDict(from_attributes=True)
