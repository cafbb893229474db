"""AWS connection configuration schema."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AWSConfig(BaseModel):
    """AWS client configuration."""
    model_config = ConfigDict(extra="forbid")

    region: str = Field("us-east-1", description="Default AWS region")
    endpoint_url: Optional[str] = Field(None, description="Custom endpoint URL (e.g. a local emulator)")
    retry_attempts: int = Field(0, ge=0, le=10, description="Retries per request after the first attempt")
    connect_timeout_ms: int = Field(10000, ge=1000, description="Connection timeout in milliseconds")
    read_timeout_ms: int = Field(60000, ge=1000, description="Read timeout in milliseconds")

    @field_validator("region")
    @classmethod
    def validate_region(cls, v: str) -> str:
        """Reject blank region names."""
        if not v or not v.strip():
            raise ValueError("AWS region must not be empty")
        return v.strip()

    @field_validator("endpoint_url")
    @classmethod
    def validate_endpoint_url(cls, v: Optional[str]) -> Optional[str]:
        """Treat a blank endpoint as unset."""
        if v is not None and not v.strip():
            return None
        return v
