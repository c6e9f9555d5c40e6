"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field, field_validator, model_validator
from datetime import datetime

from che_shortener.store.models import URLRecord


class CreateURLRequest(BaseModel):
    """Request to shorten a URL."""
    
    url: str = Field("", description="The absolute URL to shorten")
    
    @model_validator(mode="before")
    @classmethod
    def null_body_as_empty(cls, data):
        """A JSON null body carries no URL."""
        return {} if data is None else data
    
    @field_validator("url", mode="before")
    @classmethod
    def null_url_as_empty(cls, v):
        """Treat a null url like a missing one."""
        return "" if v is None else v
    
    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/a-very-long-url"},
            ]
        }
    }


class CreateURLResponse(BaseModel):
    """Response after shortening a URL."""
    
    short_code: str = Field(..., description="The generated adjective-noun code")
    
    model_config = {
        "json_schema_extra": {
            "examples": [
                {"short_code": "jolly-otter"},
            ]
        }
    }


class URLRecordResponse(BaseModel):
    """One stored URL record."""
    
    short_code: str
    long_url: str
    created_at: str = Field(..., description="RFC 3339 creation time (UTC)")
    usage_count: int
    
    @classmethod
    def from_record(cls, record: URLRecord) -> "URLRecordResponse":
        return cls(**record.to_dict())


class HealthResponse(BaseModel):
    """Health check response."""
    
    status: str = Field(..., description="Overall status")
    store: str = Field(..., description="Record store status")
    total_urls: int = Field(..., description="Number of stored records")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""
    
    error: str = Field(..., description="Error message")
