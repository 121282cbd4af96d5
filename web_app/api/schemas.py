"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""

    url: str = Field(..., description="The URL to shorten", min_length=1)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
            ]
        }
    }


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""

    short_url: str = Field(..., description="The short code (also the redirect path)")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"short_url": "1f3870be"},
            ]
        }
    }
