"""
Pydantic schemas for audit requests.
"""

from pydantic import BaseModel, ConfigDict, Field


class AuditRequest(BaseModel):
    """Request to audit a site."""
    url: str = Field(..., description="Bare domain or URL of the site to audit")
    force_refresh: bool = Field(False, description="Ignore a cached result and crawl again")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "url": "example.com",
                "force_refresh": False
            }
        }
    )
