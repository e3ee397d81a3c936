"""
Upload I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UploadCreate(BaseModel):
    """Metadata of an asset the client already uploaded to Cloudinary."""

    cloudinary_asset_id: str = Field(description="Cloudinary asset_id")
    public_id: str
    url: str
    eager_url: Optional[str] = None
    format: str
    resource_type: str = "image"
    size: int = Field(default=0, ge=0)
    original_filename: str = ""


class UploadRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    cloudinary_asset_id: str
    public_id: str
    url: str
    eager_url: Optional[str] = None
    format: str
    resource_type: str
    size: int
    original_filename: str
    uploaded_at: datetime
    uploaded_by_id: str


class UploadSignatureRequest(BaseModel):
    folder: Optional[str] = None


class UploadSignatureRead(BaseModel):
    signature: str
    timestamp: int
    api_key: str
    cloud_name: str
    folder: str
