"""
Upload Service.

Browsers upload images straight to Cloudinary. The server only signs the
upload parameters and then records the resulting asset.
"""

from __future__ import annotations

import time
from typing import List, Optional

import cloudinary.utils
from sqlalchemy.ext.asyncio import AsyncSession

from gunpla_sekai.core.database.repositories import UploadRepository
from gunpla_sekai.core.errors import ConfigurationError, NotFoundError
from gunpla_sekai.core.logging_config import get_logger
from gunpla_sekai.core.models.io.uploads import UploadCreate, UploadRead, UploadSignatureRead
from gunpla_sekai.server.core.config import CloudinaryConfig, settings

logger = get_logger(__name__)

DEFAULT_UPLOAD_FOLDER = "uploads"
EAGER_TRANSFORMATION = "q_auto,f_auto"


def sign_upload(folder: Optional[str] = None, config: Optional[CloudinaryConfig] = None) -> UploadSignatureRead:
    """
    Sign the parameters of a direct Cloudinary upload.

    The client must send exactly the signed parameters (timestamp, folder,
    eager transformation, use_filename and unique_filename) along with the
    returned signature and api key.

    Raises:
        ConfigurationError: When any Cloudinary credential is missing.
    """
    config = config or settings.cloudinary
    missing = [
        name
        for name, value in (
            ("CLOUDINARY_CLOUD_NAME", config.cloud_name),
            ("CLOUDINARY_API_KEY", config.api_key),
            ("CLOUDINARY_API_SECRET", config.api_secret),
        )
        if not value
    ]
    if missing:
        raise ConfigurationError("Cloudinary", missing)

    timestamp = int(time.time())
    folder = folder or DEFAULT_UPLOAD_FOLDER
    params = {
        "timestamp": timestamp,
        "folder": folder,
        "eager": EAGER_TRANSFORMATION,
        "use_filename": "true",
        "unique_filename": "true",
    }
    signature = cloudinary.utils.api_sign_request(params, config.api_secret)
    return UploadSignatureRead(
        signature=signature,
        timestamp=timestamp,
        api_key=config.api_key,
        cloud_name=config.cloud_name,
        folder=folder,
    )


class UploadService:
    def __init__(self, session: AsyncSession) -> None:
        self.uploads = UploadRepository(session)

    async def record(self, user_id: str, data: UploadCreate) -> UploadRead:
        upload = await self.uploads.create_for_user(user_id, data)
        logger.info(f"Recorded upload {upload.public_id} for user {user_id}")
        return UploadRead.model_validate(upload)

    async def delete(self, upload_id: str, user_id: str) -> None:
        upload = await self.uploads.get_by_id(upload_id)
        if upload is None or upload.uploaded_by_id != user_id:
            raise NotFoundError("Upload", "Upload not found or unauthorized")
        await self.uploads.delete_with_links(upload)
        logger.info(f"Deleted upload {upload_id}")

    async def list_for_user(self, user_id: str, limit: int = 50) -> List[UploadRead]:
        return [UploadRead.model_validate(u) for u in await self.uploads.list_for_user(user_id, limit)]
