from unittest.mock import patch

import cloudinary.utils
import pytest

from gunpla_sekai.core.errors import ConfigurationError
from gunpla_sekai.server.core.config import CloudinaryConfig
from gunpla_sekai.server.services.uploads import sign_upload

CONFIG = CloudinaryConfig(cloud_name="gunpla-sekai", api_key="123456789012345", api_secret="test-secret")


class TestSignUpload:
    def test_signs_fixed_parameter_set(self):
        with patch("gunpla_sekai.server.services.uploads.time.time", return_value=1717171717.9):
            signed = sign_upload("builds", config=CONFIG)

        assert signed.timestamp == 1717171717
        assert signed.folder == "builds"
        assert signed.api_key == "123456789012345"
        assert signed.cloud_name == "gunpla-sekai"
        assert signed.signature == cloudinary.utils.api_sign_request(
            {
                "timestamp": 1717171717,
                "folder": "builds",
                "eager": "q_auto,f_auto",
                "use_filename": "true",
                "unique_filename": "true",
            },
            "test-secret",
        )

    def test_default_folder(self):
        assert sign_upload(config=CONFIG).folder == "uploads"
        assert sign_upload("", config=CONFIG).folder == "uploads"

    def test_signature_depends_on_secret(self):
        other = CONFIG.model_copy(update={"api_secret": "another-secret"})
        with patch("gunpla_sekai.server.services.uploads.time.time", return_value=1717171717):
            assert sign_upload(config=CONFIG).signature != sign_upload(config=other).signature

    def test_lists_every_missing_credential(self):
        with pytest.raises(ConfigurationError) as exc_info:
            sign_upload(config=CloudinaryConfig(cloud_name="gunpla-sekai"))

        assert exc_info.value.status_code == 500
        assert exc_info.value.missing == ["CLOUDINARY_API_KEY", "CLOUDINARY_API_SECRET"]
        assert str(exc_info.value) == "Cloudinary is not configured: missing CLOUDINARY_API_KEY, CLOUDINARY_API_SECRET"
