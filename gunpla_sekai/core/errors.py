"""Domain errors.

Services raise these; the server maps them onto HTTP responses using
``status_code`` and ``detail``.
"""

from __future__ import annotations

from typing import Optional, Sequence


class GunplaSekaiError(Exception):
    """Base error for all domain failures."""

    status_code: int = 500

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class NotFoundError(GunplaSekaiError):
    status_code = 404

    def __init__(self, resource: str, detail: Optional[str] = None) -> None:
        super().__init__(detail or f"{resource} not found")
        self.resource = resource


class PermissionDeniedError(GunplaSekaiError):
    status_code = 403

    def __init__(self, detail: str = "Unauthorized") -> None:
        super().__init__(detail)


class UnauthorizedError(GunplaSekaiError):
    status_code = 401

    def __init__(self, detail: str = "Not authenticated") -> None:
        super().__init__(detail)


class BadRequestError(GunplaSekaiError):
    status_code = 400


class ConflictError(GunplaSekaiError):
    status_code = 409


class ValidationFailedError(GunplaSekaiError):
    """Raised with every collected validation problem at once."""

    status_code = 422

    def __init__(self, errors: Sequence[str] | str) -> None:
        if isinstance(errors, str):
            self.errors = [errors]
            super().__init__(errors)
            return
        self.errors = list(errors)
        super().__init__(f"Validation failed: {', '.join(self.errors)}")


class ConfigurationError(GunplaSekaiError):
    """A required provider credential is missing."""

    status_code = 500

    def __init__(self, provider: str, missing: Sequence[str]) -> None:
        self.provider = provider
        self.missing = list(missing)
        super().__init__(f"{provider} is not configured: missing {', '.join(self.missing)}")
