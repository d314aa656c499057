"""Error taxonomy shared by the judge service and the drawing session."""

from __future__ import annotations

from typing import Optional


class DoodleGameError(Exception):
    """Base error carrying an HTTP-style status and a readable message."""

    status_code = 500

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        detail: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.detail = detail or message

    def to_payload(self) -> dict:
        return {"error": self.message, "detail": self.detail}


class ConfigurationError(DoodleGameError):
    """The server is missing something it needs, e.g. an upstream credential."""

    status_code = 500


class ValidationError(DoodleGameError):
    """A submission lacks required fields."""

    status_code = 400


class UpstreamError(DoodleGameError):
    """The judge call failed or returned content that could not be used."""

    status_code = 500


class ResourceLoadError(DoodleGameError):
    """A static resource (the prompt list) could not be loaded."""

    status_code = 404


__all__ = [
    "ConfigurationError",
    "DoodleGameError",
    "ResourceLoadError",
    "UpstreamError",
    "ValidationError",
]
