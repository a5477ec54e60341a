"""Custom exception hierarchy for the letterform asset pipeline."""

from __future__ import annotations


class StreetTypeError(RuntimeError):
    """Base exception for letterform resolution failures."""


class AssetLoadError(StreetTypeError):
    """Raised by image loaders when a resource cannot be fetched or decoded."""

    def __init__(self, url: str, reason: str | None = None) -> None:
        self.url = url
        self.reason = reason
        message = f"Failed to load image: {url}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class TLSCertificateError(AssetLoadError):
    """Raised when TLS certificate verification fails while fetching assets."""


class UnknownStyleError(StreetTypeError):
    """Raised when a style key has no folder mapping."""

    def __init__(self, style: str) -> None:
        self.style = style
        super().__init__(f"Unknown style key: {style}")


class ConfigurationError(StreetTypeError):
    """Raised when a configuration file cannot be read or validated."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "AssetLoadError",
    "ConfigurationError",
    "StreetTypeError",
    "TLSCertificateError",
    "UnknownStyleError",
    "exception_hint",
    "exception_messages",
]
