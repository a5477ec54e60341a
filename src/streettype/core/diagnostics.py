"""Diagnostic abstractions shared across the asset pipeline."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger(__name__)


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """Interface used to surface warnings, errors, and structured events."""

    debug_enabled: bool

    def warning(self, message: str, exc: BaseException | None = None) -> None: ...

    def error(self, message: str, exc: BaseException | None = None) -> None: ...

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


class NullEmitter:
    """Emitter that ignores every diagnostic."""

    debug_enabled: bool = False

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        return

    def error(self, message: str, exc: BaseException | None = None) -> None:
        return

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        return


class LoggingEmitter:
    """Emitter that forwards diagnostics to the standard logging module."""

    def __init__(
        self, *, logger_obj: logging.Logger | None = None, debug_enabled: bool = False
    ) -> None:
        self._logger = logger_obj or logger
        self.debug_enabled = debug_enabled

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        if exc is not None and self.debug_enabled:
            self._logger.warning(message, exc_info=exc)
        else:
            self._logger.warning(message)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        if exc is not None:
            self._logger.error(message, exc_info=exc)
        else:
            self._logger.error(message)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        message = format_event_message(name, payload)
        if message:
            self._logger.info(message)
            return
        self._logger.debug("diagnostic event %s: %s", name, dict(payload))


def format_event_message(name: str, payload: Mapping[str, Any]) -> str | None:
    """Return a human-friendly summary for selected diagnostic events."""
    data = dict(payload)

    if name == "asset_probe":
        url = data.get("url") or "<unknown>"
        if data.get("timeout"):
            return f"Timeout checking path: {url}"
        state = "exists" if data.get("exists") else "missing"
        return f"Probed {url}: {state}"

    if name == "asset_detected":
        template = data.get("template") or "<unknown>"
        base = data.get("base")
        probes = data.get("probes")
        suffix = f" after {probes} probes" if probes is not None else ""
        return f"Found working path pattern: {template} with base: '{base}'{suffix}"

    if name == "asset_fallback_mode":
        probes = data.get("probes")
        suffix = f" ({probes} probes)" if probes is not None else ""
        return f"Could not find working asset path, using fallback rendering mode{suffix}"

    if name == "asset_load":
        url = data.get("url") or "<unknown>"
        width = data.get("width")
        height = data.get("height")
        if width and height:
            return f"Loaded image: {url} ({width}x{height})"
        return f"Loaded image: {url}"

    if name == "text_resolved":
        count = data.get("count", 0)
        fallbacks = data.get("fallbacks", 0)
        return f"Resolved {count} letters ({fallbacks} fallbacks)"

    return None


__all__ = [
    "DiagnosticEmitter",
    "LoggingEmitter",
    "NullEmitter",
    "format_event_message",
]
