"""One-time discovery of the deployed asset layout."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
import logging

from streettype.assets.constants import FALLBACK_BASE_PATH, PROBE_SAMPLE
from streettype.assets.probe import ExistenceProber
from streettype.core.diagnostics import DiagnosticEmitter, NullEmitter


logger = logging.getLogger(__name__)

PLACEHOLDERS = ("base", "city", "letter", "style", "variant")


@dataclass(frozen=True, slots=True)
class PathTemplate:
    """Parametrised asset path such as ``{base}{letter}/{style}/{variant}.jpg``."""

    pattern: str

    def render(self, **values: str) -> str:
        result = self.pattern
        for key in PLACEHOLDERS:
            if key in values:
                result = result.replace("{" + key + "}", values[key])
        return result

    def __str__(self) -> str:
        return self.pattern


@dataclass(frozen=True, slots=True)
class ResolvedBase:
    """Outcome of detection; immutable once produced."""

    base_path: str
    template: PathTemplate | None
    detected: bool


class DetectionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    DETECTING = "detecting"
    DETECTED = "detected"
    FALLBACK_ONLY = "fallback-only"


class PathResolver:
    """Find the first (base path, template) pair serving the canonical probe.

    Candidates are tried base-major, template-minor, stopping at the first
    hit. Exhausting the grid switches to fallback-only mode. Detection runs at
    most once; callers arriving while it is in progress await the same task.
    """

    def __init__(
        self,
        prober: ExistenceProber,
        *,
        base_paths: Iterable[str],
        templates: Iterable[str | PathTemplate],
        sample: Mapping[str, str] | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.prober = prober
        self.base_paths = tuple(base_paths)
        self.templates = tuple(
            item if isinstance(item, PathTemplate) else PathTemplate(item) for item in templates
        )
        self.sample = dict(sample or PROBE_SAMPLE)
        self.emitter = emitter or NullEmitter()
        self.attempts = 0
        self._state = DetectionState.UNINITIALIZED
        self._resolved: ResolvedBase | None = None
        self._task: asyncio.Future[ResolvedBase] | None = None

    @property
    def state(self) -> DetectionState:
        return self._state

    @property
    def resolved(self) -> ResolvedBase | None:
        return self._resolved

    @property
    def complete(self) -> bool:
        return self._resolved is not None

    async def resolve(self) -> ResolvedBase:
        """Return the detected layout, running detection on first use."""
        if self._resolved is not None:
            return self._resolved
        if self._task is None:
            self._state = DetectionState.DETECTING
            self._task = asyncio.ensure_future(self._detect())
        return await asyncio.shield(self._task)

    def candidates(self) -> list[tuple[str, PathTemplate, str]]:
        """Return every (base, template, probe URL) triple in probing order."""
        return [
            (base, template, template.render(base=base, **self.sample))
            for base in self.base_paths
            for template in self.templates
        ]

    async def _detect(self) -> ResolvedBase:
        logger.debug("Trying to detect asset base path...")
        for base, template, probe_url in self.candidates():
            self.attempts += 1
            logger.debug("Testing path: %s", probe_url)
            if await self.prober.exists(probe_url):
                resolved = ResolvedBase(base_path=base, template=template, detected=True)
                self._finish(resolved, DetectionState.DETECTED)
                self.emitter.event(
                    "asset_detected",
                    {"base": base, "template": template.pattern, "probes": self.attempts},
                )
                return resolved

        resolved = ResolvedBase(base_path=FALLBACK_BASE_PATH, template=None, detected=False)
        self._finish(resolved, DetectionState.FALLBACK_ONLY)
        self.emitter.warning(
            "Could not find working asset path. Using fallback rendering mode."
        )
        self.emitter.event("asset_fallback_mode", {"probes": self.attempts})
        return resolved

    def _finish(self, resolved: ResolvedBase, state: DetectionState) -> None:
        self._resolved = resolved
        self._state = state


__all__ = [
    "DetectionState",
    "PLACEHOLDERS",
    "PathResolver",
    "PathTemplate",
    "ResolvedBase",
]
