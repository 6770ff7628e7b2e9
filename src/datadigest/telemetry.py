"""Opt-in timings and run metrics for digest runs.

Telemetry stays off unless ``DATADIGEST_TELEMETRY=1`` (or ``DEBUG=1``) is set
when this module is imported and the executor is given at least one reporter.
While off, every call goes to one shared context that records nothing.

Scopes nest: a scope opened inside ``digest`` reports as ``digest.<name>``,
and metrics take the path of the scope they are recorded in.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from contextvars import ContextVar
import logging
import os
import time
from typing import Any, Protocol

log = logging.getLogger(__name__)

_open_scopes: ContextVar[tuple[str, ...]] = ContextVar(
    "datadigest_open_scopes", default=()
)

# Read once at import
_TELEMETRY_ENABLED = (
    os.getenv("DATADIGEST_TELEMETRY") == "1" or os.getenv("DEBUG") == "1"
)


class TelemetryReporter(Protocol):
    """Receives scope timings and run metrics."""

    def record_timing(self, scope: str, duration: float, **metadata: Any) -> None: ...  # noqa: D102
    def record_metric(self, scope: str, value: float, **metadata: Any) -> None: ...  # noqa: D102


class _DisabledTelemetry:
    """Shared context used while telemetry is off."""

    __slots__ = ()

    @contextmanager
    def scope(self, name: str, **metadata: Any) -> Iterator[None]:  # noqa: ARG002
        yield

    def metric(self, name: str, value: float, **metadata: Any) -> None:
        pass

    def count(self, name: str, **metadata: Any) -> None:
        pass


class _RecordingTelemetry:
    """Context that forwards timings and metrics to its reporters."""

    __slots__ = ("_reporters",)

    def __init__(self, reporters: Sequence[TelemetryReporter]):
        self._reporters = tuple(reporters)

    @contextmanager
    def scope(self, name: str, **metadata: Any) -> Iterator[None]:
        """Time the enclosed block and report it under the nested scope path."""
        if not name:
            raise ValueError("Scope name must be a non-empty string")
        parents = _open_scopes.get()
        token = _open_scopes.set((*parents, name))
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - start
            _open_scopes.reset(token)
            path = ".".join((*parents, name))
            self._emit("record_timing", path, elapsed, metadata)

    def metric(self, name: str, value: float, **metadata: Any) -> None:
        """Report a value under the innermost open scope."""
        path = ".".join((*_open_scopes.get(), name))
        self._emit("record_metric", path, value, metadata)

    def count(self, name: str, **metadata: Any) -> None:
        """Report one occurrence of ``name``."""
        self.metric(name, 1, **metadata)

    def _emit(
        self, method: str, path: str, value: float, metadata: dict[str, Any]
    ) -> None:
        for reporter in self._reporters:
            try:
                getattr(reporter, method)(path, value, **metadata)
            except Exception:
                log.exception(
                    "Telemetry reporter %s failed on %s", type(reporter).__name__, path
                )


_DISABLED = _DisabledTelemetry()

type Telemetry = _RecordingTelemetry | _DisabledTelemetry


def TelemetryContext(*reporters: TelemetryReporter) -> Telemetry:  # noqa: N802
    """Return a recording context, or the shared disabled one.

    Recording needs both the environment toggle and at least one reporter.
    """
    if _TELEMETRY_ENABLED and reporters:
        return _RecordingTelemetry(reporters)
    return _DISABLED


class InMemoryReporter:
    """Reporter that keeps every timing and metric, grouped by scope path."""

    def __init__(self) -> None:
        self.timings: defaultdict[str, list[tuple[float, dict[str, Any]]]] = (
            defaultdict(list)
        )
        self.metrics: defaultdict[str, list[tuple[float, dict[str, Any]]]] = (
            defaultdict(list)
        )

    def record_timing(self, scope: str, duration: float, **metadata: Any) -> None:
        self.timings[scope].append((duration, metadata))

    def record_metric(self, scope: str, value: float, **metadata: Any) -> None:
        self.metrics[scope].append((value, metadata))

    def total(self, scope: str) -> float:
        """Sum of the metric values recorded under ``scope``."""
        return sum(value for value, _ in self.metrics.get(scope, ()))
