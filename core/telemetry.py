"""Per-cycle search telemetry, reported to PostHog."""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from posthog import Posthog

logger = logging.getLogger(__name__)

DISTINCT_ID = "movie-search-service"

STEP_EVENT = "search_step"
SUMMARY_EVENT = "search_completed"


@dataclass
class StepResult:
    name: str
    duration_ms: float
    success: bool = True
    error_type: str | None = None


@dataclass
class CycleTelemetry:
    """Timings and OMDb call counts for one search cycle.

    Steps are kept in the order they ran; a cycle that goes stale after the
    search step simply has no enrichment step.
    """

    token: int
    query_length: int
    steps: list[StepResult] = field(default_factory=list)
    omdb_calls: int = 0
    started: float = field(default_factory=time.perf_counter)

    @contextmanager
    def track_step(self, name: str):
        """Time the enclosed block as step ``name``; exceptions mark it failed."""
        step = StepResult(name=name, duration_ms=0.0)
        self.steps.append(step)
        step_start = time.perf_counter()
        try:
            yield step
        except Exception as e:
            step.success = False
            step.error_type = type(e).__name__
            raise
        finally:
            step.duration_ms = (time.perf_counter() - step_start) * 1000

    def mark_failed(self, name: str, error_type: str) -> None:
        """Flag the latest step called ``name`` as failed."""
        for step in reversed(self.steps):
            if step.name == name:
                step.success = False
                step.error_type = error_type
                return
        logger.debug(f"No step '{name}' to mark failed in cycle {self.token}")

    def count_omdb_calls(self, count: int = 1) -> None:
        self.omdb_calls += count

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self.started) * 1000

    def summary(self, outcome: str, stale: bool, results_count: int = 0) -> dict[str, Any]:
        """Properties of the cycle's summary event."""
        return {
            "token": self.token,
            "query_length": self.query_length,
            "outcome": outcome,
            "stale": stale,
            "results_count": results_count,
            "omdb_calls": self.omdb_calls,
            "total_duration_ms": round(self.elapsed_ms, 2),
            "steps": {f"{step.name}_ms": round(step.duration_ms, 2) for step in self.steps},
        }

    def send_to_posthog(
        self,
        posthog_client: Posthog,
        outcome: str,
        stale: bool,
        results_count: int = 0,
    ) -> None:
        """Send one step event per step, then the summary event.

        Args:
            posthog_client: PostHog client instance
            outcome: Mode kind the cycle produced, or "skipped" if it went stale early
            stale: Whether a newer cycle had started by the time this one finished
            results_count: Number of enriched titles
        """
        for step in self.steps:
            posthog_client.capture(
                distinct_id=DISTINCT_ID,
                event=STEP_EVENT,
                properties={
                    "token": self.token,
                    "step": step.name,
                    "duration_ms": round(step.duration_ms, 2),
                    "success": step.success,
                    "error_type": step.error_type,
                },
            )

        posthog_client.capture(
            distinct_id=DISTINCT_ID,
            event=SUMMARY_EVENT,
            properties=self.summary(outcome, stale, results_count),
        )
        logger.debug(f"Sent telemetry for cycle {self.token}: {len(self.steps)} steps")
