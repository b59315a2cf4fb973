"""Search state machine: the single owner of the current UIMode.

Transitions:
    idle -> searching                on a non-empty query
    searching -> error | populated   on the cycle's outcome
    error | populated -> searching   on a new query
    any -> idle                      on clear

Each submitted query starts a cycle with a new, strictly increasing token.
A cycle's outcome is applied only while its token is still the latest one,
so when queries overlap the last submission wins. Outdated cycles are never
cancelled; their results are dropped when they arrive.
"""

import logging
from typing import Protocol

from posthog import Posthog

from catalog.models import CatalogResult, MatchSummary
from core.sentry import capture_exception
from core.telemetry import CycleTelemetry
from search.enrichment import DetailFetcher, enrich
from search.models import (
    FETCH_ERROR_MESSAGE,
    NO_RESULTS_MESSAGE,
    ClearSearch,
    SearchCommand,
    SubmitQuery,
    UIMode,
    parse_query,
)
from ui.presenter import Presenter

logger = logging.getLogger(__name__)


class SearchCatalog(DetailFetcher, Protocol):
    async def search_by_keyword(self, query: str) -> CatalogResult[list[MatchSummary]]: ...


class SearchStateMachine:
    """Drives UIMode from user commands and catalog outcomes."""

    def __init__(
        self,
        catalog: SearchCatalog,
        presenter: Presenter,
        posthog_client: Posthog | None = None,
    ):
        self._catalog = catalog
        self._presenter = presenter
        self._posthog = posthog_client
        self._token = 0
        self._mode = UIMode.idle()
        self._apply(self._mode)

    @property
    def mode(self) -> UIMode:
        return self._mode

    @property
    def token(self) -> int:
        """Token of the most recently started cycle (0 before the first)."""
        return self._token

    async def dispatch(self, command: SearchCommand) -> UIMode:
        """Apply one command and return the mode current afterwards."""
        if isinstance(command, SubmitQuery):
            return await self._submit(command.text)
        if isinstance(command, ClearSearch):
            self._issue_token()
            self._apply(UIMode.idle())
            return self._mode
        raise TypeError(f"Unknown search command: {command!r}")

    def _issue_token(self) -> int:
        self._token += 1
        return self._token

    def _is_current(self, token: int) -> bool:
        return token == self._token

    def _apply(self, mode: UIMode) -> None:
        self._mode = mode
        self._presenter.render_mode(mode)
        self._presenter.set_background_animation(mode.background_active)

    async def _submit(self, text: str) -> UIMode:
        query = parse_query(text)
        if query is None:
            logger.debug("Ignoring blank query")
            return self._mode

        token = self._issue_token()
        logger.info(f"Search cycle {token} started for '{query}'")
        self._apply(UIMode.searching())

        telemetry = CycleTelemetry(token=token, query_length=len(query))
        try:
            outcome = await self._run_cycle(query, token, telemetry)
        except Exception as e:
            logger.error(f"Search cycle {token} failed unexpectedly: {e}")
            capture_exception(e, context={"query": query, "token": token})
            outcome = UIMode.error(FETCH_ERROR_MESSAGE)

        stale = outcome is None or not self._is_current(token)
        if stale:
            logger.info(f"Discarding outcome of stale cycle {token} (latest is {self._token})")
        else:
            self._apply(outcome)
            logger.info(f"Search cycle {token} finished: {outcome.kind}")

        self._send_telemetry(telemetry, outcome, stale)
        return self._mode

    async def _run_cycle(
        self, query: str, token: int, telemetry: CycleTelemetry
    ) -> UIMode | None:
        """Search then enrich. Returns None if the cycle went stale before enrichment."""
        with telemetry.track_step("catalog_search"):
            telemetry.count_omdb_calls()
            search = await self._catalog.search_by_keyword(query)

        if search.error is not None:
            telemetry.mark_failed("catalog_search", str(search.error.kind))
            if search.error.is_not_found:
                return UIMode.error(NO_RESULTS_MESSAGE)
            return UIMode.error(FETCH_ERROR_MESSAGE)

        if not self._is_current(token):
            return None

        summaries = search.value or []
        with telemetry.track_step("enrichment"):
            telemetry.count_omdb_calls(len(summaries))
            enriched = await enrich(summaries, self._catalog)

        if enriched.error is not None or enriched.value is None:
            telemetry.mark_failed("enrichment", "all_or_nothing")
            return UIMode.error(FETCH_ERROR_MESSAGE)

        return UIMode.populated(enriched.value)

    def _send_telemetry(
        self,
        telemetry: CycleTelemetry,
        outcome: UIMode | None,
        stale: bool,
    ) -> None:
        if self._posthog is None:
            return
        results = outcome.results if outcome is not None else None
        telemetry.send_to_posthog(
            self._posthog,
            outcome=str(outcome.kind) if outcome is not None else "skipped",
            stale=stale,
            results_count=len(results) if results is not None else 0,
        )
