"""Detail fan-out: turn search matches into a complete ResultSet."""

import asyncio
import logging
from collections.abc import Sequence
from typing import Protocol

from catalog.models import CatalogResult, DetailRecord, MatchSummary
from search.models import ResultSet

logger = logging.getLogger(__name__)


class DetailFetcher(Protocol):
    async def fetch_detail(self, imdb_id: str) -> CatalogResult[DetailRecord]: ...


async def enrich(
    summaries: Sequence[MatchSummary],
    catalog: DetailFetcher,
) -> CatalogResult[ResultSet]:
    """Fetch the detail record for every match concurrently.

    All-or-nothing: if any fetch fails the whole enrichment fails with the
    failure that arrived first, and the successful records are discarded.
    Output order follows ``summaries``, not completion order.
    """
    if not summaries:
        return CatalogResult.success(ResultSet())

    arrival: list[int] = []

    async def fetch_one(position: int, summary: MatchSummary) -> CatalogResult[DetailRecord]:
        result = await catalog.fetch_detail(summary.imdb_id)
        arrival.append(position)
        return result

    results = await asyncio.gather(
        *[fetch_one(position, summary) for position, summary in enumerate(summaries)]
    )

    failed = [position for position in arrival if not results[position].ok]
    if failed:
        first = results[failed[0]]
        logger.warning(
            f"Enrichment failed: {len(failed)}/{len(summaries)} detail lookups failed, "
            f"first was {summaries[failed[0]].imdb_id}"
        )
        return CatalogResult.failure(first.error)

    records = tuple(result.value for result in results)
    logger.info(f"Enriched {len(records)} matches")
    return CatalogResult.success(ResultSet(items=records))
