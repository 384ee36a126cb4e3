"""Location search over the gazetteer."""

import logging

from aquamap.config import get_settings
from aquamap.models.schemas import (
    GazetteerEntry,
    SearchOutcome,
    SearchResult,
    SearchStatus,
)
from aquamap.services.gazetteer import get_gazetteer

logger = logging.getLogger(__name__)

# Quick filter buttons shown under the search box
SEARCH_PRESETS: dict[str, str] = {
    "Rivers": "Ganges",
    "Lakes": "Lake",
    "Ports": "Port",
}


class LocationSearchIndex:
    """Case-insensitive substring search over a small gazetteer."""

    def __init__(
        self,
        entries: list[GazetteerEntry] | None = None,
        min_query_length: int | None = None,
        match_category: bool | None = None,
    ) -> None:
        settings = get_settings()
        self._entries = list(entries) if entries is not None else get_gazetteer()
        self.min_query_length = (
            min_query_length
            if min_query_length is not None
            else settings.search_min_query_length
        )
        self.match_category = (
            match_category if match_category is not None else settings.search_match_category
        )

    @property
    def entries(self) -> list[GazetteerEntry]:
        return list(self._entries)

    def _is_searchable(self, query: str) -> bool:
        return len(query) >= self.min_query_length

    def search(self, query: str) -> list[SearchResult]:
        """
        Find entries whose name (or category) contains the query.

        Args:
            query: Raw search text.

        Returns:
            Matches in gazetteer order; empty for short or empty queries.
        """
        needle = query.strip().lower()
        if not self._is_searchable(needle):
            return []

        results: list[SearchResult] = []
        for entry in self._entries:
            name = entry.name.lower()
            if needle in name:
                matched_on = "name"
            elif self.match_category and needle in entry.category.value:
                matched_on = "category"
            else:
                continue
            results.append(
                SearchResult(
                    entry=entry,
                    rank=len(results) + 1,
                    matched_on=matched_on,
                    is_prefix=name.startswith(needle),
                )
            )

        logger.debug("Search %r matched %d entries", needle, len(results))
        return results

    def lookup(self, query: str) -> SearchOutcome:
        """
        Search and report whether a search actually ran.

        Args:
            query: Raw search text.

        Returns:
            SearchOutcome with status idle, results or no_results.
        """
        if not self._is_searchable(query.strip()):
            return SearchOutcome(query=query, status=SearchStatus.IDLE)

        results = self.search(query)
        status = SearchStatus.RESULTS if results else SearchStatus.NO_RESULTS
        return SearchOutcome(query=query, status=status, results=results)

    def result_for(self, name: str) -> SearchResult | None:
        """Search result for the entry with exactly this name, if any."""
        wanted = name.strip().lower()
        for result in self.search(name):
            if result.entry.name.lower() == wanted:
                return result
        return None

    def preset(self, label: str) -> SearchOutcome:
        """Run one of the quick filter searches (Rivers, Lakes, Ports)."""
        query = SEARCH_PRESETS.get(label)
        if query is None:
            return SearchOutcome(query="", status=SearchStatus.IDLE)
        return self.lookup(query)


_search_index: LocationSearchIndex | None = None


def get_search_index() -> LocationSearchIndex:
    """Get or create the default search index."""
    global _search_index
    if _search_index is None:
        _search_index = LocationSearchIndex()
    return _search_index
