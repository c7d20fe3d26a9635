"""Most active commenters leaderboard.

Scans the whole comments table at a majority consistency level and ranks
authors by how many comments they wrote. Reads at QUORUM (or stronger)
only see writes a majority of replicas acknowledged, so a critic's count
never includes a comment that could still be rolled back.
"""

import heapq
from collections import Counter
from collections.abc import Mapping

import structlog

from mflix_store.core.database.base import CassandraStore
from mflix_store.core.errors import DataAccessError
from mflix_store.core.results import Err, Ok, Result

from .models import Critic


logger = structlog.get_logger(__name__)


def rank_critics(counts: Mapping[str, int], limit: int) -> list[Critic]:
    """Order authors by comment count descending, ties by author ascending."""
    top = heapq.nsmallest(limit, counts.items(), key=lambda item: (-item[1], item[0]))
    return [Critic(user_identity=author, comment_count=count) for author, count in top]


class LeaderboardAggregator(CassandraStore):
    """Computes the top commenters from the comments table."""

    def _prepare_statements(self) -> None:
        self._select_authors = self._prepare_read(
            f"SELECT author_email FROM {self.keyspace}.comments",
            consistency=self.config.leaderboard_consistency,
        )
        self._select_authors.fetch_size = self.config.leaderboard_page_size

    async def count_by_author(self) -> Counter[str]:
        """Count comments per author across every page of the table.

        Pages are requested explicitly with ``paging_state`` so iteration
        never triggers a blocking fetch inside the event loop.

        Raises:
            PersistenceError: a page could not be read at the required level
        """
        counts: Counter[str] = Counter()
        paging_state = None
        pages = 0

        while True:
            result = await self._execute(
                self._select_authors, None, paging_state=paging_state
            )
            pages += 1
            for row in result.current_rows:
                if row.author_email:
                    counts[row.author_email] += 1

            paging_state = result.paging_state
            if not paging_state:
                break

        logger.debug("leaderboard_scan_completed", pages=pages, authors=len(counts))
        return counts

    async def most_active_commenters(self) -> Result[list[Critic]]:
        """Return at most ``leaderboard_size`` critics, most active first."""
        try:
            counts = await self.count_by_author()
        except DataAccessError as e:
            logger.error("leaderboard_failed", code=e.code, error=e.message)
            return Err(e)

        return Ok(rank_critics(counts, self.config.leaderboard_size))
