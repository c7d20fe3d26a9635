"""Movie comments module.

Provides:
- Comment CRUD with author ownership enforced by conditional writes
- Most active commenters leaderboard
"""

from .leaderboard import LeaderboardAggregator, rank_critics
from .models import COMMENTS_TABLES_CQL, Comment, Critic, new_comment
from .store import CommentStore


__all__ = [
    "COMMENTS_TABLES_CQL",
    "Comment",
    "CommentStore",
    "Critic",
    "LeaderboardAggregator",
    "new_comment",
    "rank_critics",
]
