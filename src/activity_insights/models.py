"""
Result container for one analytics run.
"""

import json
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

import pandas as pd

from activity_insights.config import CHALLENGE_TYPES, TOP_N


@dataclass(frozen=True)
class AnalyticsResult:
    """
    Everything derived from one load of the user table.

    ``users`` holds the enriched records in load order. Renderers (JSON,
    text report, workbook, charts) only read from this object.
    """

    users: pd.DataFrame
    team_stats: pd.DataFrame
    clusters: Tuple[dict, ...]
    statistics: Dict[str, dict]
    correlation_balance_step: float
    silhouette_score: Optional[float] = None
    top_n: int = field(default=TOP_N)

    @property
    def total_users(self):
        return len(self.users)

    @property
    def total_teams(self):
        return len(self.team_stats)

    @property
    def challenge_distribution(self):
        counts = self.users["challenge_type"].value_counts()
        return {name: int(counts.get(name, 0)) for name, _ in CHALLENGE_TYPES}

    def top_engagement(self, n=None):
        return _top_by(self.users, "engagement_index", self.top_n if n is None else n)

    def top_consistency(self, n=None):
        return _top_by(self.users, "activity_consistency", self.top_n if n is None else n)

    @property
    def outliers(self):
        return self.users[self.users["is_outlier"]]

    def to_dict(self):
        """JSON-shaped payload served by the API."""
        return {
            "summary": {
                "totalUsers": self.total_users,
                "totalTeams": self.total_teams,
                "correlationBalanceStep": self.correlation_balance_step,
                "silhouetteScore": self.silhouette_score,
                "clusters": list(self.clusters),
                "challengeDistribution": self.challenge_distribution,
            },
            "users": _records(self.users),
            "teamStats": _records(self.team_stats),
            "topPerformers": {
                "engagement": _records(self.top_engagement()),
                "consistency": _records(self.top_consistency()),
                "outliers": _records(self.outliers),
            },
            "statistics": self.statistics,
        }


def _top_by(df, column, n):
    # stable sort keeps load order among equal scores
    return df.sort_values(column, ascending=False, kind="stable").head(n)


def _records(df):
    # round-trip through pandas' JSON writer to get plain Python scalars
    return json.loads(df.to_json(orient="records", double_precision=15))
