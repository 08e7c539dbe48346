"""
Utility functions for data processing and analysis.
"""

from .data_processing import (
    DataSourceError,
    build_feature_vectors,
    get_data_from_csv,
    preprocess_users,
)
from .analysis import (
    build_analytics,
    calculate_correlation,
    calculate_team_stats,
    describe_metric,
    run_analytics,
)

__all__ = [
    "DataSourceError",
    "build_feature_vectors",
    "get_data_from_csv",
    "preprocess_users",
    "build_analytics",
    "calculate_correlation",
    "calculate_team_stats",
    "describe_metric",
    "run_analytics",
]
