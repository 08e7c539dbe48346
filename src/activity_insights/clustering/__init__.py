"""
Clustering algorithms and metrics for user segmentation.
"""

from .algorithms import apply_clustering
from .metrics import (
    calculate_cluster_summary,
    calculate_silhouette,
    find_nearest_neighbors,
)

__all__ = [
    "apply_clustering",
    "calculate_cluster_summary",
    "calculate_silhouette",
    "find_nearest_neighbors",
]
