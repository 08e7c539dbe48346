import logging

import numpy as np
from scipy.spatial.distance import cdist
from sklearn.metrics import silhouette_score

from activity_insights.config import FEATURE_COLUMNS

logger = logging.getLogger(__name__)


def calculate_cluster_summary(labels, centroids):
    """Member count and named centroid for every fitted cluster."""
    labels = np.asarray(labels)
    summary = []
    for cluster_id, centroid in enumerate(centroids):
        summary.append(
            {
                "clusterId": cluster_id,
                "userCount": int(np.sum(labels == cluster_id)),
                "centroid": {
                    name: float(value) for name, value in zip(FEATURE_COLUMNS, centroid)
                },
            }
        )
    return summary


def calculate_silhouette(features, labels):
    """Silhouette score, or None when it is undefined for this labelling."""
    n_samples = len(features)
    n_labels = len(np.unique(labels))
    if not 2 <= n_labels < n_samples:
        logger.info(
            "Silhouette undefined for %d labels over %d samples", n_labels, n_samples
        )
        return None
    return float(silhouette_score(features, labels))


def find_nearest_neighbors(features):
    """
    Exact nearest neighbour of every row by Euclidean distance.

    Returns (indices, distances). A row never matches itself; the first
    minimum in row order wins ties. With a single row the index is -1 and
    the distance is inf.
    """
    features = np.asarray(features, dtype=float)
    n_samples = len(features)
    if n_samples < 2:
        return np.full(n_samples, -1, dtype=int), np.full(n_samples, np.inf)

    # cdist computes each distance directly, so equal distances compare equal
    distances = cdist(features, features, metric="euclidean")
    np.fill_diagonal(distances, np.inf)

    # argmin returns the first occurrence of the minimum
    nearest = np.argmin(distances, axis=1)
    return nearest, distances[np.arange(n_samples), nearest]
