import logging
import warnings

import numpy as np
from sklearn.cluster import KMeans
from sklearn.exceptions import ConvergenceWarning

from activity_insights.config import FEATURE_COLUMNS, MAX_ITER, N_CLUSTERS, SEED

logger = logging.getLogger(__name__)


def apply_clustering(
    features, n_clusters=N_CLUSTERS, random_state=SEED, init="k-means++"
):
    """
    Partition feature vectors with k-means.

    Args:
        features: array of shape (n_samples, 4)
        n_clusters: requested number of clusters (k)
        random_state: seed for centroid initialization, or None for a random run
        init: sklearn init strategy ("k-means++", "random") or an array of
            initial centers

    Returns:
        Tuple of (labels, centroids). Labels are ints in [0, n_clusters).
        When there are fewer samples than clusters, only that many clusters
        are fitted and returned.
    """
    if n_clusters < 1:
        raise ValueError(f"n_clusters must be at least 1, got {n_clusters}")

    features = np.asarray(features, dtype=float)
    if features.ndim != 2 or features.shape[1] != len(FEATURE_COLUMNS):
        raise ValueError(
            f"Expected features of shape (n, {len(FEATURE_COLUMNS)}), got {features.shape}"
        )

    n_samples = len(features)
    if n_samples == 0:
        return np.zeros(0, dtype=int), np.zeros((0, features.shape[1]))

    fitted_clusters = min(n_clusters, n_samples)
    if fitted_clusters < n_clusters:
        logger.warning(
            "Only %d samples for %d clusters; fitting %d clusters",
            n_samples,
            n_clusters,
            fitted_clusters,
        )

    if not isinstance(init, str):
        init = np.asarray(init, dtype=float)[:fitted_clusters]

    clusterer = KMeans(
        n_clusters=fitted_clusters,
        init=init,
        n_init=1 if not isinstance(init, str) else 10,
        max_iter=MAX_ITER,
        random_state=random_state,
        algorithm="lloyd",
    )

    # Duplicate points leave fewer distinct clusters than requested
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", ConvergenceWarning)
        labels = clusterer.fit_predict(features)
    for warning in caught:
        if issubclass(warning.category, ConvergenceWarning):
            logger.warning("KMeans: %s", warning.message)
        else:
            warnings.warn(warning.message, warning.category)

    centroids = clusterer.cluster_centers_
    logger.info(
        "KMeans fitted %d clusters on %d samples (inertia=%.3f)",
        fitted_clusters,
        n_samples,
        clusterer.inertia_,
    )
    return labels.astype(int), centroids
