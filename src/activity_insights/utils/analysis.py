from datetime import datetime, timedelta, timezone
import logging

import numpy as np
import pandas as pd
import scipy.stats as stats

from activity_insights.clustering.algorithms import apply_clustering
from activity_insights.clustering.metrics import (
    calculate_cluster_summary,
    calculate_silhouette,
    find_nearest_neighbors,
)
from activity_insights.config import (
    ACTIVITY_COLUMNS,
    CHALLENGE_BASE_DAYS,
    CHALLENGE_ESCALATION,
    CHALLENGE_TYPES,
    ENGAGEMENT_WEIGHTS,
    FEATURE_COLUMNS,
    N_CLUSTERS,
    OUTLIER_Z_THRESHOLD,
    RECOMMENDATION_FACTOR,
    SEED,
    TOP_N,
)
from activity_insights.models import AnalyticsResult
from activity_insights.utils.data_processing import (
    build_feature_vectors,
    get_data_from_csv,
    preprocess_users,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Per-record passes. Each one returns a new DataFrame with its columns added.
# ---------------------------------------------------------------------------


def add_clusters(df, labels):
    labels = np.asarray(labels, dtype=int)
    if len(labels) != len(df):
        raise ValueError(
            f"Got {len(labels)} cluster labels for {len(df)} records"
        )
    return df.assign(cluster=labels)


def add_engagement_index(df, weights=ENGAGEMENT_WEIGHTS):
    """Fixed-weight sum of raw steps, pushups, squats and balance."""
    engagement = sum(weight * df[col] for col, weight in weights.items())
    return df.assign(engagement_index=engagement.astype(float))


def add_activity_consistency(df):
    """
    Cross-metric balance score stored as ``activity_consistency``.

    1 / (1 + population stddev) of a record's (stepcount, pushup, squat).
    This measures how even the three counts are for one user, not how
    stable a user is over time.
    """
    values = df[ACTIVITY_COLUMNS].to_numpy(dtype=float)
    stddev = values.std(axis=1)
    even = np.ptp(values, axis=1) == 0
    consistency = np.where(even, 1.0, 1.0 / (1.0 + stddev))
    return df.assign(activity_consistency=consistency)


def calculate_z_scores(values):
    """Population z-scores; all zeros when the values do not vary."""
    values = np.asarray(values, dtype=float)
    if len(values) == 0:
        return values
    stddev = values.std()
    if stddev == 0 or np.ptp(values) == 0:
        return np.zeros(len(values))
    return (values - values.mean()) / stddev


def add_outlier_flags(df, threshold=OUTLIER_Z_THRESHOLD):
    """Add <metric>_z for every feature and flag rows with any |z| above threshold."""
    z_columns = {
        f"{col}_z": calculate_z_scores(df[col]) for col in FEATURE_COLUMNS
    }
    z_matrix = np.column_stack(list(z_columns.values()))
    is_outlier = (np.abs(z_matrix) > threshold).any(axis=1)
    logger.info("Flagged %d outliers (|z| > %s)", int(is_outlier.sum()), threshold)
    return df.assign(**z_columns, is_outlier=is_outlier)


def add_pushup_recommendations(df, centroids, factor=RECOMMENDATION_FACTOR):
    """Pushup goal of 110% of the user's cluster centroid, rounded half up."""
    pushup_idx = FEATURE_COLUMNS.index("pushup")
    centroid_pushups = np.asarray(centroids, dtype=float)[df["cluster"].to_numpy(), pushup_idx]
    recommended = np.floor(centroid_pushups * factor + 0.5).astype(int)
    return df.assign(recommended_pushup=recommended)


def add_similar_users(df, features):
    """Username of each record's exact nearest neighbour in feature space."""
    nearest, _ = find_nearest_neighbors(features)
    usernames = df["username"].to_numpy(dtype=object)
    similar = [usernames[j] if j >= 0 else None for j in nearest]
    return df.assign(similar_user=similar)


def challenge_deadline(worst_ratio, today):
    extra_days = 0
    for below, days in CHALLENGE_ESCALATION:
        if worst_ratio < below:
            extra_days = days
            break
    return today + timedelta(days=CHALLENGE_BASE_DAYS + extra_days)


def add_challenges(df, centroids, today=None):
    """
    Assign each user a challenge in their weakest area relative to their
    cluster centroid, with a deadline that grows the further behind they are.

    Ratios are own value / centroid value (0 when the centroid value is not
    positive). Ties go to the earliest entry of CHALLENGE_TYPES. Without an
    explicit ``today`` the deadline counts from the current UTC date.
    """
    today = today or datetime.now(timezone.utc).date()
    columns = [col for _, col in CHALLENGE_TYPES]
    col_idx = [FEATURE_COLUMNS.index(col) for col in columns]

    own = df[columns].to_numpy(dtype=float)
    reference = np.asarray(centroids, dtype=float)[df["cluster"].to_numpy()][:, col_idx]
    ratios = np.divide(
        own, reference, out=np.zeros_like(own), where=reference > 0
    )

    # argmin picks the first minimum, which is the declared preference order
    weakest = np.argmin(ratios, axis=1) if len(ratios) else np.zeros(0, dtype=int)
    worst = ratios[np.arange(len(ratios)), weakest]

    challenge_type = [CHALLENGE_TYPES[i][0] for i in weakest]
    deadline = [challenge_deadline(r, today).isoformat() for r in worst]
    return df.assign(challenge_type=challenge_type, deadline=deadline)


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------


def describe_metric(values):
    series = pd.Series(values, dtype=float)
    return {
        "avg": float(series.mean()),
        "min": float(series.min()),
        "max": float(series.max()),
        "median": float(series.median()),
        "stddev": float(series.std(ddof=0)),
    }


def calculate_team_stats(df):
    """Per-team means and member counts, teams in first-appearance order."""
    team_stats = (
        df.groupby("team", sort=False)
        .agg(
            avgStep=("stepcount", "mean"),
            avgPushup=("pushup", "mean"),
            avgSquat=("squat", "mean"),
            avgBalance=("balance", "mean"),
            engagement=("engagement_index", "mean"),
            members=("username", "size"),
        )
        .reset_index()
    )
    return team_stats


def calculate_correlation(x, y):
    """Pearson correlation; 0 when either series has no variance."""
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if len(x) < 2 or np.ptp(x) == 0 or np.ptp(y) == 0:
        return 0.0
    r, _ = stats.pearsonr(x, y)
    return float(np.clip(r, -1.0, 1.0))


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


def build_analytics(
    raw_df, n_clusters=N_CLUSTERS, random_state=SEED, today=None, top_n=TOP_N
):
    """
    Run the full pipeline over a raw user table.

    load -> preprocess -> feature vectors -> k-means -> per-user passes ->
    team rollup, correlation and statistics.
    """
    if len(raw_df) == 0:
        raise ValueError("No user records to analyze")

    users = preprocess_users(raw_df)
    features = build_feature_vectors(users)
    labels, centroids = apply_clustering(
        features, n_clusters=n_clusters, random_state=random_state
    )

    enriched = (
        users.pipe(add_clusters, labels)
        .pipe(add_engagement_index)
        .pipe(add_activity_consistency)
        .pipe(add_outlier_flags)
        .pipe(add_pushup_recommendations, centroids)
        .pipe(add_similar_users, features)
        .pipe(add_challenges, centroids, today=today)
    )

    statistics = {col: describe_metric(enriched[col]) for col in FEATURE_COLUMNS}
    team_stats = calculate_team_stats(enriched)
    correlation = calculate_correlation(enriched["balance"], enriched["stepcount"])

    logger.info(
        "Analyzed %d users across %d teams (balance/steps r=%.3f)",
        len(enriched),
        len(team_stats),
        correlation,
    )

    return AnalyticsResult(
        users=enriched,
        team_stats=team_stats,
        clusters=tuple(calculate_cluster_summary(labels, centroids)),
        statistics=statistics,
        correlation_balance_step=correlation,
        silhouette_score=calculate_silhouette(features, labels),
        top_n=top_n,
    )


def run_analytics(file_path, n_clusters=N_CLUSTERS, random_state=SEED, today=None):
    """Load the user CSV and run the pipeline over it."""
    raw_df = get_data_from_csv(file_path)
    return build_analytics(
        raw_df, n_clusters=n_clusters, random_state=random_state, today=today
    )
