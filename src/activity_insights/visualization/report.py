import os

import pandas as pd

from activity_insights.config import (
    CHALLENGE_TYPES,
    REPORT_FILENAME,
    REPORT_SAMPLE_SIZE,
    USERS_CSV_FILENAME,
    WORKBOOK_FILENAME,
)


def generate_text_report(result, sample_size=REPORT_SAMPLE_SIZE):
    """Render the plain-text metrics report for an AnalyticsResult."""
    users = result.users
    sample = users.head(sample_size)

    cluster_lines = "\n".join(
        f"- Cluster {c['clusterId']}: {c['userCount']} users "
        f"(centroid: {', '.join(f'{v:.1f}' for v in c['centroid'].values())})"
        for c in result.clusters
    )
    top_engagement = ", ".join(
        f"{u.username} ({u.engagement_index:.2f})"
        for u in result.top_engagement(sample_size).itertuples()
    )
    top_consistency = ", ".join(
        f"{u.username} ({u.activity_consistency:.3f})"
        for u in result.top_consistency(sample_size).itertuples()
    )
    outliers = ", ".join(result.outliers["username"]) or "None"
    recommendations = ", ".join(
        f"{u.username}: {u.recommended_pushup}" for u in sample.itertuples()
    )
    neighbours = ", ".join(
        f"{u.username} ~ {u.similar_user}" for u in sample.itertuples()
    )
    team_lines = "\n".join(
        f"Team: {t.team}, Avg Step: {t.avgStep:.1f}, Avg Pushup: {t.avgPushup:.1f}, "
        f"Avg Squat: {t.avgSquat:.1f}, Avg Balance: {t.avgBalance:.1f}, "
        f"Avg Engagement: {t.engagement:.2f}, Members: {t.members}"
        for t in result.team_stats.itertuples()
    )
    distribution = result.challenge_distribution
    challenge_counts = ", ".join(
        f"{name}: {distribution[name]} users" for name, _ in CHALLENGE_TYPES
    )
    challenges = ", ".join(
        f"{u.username}: {u.challenge_type} (deadline: {u.deadline})"
        for u in sample.itertuples()
    )

    return f"""
COMPLEX AI METRICS REPORT
=========================
User Segmentation (Clusters):
{cluster_lines}

Top {sample_size} Engagement Index:
{top_engagement}

Top {sample_size} Most Balanced Users (activity consistency):
{top_consistency}

Anomalous Users (statistical outliers):
{outliers}

Recommended Pushup Goals (sample):
{recommendations}

Nearest Behavioral Neighbors (sample):
{neighbours}

Team Analytics:
{team_lines}

Balance vs Stepcount Correlation: {result.correlation_balance_step:.3f}

Challenge Distribution:
{challenge_counts}

Sample Challenge Assignments:
{challenges}

(See {USERS_CSV_FILENAME} for full annotated data)
"""


def save_report(result, output_dir, sample_size=REPORT_SAMPLE_SIZE):
    """Write the text report and the enriched user CSV. Returns both paths."""
    os.makedirs(output_dir, exist_ok=True)

    report_path = os.path.join(output_dir, REPORT_FILENAME)
    with open(report_path, "w") as f:
        f.write(generate_text_report(result, sample_size))
    print(f"Metrics report written to {report_path}")

    users_path = os.path.join(output_dir, USERS_CSV_FILENAME)
    result.users.to_csv(users_path, index=False)
    print(f"Processed user data written to {users_path}")

    return report_path, users_path


def export_workbook(result, output_dir):
    """Save users, teams, clusters and statistics to one Excel workbook."""
    os.makedirs(output_dir, exist_ok=True)
    workbook_path = os.path.join(output_dir, WORKBOOK_FILENAME)

    clusters_df = pd.DataFrame(
        [
            {"clusterId": c["clusterId"], "userCount": c["userCount"], **c["centroid"]}
            for c in result.clusters
        ]
    )
    statistics_df = pd.DataFrame.from_dict(result.statistics, orient="index")

    with pd.ExcelWriter(workbook_path) as writer:
        result.users.to_excel(writer, sheet_name="Users", index=False)
        result.team_stats.to_excel(writer, sheet_name="Teams", index=False)
        clusters_df.to_excel(writer, sheet_name="Clusters", index=False)
        statistics_df.to_excel(writer, sheet_name="Statistics")

    print(f"Analytics workbook written to {workbook_path}")
    return workbook_path
