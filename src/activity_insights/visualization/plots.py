import os

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

from activity_insights.config import DPI


def plot_cluster_scatter(result, output_dir):
    """Steps vs pushups for every user, coloured by cluster, centroids marked."""
    os.makedirs(output_dir, exist_ok=True)
    users = result.users

    plt.figure(figsize=(12, 8))
    sns.scatterplot(
        data=users.assign(cluster_label=users["cluster"].astype(str)),
        x="stepcount",
        y="pushup",
        hue="cluster_label",
        palette="tab10",
        s=60,
        alpha=0.8,
    )

    centroids = np.array(
        [[c["centroid"]["stepcount"], c["centroid"]["pushup"]] for c in result.clusters]
    )
    if len(centroids):
        plt.scatter(
            centroids[:, 0],
            centroids[:, 1],
            marker="X",
            s=250,
            color="black",
            label="Centroids",
        )

    plt.title("User Segmentation (K-Means)")
    plt.xlabel("Step Count")
    plt.ylabel("Pushups")
    plt.legend(title="Cluster")
    plt.grid(True, alpha=0.3)

    save_path = os.path.join(output_dir, "cluster_scatter.png")
    plt.savefig(save_path, dpi=DPI, bbox_inches="tight")
    plt.close()
    return save_path


def plot_team_engagement(result, output_dir):
    os.makedirs(output_dir, exist_ok=True)
    team_stats = result.team_stats

    fig, ax = plt.subplots(figsize=(12, 6))
    sns.barplot(data=team_stats, x="team", y="engagement", color="skyblue", ax=ax)

    for i, (engagement, members) in enumerate(
        zip(team_stats["engagement"], team_stats["members"])
    ):
        ax.text(
            i,
            engagement,
            f"{engagement:.1f}\n(n={members})",
            ha="center",
            va="bottom",
            fontsize=9,
        )

    ax.set_title("Average Engagement Index by Team")
    ax.set_xlabel("Team")
    ax.set_ylabel("Engagement Index")
    ax.tick_params(axis="x", rotation=45)

    plt.tight_layout()
    save_path = os.path.join(output_dir, "team_engagement.png")
    plt.savefig(save_path, dpi=DPI, bbox_inches="tight")
    plt.close()
    return save_path


def plot_balance_vs_steps(result, output_dir):
    os.makedirs(output_dir, exist_ok=True)
    users = result.users

    plt.figure(figsize=(10, 7))
    ax = sns.scatterplot(
        data=users.assign(outlier=users["is_outlier"].map({False: "no", True: "yes"})),
        x="balance",
        y="stepcount",
        hue="outlier",
        palette={"no": "#1f77b4", "yes": "#d62728"},
        alpha=0.8,
    )

    # Add text box with the correlation
    plt.text(
        0.02,
        0.98,
        f"Pearson r = {result.correlation_balance_step:.3f}",
        transform=ax.transAxes,
        verticalalignment="top",
        bbox=dict(boxstyle="round", facecolor="white", alpha=0.8),
    )

    plt.title("Balance vs Step Count")
    plt.xlabel("Balance")
    plt.ylabel("Step Count")
    plt.legend(title="Outlier")
    plt.grid(True, alpha=0.3)

    save_path = os.path.join(output_dir, "balance_vs_steps.png")
    plt.savefig(save_path, dpi=DPI, bbox_inches="tight")
    plt.close()
    return save_path


def plot_consistency_distribution(result, output_dir):
    """Histogram of the cross-metric balance score (activity_consistency)."""
    os.makedirs(output_dir, exist_ok=True)

    plt.figure(figsize=(10, 6))
    sns.histplot(result.users["activity_consistency"], bins=20, color="#2ca02c")
    plt.title("Distribution of Activity Consistency (cross-metric balance)")
    plt.xlabel("1 / (1 + stddev of steps, pushups, squats)")
    plt.ylabel("Users")
    plt.grid(True, alpha=0.3)

    save_path = os.path.join(output_dir, "consistency_distribution.png")
    plt.savefig(save_path, dpi=DPI, bbox_inches="tight")
    plt.close()
    return save_path


def create_dashboard_plots(result, output_dir):
    """Write every chart for a run and return their paths."""
    paths = [
        plot_cluster_scatter(result, output_dir),
        plot_team_engagement(result, output_dir),
        plot_balance_vs_steps(result, output_dir),
        plot_consistency_distribution(result, output_dir),
    ]
    for path in paths:
        print(f"Saved plot: {path}")
    return paths
