import argparse
import logging
import os
from datetime import datetime

from activity_insights.config import N_CLUSTERS, SEED
from activity_insights.utils.analysis import run_analytics
from activity_insights.visualization.plots import create_dashboard_plots
from activity_insights.visualization.report import export_workbook, save_report


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="User Activity Segmentation and Metrics Report"
    )
    parser.add_argument("--input", required=True, help="Path to input users CSV file")
    parser.add_argument("--output", required=True, help="Output directory")
    parser.add_argument(
        "--clusters",
        type=int,
        default=N_CLUSTERS,
        help="Number of k-means clusters",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=SEED,
        help="Random seed for centroid initialization",
    )
    parser.add_argument(
        "--no-plots", action="store_true", help="Skip writing PNG charts"
    )
    return parser.parse_args(argv)


def setup_directories(base_dir):
    """Create organized output directories."""
    dirs = {
        "plots": os.path.join(base_dir, "plots"),
        "results": os.path.join(base_dir, "results"),
    }

    for directory in dirs.values():
        os.makedirs(directory, exist_ok=True)

    return dirs


def main(argv=None):
    """Main execution function."""
    args = parse_args(argv)
    dirs = setup_directories(args.output)

    print("\nLoading and analyzing user data...")
    result = run_analytics(args.input, n_clusters=args.clusters, random_state=args.seed)

    print(f"\nUsers: {result.total_users}, Teams: {result.total_teams}")
    for cluster in result.clusters:
        print(f"Cluster {cluster['clusterId']}: {cluster['userCount']} users")
    print(f"Outliers: {len(result.outliers)}")
    print(f"Balance vs Stepcount Correlation: {result.correlation_balance_step:.3f}")

    print("\nWriting report...")
    save_report(result, dirs["results"])
    export_workbook(result, dirs["results"])

    if not args.no_plots:
        print("\nCreating plots...")
        create_dashboard_plots(result, dirs["plots"])

    return result


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    start_time = datetime.now()
    try:
        main()
    except Exception as e:
        print(f"\nError in main execution: {str(e)}")
        raise
    finally:
        execution_time = datetime.now() - start_time
        print(f"\nTotal execution time: {execution_time}")
