# Configuration constants for the activity analytics pipeline
import os

# ======================= CONFIG =======================
CSV_PATH = os.environ.get("ACTIVITY_INSIGHTS_CSV", "users.csv")
SEED = 42

# Clustering
N_CLUSTERS = 4
MAX_ITER = 300

# Column layout. FEATURE_COLUMNS order is positional: centroids and the
# challenge ratios index into it.
FEATURE_COLUMNS = ["stepcount", "pushup", "squat", "balance"]
NUMERIC_COLUMNS = ["balance", "stepcount", "pushup", "squat"]
ACTIVITY_COLUMNS = ["stepcount", "pushup", "squat"]
TEAM_DEFAULT = "None"
STRING_DEFAULTS = {
    "email": "",
    "transactions": "",
    "password": "",
}

# Engagement index
ENGAGEMENT_WEIGHTS = {
    "stepcount": 0.4,
    "pushup": 0.2,
    "squat": 0.2,
    "balance": 0.2,
}

# Outlier detection
OUTLIER_Z_THRESHOLD = 3.0

# Recommendations
RECOMMENDATION_FACTOR = 1.1

# Challenges: (challenge type, feature column); ties go to the earlier entry
CHALLENGE_TYPES = (
    ("steps", "stepcount"),
    ("pushup", "pushup"),
    ("squat", "squat"),
)
CHALLENGE_BASE_DAYS = 30
CHALLENGE_ESCALATION = (  # (ratio below, extra days), checked in order
    (0.5, 14),
    (0.8, 7),
)

# Reporting
TOP_N = 10
REPORT_SAMPLE_SIZE = 5
REPORT_FILENAME = "complex_metrics_report.txt"
USERS_CSV_FILENAME = "processed_users_complex.csv"
WORKBOOK_FILENAME = "analytics_results.xlsx"
DPI = 300

# API Configuration
API_HOST = os.environ.get("ACTIVITY_INSIGHTS_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("ACTIVITY_INSIGHTS_PORT", "8000"))
API_ERROR_MESSAGE = "Failed to process analytics data"
