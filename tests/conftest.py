"""
Pytest configuration and fixtures

Fixtures build a small user table shaped like the raw CSV (every field a
string) so each test can run the pipeline without touching real data.
"""
import os
from datetime import date

os.environ.setdefault("MPLBACKEND", "Agg")

import pandas as pd
import pytest

from activity_insights.utils.analysis import build_analytics

COLUMNS = [
    "username", "team", "email", "transactions", "password",
    "balance", "stepcount", "pushup", "squat",
]

USER_ROWS = [
    ("alice", "Red", "alice@example.com", "t1", "pw", "1200.50", "8000", "40", "60"),
    ("bob", "Red", "bob@example.com", "t2", "pw", "950", "7500", "35", "55"),
    ("carol", "Blue", "carol@example.com", "", "pw", "3000", "12000", "80", "90"),
    ("dave", "Blue", "dave@example.com", "t4", "pw", "2800", "11500", "75", "85"),
    ("erin", "Green", "erin@example.com", "t5", "pw", "400", "3000", "10", "15"),
    ("frank", "Green", "", "t6", "pw", "450", "3200", "12", "18"),
    ("grace", "", "grace@example.com", "t7", "pw", "1500", "9000", "50", "50"),
    ("heidi", "Red", "heidi@example.com", "t8", "pw", "1100", "7800", "38", "58"),
    ("ivan", "Blue", "ivan@example.com", "t9", "", "3100", "12500", "85", "95"),
    ("judy", "Green", "judy@example.com", "t10", "pw", "420", "2900", "11", "16"),
    ("mallory", "Red", "mallory@example.com", "t11", "pw", "1000", "250000", "45", "60"),
    ("oscar", "", "oscar@example.com", "t12", "pw", "800", "6000", "30", "40"),
]

TODAY = date(2024, 1, 15)


def make_raw_users(rows, columns=COLUMNS):
    """Build a raw user table the way the CSV loader returns it."""
    return pd.DataFrame([list(r) for r in rows], columns=columns, dtype=str)


@pytest.fixture
def raw_users():
    return make_raw_users(USER_ROWS)


@pytest.fixture
def users_csv(tmp_path, raw_users):
    path = tmp_path / "users.csv"
    raw_users.to_csv(path, index=False)
    return path


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def result(raw_users):
    return build_analytics(raw_users, random_state=0, today=TODAY)
