import logging

import numpy as np
import pandas as pd

from activity_insights.config import (
    FEATURE_COLUMNS,
    NUMERIC_COLUMNS,
    STRING_DEFAULTS,
    TEAM_DEFAULT,
)

logger = logging.getLogger(__name__)


class DataSourceError(IOError):
    """The user table could not be read. Fatal to the whole run."""


def get_data_from_csv(file_path):
    """Read the raw user table with every field kept as a string."""
    try:
        df = pd.read_csv(file_path, dtype=str, keep_default_na=False)
    except FileNotFoundError as e:
        raise DataSourceError(f"Input file not found: {file_path}") from e
    except (OSError, pd.errors.ParserError, UnicodeDecodeError) as e:
        raise DataSourceError(f"Could not read {file_path}: {e}") from e
    except pd.errors.EmptyDataError as e:
        raise DataSourceError(f"Input file is empty: {file_path}") from e

    if df.empty:
        raise DataSourceError(f"No user records in {file_path}")

    logger.info("Loaded %d user records from %s", len(df), file_path)
    return df


def preprocess_users(raw_df):
    """
    Coerce numeric fields and fill defaults for missing optional fields.

    Malformed, blank or non-finite numeric cells are set to 0 and reported
    with a warning. Returns a new DataFrame with the same number of rows.
    """
    numeric = {}
    for col in NUMERIC_COLUMNS:
        if col in raw_df.columns:
            values = pd.to_numeric(raw_df[col], errors="coerce")
            # "inf" and overflowing literals parse to +/-inf
            values = values.where(np.isfinite(values))
        else:
            values = pd.Series(np.nan, index=raw_df.index)
        bad = int(values.isna().sum())
        if bad:
            logger.warning(
                "Column %r: %d malformed or missing values defaulted to 0", col, bad
            )
        numeric[col] = values.fillna(0).astype(float)

    if "team" in raw_df.columns:
        team = raw_df["team"].fillna("").astype(str)
        team = team.where(team != "", TEAM_DEFAULT)
    else:
        team = pd.Series(TEAM_DEFAULT, index=raw_df.index)

    strings = {}
    for col, default in STRING_DEFAULTS.items():
        if col in raw_df.columns:
            strings[col] = raw_df[col].fillna(default).astype(str)
        else:
            strings[col] = pd.Series(default, index=raw_df.index)

    if "username" in raw_df.columns:
        username = raw_df["username"].fillna("").astype(str)
    else:
        username = pd.Series("", index=raw_df.index)

    processed = raw_df.assign(
        username=username, team=team, **strings, **numeric
    ).reset_index(drop=True)
    return processed


def build_feature_vectors(df):
    """Project each record onto [stepcount, pushup, squat, balance]."""
    return df[FEATURE_COLUMNS].to_numpy(dtype=float)
