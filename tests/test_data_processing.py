"""
Tests for loading and preprocessing the raw user table.
"""
import logging

import numpy as np
import pandas as pd
import pytest

from activity_insights.utils.data_processing import (
    DataSourceError,
    build_feature_vectors,
    get_data_from_csv,
    preprocess_users,
)

from conftest import COLUMNS, make_raw_users


class TestGetDataFromCsv:
    """Reading the source file"""

    def test_reads_every_field_as_string(self, users_csv):
        df = get_data_from_csv(users_csv)

        assert len(df) == 12
        assert list(df.columns) == COLUMNS
        assert df.loc[0, "stepcount"] == "8000"
        assert df.loc[0, "balance"] == "1200.50"

    def test_blank_cells_stay_empty_strings(self, users_csv):
        df = get_data_from_csv(users_csv)
        grace = df[df["username"] == "grace"].iloc[0]
        assert grace["team"] == ""

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(DataSourceError, match="not found"):
            get_data_from_csv(tmp_path / "nope.csv")

    def test_empty_file_raises(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("")
        with pytest.raises(DataSourceError):
            get_data_from_csv(path)

    def test_header_only_raises(self, tmp_path):
        path = tmp_path / "header.csv"
        path.write_text(",".join(COLUMNS) + "\n")
        with pytest.raises(DataSourceError, match="No user records"):
            get_data_from_csv(path)

    def test_data_source_error_is_an_io_error(self, tmp_path):
        with pytest.raises(IOError):
            get_data_from_csv(tmp_path / "nope.csv")


class TestPreprocessUsers:
    """Numeric coercion and field defaults"""

    def test_numeric_fields_are_floats(self, raw_users):
        df = preprocess_users(raw_users)
        for col in ["balance", "stepcount", "pushup", "squat"]:
            assert df[col].dtype == float
        assert df.loc[0, "balance"] == pytest.approx(1200.5)
        assert df.loc[0, "stepcount"] == 8000

    def test_same_number_of_rows(self, raw_users):
        assert len(preprocess_users(raw_users)) == len(raw_users)

    def test_empty_team_defaults_to_none_label(self, raw_users):
        df = preprocess_users(raw_users)
        assert df.loc[df["username"] == "grace", "team"].iloc[0] == "None"

    def test_team_is_not_normalized(self):
        raw = make_raw_users(
            [
                ("a", " Red", "", "", "", "1", "1", "1", "1"),
                ("b", "red", "", "", "", "1", "1", "1", "1"),
            ]
        )
        df = preprocess_users(raw)
        assert df["team"].tolist() == [" Red", "red"]

    def test_missing_optional_columns_get_defaults(self):
        raw = pd.DataFrame(
            {
                "username": ["a", "b"],
                "balance": ["10", "20"],
                "stepcount": ["100", "200"],
                "pushup": ["1", "2"],
                "squat": ["3", "4"],
            }
        )
        df = preprocess_users(raw)

        assert df["team"].tolist() == ["None", "None"]
        assert df["email"].tolist() == ["", ""]
        assert df["transactions"].tolist() == ["", ""]
        assert df["password"].tolist() == ["", ""]

    def test_malformed_numbers_default_to_zero(self, caplog):
        raw = make_raw_users(
            [
                ("a", "Red", "", "", "", "lots", "100", "", "3"),
                ("b", "Red", "", "", "", "20", "200", "2", "4"),
            ]
        )
        with caplog.at_level(logging.WARNING):
            df = preprocess_users(raw)

        assert df.loc[0, "balance"] == 0.0
        assert df.loc[0, "pushup"] == 0.0
        assert not df[["balance", "stepcount", "pushup", "squat"]].isna().any().any()
        assert "balance" in caplog.text
        assert "pushup" in caplog.text

    def test_infinite_numbers_default_to_zero(self, caplog):
        raw = make_raw_users(
            [
                ("a", "Red", "", "", "", "inf", "100", "-inf", "3"),
                ("b", "Red", "", "", "", "1e999", "200", "2", "4"),
                ("c", "Red", "", "", "", "15", "300", "5", "6"),
            ]
        )
        with caplog.at_level(logging.WARNING):
            df = preprocess_users(raw)

        assert df["balance"].tolist() == [0.0, 0.0, 15.0]
        assert df["pushup"].tolist() == [0.0, 2.0, 5.0]
        assert np.isfinite(df[["balance", "stepcount", "pushup", "squat"]].to_numpy()).all()
        assert "balance" in caplog.text

    def test_missing_numeric_column_defaults_to_zero(self):
        raw = pd.DataFrame({"username": ["a"], "stepcount": ["5"], "pushup": ["1"], "squat": ["1"]})
        df = preprocess_users(raw)
        assert df.loc[0, "balance"] == 0.0

    def test_extra_columns_pass_through(self, raw_users):
        raw = raw_users.assign(city="Lisbon")
        df = preprocess_users(raw)
        assert (df["city"] == "Lisbon").all()

    def test_input_is_not_modified(self, raw_users):
        before = raw_users.copy()
        preprocess_users(raw_users)
        pd.testing.assert_frame_equal(raw_users, before)


class TestBuildFeatureVectors:
    """Feature vector layout"""

    def test_fixed_column_order(self, raw_users):
        df = preprocess_users(raw_users)
        features = build_feature_vectors(df)

        assert features.shape == (12, 4)
        np.testing.assert_array_equal(features[0], [8000, 40, 60, 1200.5])

    def test_column_order_ignores_source_order(self):
        raw = pd.DataFrame(
            {
                "squat": ["3"],
                "balance": ["4"],
                "pushup": ["2"],
                "stepcount": ["1"],
                "username": ["a"],
            }
        )
        features = build_feature_vectors(preprocess_users(raw))
        np.testing.assert_array_equal(features, [[1, 2, 3, 4]])
