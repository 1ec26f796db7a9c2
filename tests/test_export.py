"""Tests for JSON/CSV export."""

import io
import json
from pathlib import Path

import pandas as pd
import pytest

from habit_lightly.core.models import AppState, InvalidArgument
from habit_lightly.services.data_export import CSV_COLUMNS, export_state, export_to_file


class TestExportState:
    """Tests for in-memory export."""

    def test_json_has_export_header(self, two_habit_state: AppState) -> None:
        data = json.loads(export_state(two_habit_state, "json").decode("utf-8"))
        assert data["export_info"]["format"] == "json"
        assert data["export_info"]["user_id"] == "user-1"
        assert data["state"]["days"]["2024-03-01"] == ["read", "run"]

    def test_csv_one_row_per_completion(self, two_habit_state: AppState) -> None:
        df = pd.read_csv(io.BytesIO(export_state(two_habit_state, "CSV")))
        assert list(df.columns) == CSV_COLUMNS
        assert len(df) == 3
        assert list(df["date"]) == ["2024-02-29", "2024-03-01", "2024-03-01"]

    def test_csv_empty_state_has_header(self, empty_state: AppState) -> None:
        text = export_state(empty_state, "csv").decode("utf-8")
        assert text.strip() == ",".join(CSV_COLUMNS)

    def test_unknown_format(self, two_habit_state: AppState) -> None:
        with pytest.raises(InvalidArgument):
            export_state(two_habit_state, "xml")


class TestExportToFile:
    """Tests for writing exports to disk."""

    def test_writes_file(self, tmp_path: Path, two_habit_state: AppState) -> None:
        path = export_to_file(two_habit_state, tmp_path / "exports", "json")
        assert path.exists()
        assert path.suffix == ".json"
        assert json.loads(path.read_text(encoding="utf-8"))["state"]["user_id"] == "user-1"
