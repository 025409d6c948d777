"""
Tests for src/tiermerge/loader.py - CSV source loading.
"""

import logging

import pytest

from src.tiermerge.loader import load_source, read_csv_rows


def _write(path, text):
    path.write_text(text, encoding="utf-8")
    return path


class TestReadCsvRows:
    """Tests for read_csv_rows()."""

    def test_header_becomes_field_names(self, tmp_path):
        """First line is the header; values are strings."""
        path = _write(tmp_path / "a.csv", "DOMAIN,COMPANY,EMPLOYEES\na.com,A,0042\n")

        rows = read_csv_rows(path)

        assert rows == [{"DOMAIN": "a.com", "COMPANY": "A", "EMPLOYEES": "0042"}]

    def test_empty_cells_stay_empty_strings(self, tmp_path):
        """Empty cells are "" rather than NaN."""
        path = _write(tmp_path / "a.csv", "DOMAIN,COMPANY,TAGS\na.com,A,\n")

        rows = read_csv_rows(path)

        assert rows[0]["TAGS"] == ""

    def test_na_like_text_is_not_coerced(self, tmp_path):
        """Strings like NA or null are kept verbatim."""
        path = _write(tmp_path / "a.csv", "DOMAIN,COMPANY\nNA,null\n")

        rows = read_csv_rows(path)

        assert rows == [{"DOMAIN": "NA", "COMPANY": "null"}]

    def test_blank_lines_skipped(self, tmp_path):
        """Blank lines do not produce rows."""
        path = _write(tmp_path / "a.csv", "DOMAIN,COMPANY\na.com,A\n\n\nb.com,B\n")

        rows = read_csv_rows(path)

        assert [r["DOMAIN"] for r in rows] == ["a.com", "b.com"]

    def test_all_empty_rows_skipped(self, tmp_path):
        """A line of empty fields is skipped."""
        path = _write(tmp_path / "a.csv", "DOMAIN,COMPANY\n,\na.com,A\n")

        rows = read_csv_rows(path)

        assert len(rows) == 1

    def test_short_line_missing_fields_are_none(self, tmp_path):
        """Fields absent from a short line are None."""
        path = _write(tmp_path / "a.csv", "DOMAIN,COMPANY,TAGS\na.com,A\n")

        rows = read_csv_rows(path)

        assert rows[0]["DOMAIN"] == "a.com"
        assert rows[0]["TAGS"] is None

    def test_trailing_delimiter_on_every_line(self, tmp_path):
        """A trailing comma on each data line does not shift fields."""
        path = _write(
            tmp_path / "export.csv",
            "DOMAIN,COMPANY,TAGS\n"
            "a.com,A,Active engagement - Breach,\n"
            "b.com,B,,\n",
        )

        rows = read_csv_rows(path)

        assert rows == [
            {"DOMAIN": "a.com", "COMPANY": "A", "TAGS": "Active engagement - Breach"},
            {"DOMAIN": "b.com", "COMPANY": "B", "TAGS": ""},
        ]

    def test_single_long_line_keeps_all_rows(self, tmp_path):
        """One line with an extra cell keeps its named fields and the others survive."""
        path = _write(
            tmp_path / "export.csv",
            "DOMAIN,COMPANY,TAGS\n"
            "a.com,A,x\n"
            "b.com,B,y,extra\n"
            "c.com,C,z\n",
        )

        rows = read_csv_rows(path)

        assert rows == [
            {"DOMAIN": "a.com", "COMPANY": "A", "TAGS": "x"},
            {"DOMAIN": "b.com", "COMPANY": "B", "TAGS": "y"},
            {"DOMAIN": "c.com", "COMPANY": "C", "TAGS": "z"},
        ]

    def test_quoted_fields(self, tmp_path):
        """Quoted fields may contain commas."""
        path = _write(tmp_path / "a.csv", 'DOMAIN,COMPANY\na.com,"Acme, Inc."\n')

        rows = read_csv_rows(path)

        assert rows[0]["COMPANY"] == "Acme, Inc."


class TestLoadSource:
    """Tests for load_source()."""

    def test_rows_tagged_with_tier(self, tmp_path):
        """Every row carries the tier inferred from the file name."""
        path = _write(tmp_path / "Platinum-test.csv", "DOMAIN,COMPANY\na.com,A\nb.com,B\n")

        rows = load_source(path)

        assert [r["Tier"] for r in rows] == ["platinum", "platinum"]

    def test_trailing_delimiter_tier_file(self, tmp_path, caplog):
        """Tier rows with trailing commas keep DOMAIN and load without errors."""
        path = _write(
            tmp_path / "Gold-export.csv",
            "DOMAIN,COMPANY,TAGS\na.com,A,Active engagement - Breach,\nb.com,B,,\n",
        )

        with caplog.at_level(logging.ERROR):
            rows = load_source(path)

        assert [r["DOMAIN"] for r in rows] == ["a.com", "b.com"]
        assert rows[0]["Tier"] == "gold"
        assert caplog.text == ""

    def test_untiered_file_has_none_tier(self, tmp_path):
        """Files without a tier keyword carry Tier=None."""
        path = _write(tmp_path / "AllCompanies.csv", "domain,businessImpact\na.com,High\n")

        rows = load_source(path)

        assert rows == [{"domain": "a.com", "businessImpact": "High", "Tier": None}]

    def test_missing_file_returns_empty(self, tmp_path, caplog):
        """Unreadable file yields no rows and an error log."""
        path = tmp_path / "Gold-missing.csv"

        with caplog.at_level(logging.ERROR):
            rows = load_source(path)

        assert rows == []
        assert f"Error reading file {path}" in caplog.text

    def test_empty_file_returns_empty(self, tmp_path, caplog):
        """A zero-byte file is treated as a read failure."""
        path = _write(tmp_path / "Silver-empty.csv", "")

        with caplog.at_level(logging.ERROR):
            rows = load_source(path)

        assert rows == []
        assert "Error reading file" in caplog.text

    def test_header_only_file_returns_empty(self, tmp_path, caplog):
        """A header with no data is not an error."""
        path = _write(tmp_path / "Silver.csv", "DOMAIN,COMPANY\n")

        with caplog.at_level(logging.ERROR):
            rows = load_source(path)

        assert rows == []
        assert caplog.text == ""

    def test_directory_path_returns_empty(self, tmp_path):
        """A directory is not readable as a CSV."""
        directory = tmp_path / "gold"
        directory.mkdir()

        assert load_source(directory) == []
