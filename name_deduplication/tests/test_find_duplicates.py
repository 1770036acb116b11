"""
Tests for the command-line caller.

What these tests demonstrate:
  - File reading, normalisation and clustering wired together end to end
  - The printed report format (1-based group index, members in input order)
  - Exit codes for bad input files and bad arguments
"""

import logging
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from name_deduplication.find_duplicates import find_duplicates, main, read_names, render_groups
from name_deduplication.settings import DedupSettings


@pytest.fixture()
def companies_file(tmp_path) -> Path:
    path = tmp_path / "companies.txt"
    path.write_text(
        "Acme Inc\n"
        "  Acme  \n"
        "Acme Ltd\n"
        "Globex Corp\n"
        "Globex\n"
        "Initech\n",
        encoding="utf-8",
    )
    return path


# --------------------------------------------------------------------------- #
# 1. Building blocks                                                           #
# --------------------------------------------------------------------------- #


class TestReadNames:
    def test_lines_are_stripped(self, companies_file):
        names = read_names(companies_file)
        assert names[1] == "Acme"
        assert len(names) == 6


class TestRenderGroups:
    def test_empty_groups_render_nothing(self):
        assert render_groups([]) == ""

    def test_report_format(self):
        report = render_groups([["Acme Inc", "Acme"], ["Globex", "Globex Corp"]])
        assert report.splitlines() == [
            "Duplicate groups:",
            "",
            "Group 1:",
            "- Acme Inc",
            "- Acme",
            "Group 2:",
            "- Globex",
            "- Globex Corp",
            "Total groups found: 2",
        ]


class TestFindDuplicates:
    def test_default_settings(self):
        names = ["Acme Inc", "Acme", "Acme Ltd", "Globex Corp"]
        assert find_duplicates(names) == [["Acme Inc", "Acme", "Acme Ltd"]]

    def test_custom_legal_forms(self):
        # Without "inc" in the token list the names are four edits apart
        names = ["Acme Inc", "Acme"]
        assert find_duplicates(names, DedupSettings(legal_forms=["ltd"])) == []

    def test_complete_mode(self):
        names = ["Acme", "Globex", "Acme Inc"]
        assert find_duplicates(names) == []
        assert find_duplicates(names, DedupSettings(complete=True)) == [["Acme", "Acme Inc"]]


# --------------------------------------------------------------------------- #
# 2. main()                                                                    #
# --------------------------------------------------------------------------- #


class TestMain:
    def test_prints_groups(self, companies_file, capsys):
        assert main([str(companies_file)]) == 0
        assert capsys.readouterr().out == (
            "Duplicate groups:\n"
            "\n"
            "Group 1:\n"
            "- Acme Inc\n"
            "- Acme\n"
            "- Acme Ltd\n"
            "Group 2:\n"
            "- Globex Corp\n"
            "- Globex\n"
            "Total groups found: 2\n"
        )

    def test_no_groups_prints_nothing(self, tmp_path, capsys):
        path = tmp_path / "unique.txt"
        path.write_text("Acme\nGlobex\nInitech\n", encoding="utf-8")
        assert main([str(path)]) == 0
        assert capsys.readouterr().out == ""

    def test_threshold_option(self, tmp_path, capsys):
        path = tmp_path / "near.txt"
        path.write_text("Acme\nAcne Co\nAkne\n", encoding="utf-8")
        assert main([str(path), "--threshold", "0"]) == 0
        assert capsys.readouterr().out == ""
        assert main([str(path), "--threshold", "2"]) == 0
        assert "- Akne" in capsys.readouterr().out

    def test_missing_file_returns_1(self, tmp_path, caplog):
        with caplog.at_level(logging.ERROR):
            assert main([str(tmp_path / "nope.txt")]) == 1
        assert "Cannot read" in caplog.text

    @pytest.mark.parametrize(
        "argv",
        [
            ["--threshold", "-1"],
            ["--max-length-gap", "-3"],
            ["--threshold", "one"],
        ],
    )
    def test_invalid_arguments_exit_2(self, companies_file, argv):
        with pytest.raises(SystemExit) as exc_info:
            main([str(companies_file), *argv])
        assert exc_info.value.code == 2
