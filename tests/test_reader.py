import csv

import pytest

from csvlab.reader import read_csv


def _write(tmp_path, text):
    path = tmp_path / "data.csv"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_counts_rows_and_shows_first(tmp_path, capsys):
    path = _write(tmp_path, "a,b\nc,d\ne,f\n")
    assert read_csv(path, ",", 2) == 3
    out = capsys.readouterr().out
    assert "Row 1: [a b]" in out
    assert "Row 2: [c d]" in out
    assert "Row 3" not in out
    assert "Total rows read: 3" in out


def test_custom_separator_and_leading_space(tmp_path, capsys):
    path = _write(tmp_path, "a; b\n")
    assert read_csv(path, ";", 1) == 1
    assert "Row 1: [a b]" in capsys.readouterr().out


def test_blank_lines_skipped(tmp_path):
    path = _write(tmp_path, "a,b\n\nc,d\n")
    assert read_csv(path, ",", 0) == 2


def test_show_zero_prints_no_rows(tmp_path, capsys):
    path = _write(tmp_path, "a,b\n")
    read_csv(path, ",", 0)
    assert "Row" not in capsys.readouterr().out


def test_bad_separator(tmp_path):
    path = _write(tmp_path, "a\n")
    with pytest.raises(ValueError):
        read_csv(path, ";;", 0)


def test_wrong_field_count(tmp_path):
    path = _write(tmp_path, "a,b\nc\n")
    with pytest.raises(csv.Error):
        read_csv(path, ",", 0)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_csv(str(tmp_path / "nope.csv"), ",", 0)