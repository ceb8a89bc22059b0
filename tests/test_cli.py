"""Tests for the terminal client."""

import json

import cli_search


def _catalog(tmp_path):
    path = tmp_path / "products.json"
    path.write_text(
        json.dumps(
            [
                {"id": 1, "name": "Mouse", "category": "Electronics", "price": 25, "stock": 4},
                {"id": 2, "name": "Pen", "category": "Office", "price": 2, "stock": 0},
            ]
        ),
        encoding="utf-8",
    )
    return path


def test_cli_prints_matches(tmp_path, capsys):
    code = cli_search.main(["--catalog", str(_catalog(tmp_path)), "--category", "Electronics"])

    out = capsys.readouterr().out
    assert code == 0
    assert "results: 1" in out
    assert "Mouse" in out
    assert "Pen" not in out


def test_cli_reports_validation_errors(tmp_path, capsys):
    code = cli_search.main(["--catalog", str(_catalog(tmp_path)), "--min-price", "9", "--max-price", "1"])

    assert code == 2
    assert "minPrice cannot be greater than maxPrice" in capsys.readouterr().out


def test_cli_raw_json_body(tmp_path, capsys):
    code = cli_search.main(["--catalog", str(_catalog(tmp_path)), "--json", '{"inStockOnly": "yes"}'])

    assert code == 2
    assert "Must be true or false" in capsys.readouterr().out


def test_cli_missing_catalog(tmp_path):
    assert cli_search.main(["--catalog", str(tmp_path / "missing.json")]) == 1


def test_cli_rejects_deeply_nested_json(tmp_path, capsys):
    code = cli_search.main(["--catalog", str(_catalog(tmp_path)), "--json", "[" * 100000])

    assert code == 2
    assert "Invalid JSON" in capsys.readouterr().out


def test_cli_non_object_json_matches_everything(tmp_path, capsys):
    code = cli_search.main(["--catalog", str(_catalog(tmp_path)), "--json", "[1, 2]"])

    assert code == 0
    assert "results: 2" in capsys.readouterr().out
