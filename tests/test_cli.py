"""Tests for the command-line entry point."""
import json

import matplotlib

matplotlib.use("Agg")

import pytest  # noqa: E402

from salahtimes.cli import main  # noqa: E402


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("SALAHTIMES_METHOD_ID", raising=False)
    monkeypatch.delenv("SALAHTIMES_TIMEZONE", raising=False)


class TestCli:

    def test_list_methods(self, capsys):
        assert main(["--list-methods"]) == 0
        out = capsys.readouterr().out
        assert "Umm al-Qura University" in out
        assert "isha +90 min" in out
        assert "asr x2" in out

    def test_json_output(self, capsys):
        status = main(
            ["--lat", "0", "--lon", "0", "--date", "2024-03-20", "--timezone", "UTC", "--json"]
        )
        assert status == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["success"] is True
        assert payload["data"]["date"] == "2024-03-20"
        assert payload["data"]["calculationMethod"]["id"] == 1

    def test_text_output(self, capsys):
        status = main(["--lat", "21.3891", "--lon", "39.8579", "--date", "2024-03-20"])
        assert status == 0
        out = capsys.readouterr().out
        assert "Clock: Asia/Riyadh" in out
        assert "Fajr" in out

    def test_invalid_coordinate_exit_status(self, capsys):
        status = main(["--lat", "91", "--lon", "0", "--date", "2024-03-20"])
        assert status == 2
        assert "InvalidCoordinate" in capsys.readouterr().err

    def test_no_solution_exit_status(self, capsys):
        status = main(
            ["--lat", "75", "--lon", "20", "--date", "2024-12-21", "--timezone", "UTC", "--json"]
        )
        assert status == 1
        payload = json.loads(capsys.readouterr().out)
        assert payload["error"]["kind"] == "NoValidSolution"

    def test_missing_coordinate(self):
        with pytest.raises(SystemExit):
            main(["--date", "2024-03-20"])

    def test_chart(self, tmp_path, capsys):
        path = tmp_path / "day.png"
        status = main(
            ["--lat", "0", "--lon", "0", "--date", "2024-03-20", "--timezone", "UTC",
             "--chart", str(path)]
        )
        assert status == 0
        assert path.exists()
