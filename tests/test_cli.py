"""CLI tests."""

import json

import pytest
from typer.testing import CliRunner

from deckmeta import __version__
from deckmeta.cli import app, load_history, load_snapshot

runner = CliRunner()


@pytest.fixture
def snapshot_file(tmp_path, field, matchups):
    path = tmp_path / "2024-06-01.json"
    path.write_text(
        json.dumps({
            "decks": [d.to_dict() for d in field],
            "matchups": matchups.to_dict(),
        }),
        encoding="utf-8",
    )
    return path


class TestLoaders:
    """Test snapshot file loading."""

    def test_load_snapshot(self, snapshot_file):
        decks, matchups = load_snapshot(str(snapshot_file))

        assert len(decks) == 6
        assert matchups.get("Aggro", "Control") == 38.0

    def test_load_snapshot_pairs(self, tmp_path):
        path = tmp_path / "pairs.json"
        path.write_text(
            json.dumps({
                "decks": [{"name": "A", "share": 50, "winRate": 52}],
                "matchups": [["A", [["B", 61.0]]]],
            }),
            encoding="utf-8",
        )

        decks, matchups = load_snapshot(str(path))

        assert decks[0].win_rate == 52.0
        assert matchups.get("A", "B") == 61.0

    def test_load_history_rejects_list(self, tmp_path):
        path = tmp_path / "2024-05-25.json"
        path.write_text(json.dumps([{"name": "A", "share": 10}]), encoding="utf-8")

        with pytest.raises(ValueError, match="expected a JSON object"):
            load_history([str(path)])

    def test_load_snapshot_rejects_list(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text(json.dumps([]), encoding="utf-8")

        with pytest.raises(ValueError, match="expected a JSON object"):
            load_snapshot(str(path))

    def test_load_history_uses_file_name(self, tmp_path):
        path = tmp_path / "2024-05-25.json"
        path.write_text(json.dumps({"decks": [{"name": "A", "share": 10}]}), encoding="utf-8")

        history = load_history([str(path)])

        assert history[0].timestamp == "2024-05-25"
        assert history[0].decks[0].share == 10.0


class TestCommands:
    """Test CLI commands."""

    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_analyze(self, snapshot_file):
        result = runner.invoke(app, ["analyze", str(snapshot_file), "--coverage", "100"])

        assert result.exit_code == 0, result.output
        assert "Aggro" in result.output
        assert "Recommended Lineup" in result.output

    def test_analyze_json(self, snapshot_file):
        result = runner.invoke(app, ["analyze", str(snapshot_file), "--json"])

        assert result.exit_code == 0, result.output
        assert '"main"' in result.output

    def test_analyze_with_history(self, tmp_path, snapshot_file):
        args = ["analyze", str(snapshot_file)]
        for day, share in (("2024-05-18", 14.0), ("2024-05-25", 17.0)):
            path = tmp_path / f"{day}.json"
            path.write_text(
                json.dumps({"decks": [{"name": "Aggro", "share": share, "win_rate": 51.0}]}),
                encoding="utf-8",
            )
            args += ["--history", str(path)]

        result = runner.invoke(app, args)

        assert result.exit_code == 0, result.output
        assert "Rising: Aggro" in result.output
        assert "Since 2024-05-25" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["analyze", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "Failed to load input" in result.output

    def test_history_not_an_object(self, tmp_path, snapshot_file):
        path = tmp_path / "2024-05-25.json"
        path.write_text(json.dumps([{"name": "Aggro", "share": 17.0}]), encoding="utf-8")

        result = runner.invoke(app, ["analyze", str(snapshot_file), "--history", str(path)])

        assert result.exit_code == 1
        assert "Failed to load input" in result.output
