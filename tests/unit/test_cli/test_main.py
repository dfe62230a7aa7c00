"""Unit tests for the command line interface."""

import json
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog
import yaml
from click.testing import CliRunner

from anchorscore.cli.main import cli, render_table
from anchorscore.fetch.metrics import FetchMetrics
from anchorscore.interpolation.metrics import InterpolationMetrics
from anchorscore.store.io import load_items
from tests.helpers.items import make_item, scores_of


@pytest.fixture(autouse=True)
def _reset_logging_and_metrics() -> Generator[None, None, None]:
    """Each invocation starts with fresh counters and leaves no logger behind."""
    FetchMetrics.reset()
    InterpolationMetrics.reset()
    yield
    FetchMetrics.reset()
    InterpolationMetrics.reset()
    structlog.reset_defaults()


def _write_items(path: Path, items: list[dict]) -> Path:
    path.write_text(yaml.safe_dump({"items": items}), encoding="utf-8")
    return path


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner."""
    return CliRunner()


@pytest.fixture
def ranked_file(tmp_path: Path) -> Path:
    """A saved list: scored head, three stale rows, a low tail."""
    return _write_items(
        tmp_path / "ranked.yaml",
        [
            {"id": 1, "score": 9.0, "title_romaji": "Berserk"},
            {"id": 2, "score": 4.0},
            {"id": 3},
            {"id": 4, "score": 9.5},
            {"id": 5, "score": 5.0},
            {"id": 6, "score": 7.0},
        ],
    )


class TestRenderTable:
    """Tests for render_table."""

    def test_marks_pins_and_missing_scores(self) -> None:
        """Pinned rows carry a star; unscored rows show a dash."""
        table = render_table(
            [make_item(7, 8.5, pinned=True, repeat_count=2), make_item(8, None)]
        )
        first, second = table.splitlines()

        assert first.startswith("   0 *   8.5  Title 7")
        assert first.endswith("id=7 x2")
        assert second.startswith("   1       -  Title 8")


class TestGenerateCommand:
    """Tests for the generate command."""

    def test_pin_and_generate(
        self, runner: CliRunner, ranked_file: Path, tmp_path: Path
    ) -> None:
        """Rows between the head and a pin are rescored."""
        out = tmp_path / "out" / "result.json"

        result = runner.invoke(
            cli, ["generate", str(ranked_file), "--pin", "5", "--out", str(out)]
        )

        assert result.exit_code == 0, result.output
        assert "Generated 3 score(s) from 2 anchor(s)." in result.output
        assert "1 item(s) below the last pin were not scored" in result.output
        assert scores_of(load_items(out)) == [9.0, 8.0, 7.0, 6.0, 5.0, 7.0]

    def test_edits_applied_before_generating(
        self, runner: CliRunner, ranked_file: Path, tmp_path: Path
    ) -> None:
        """Scores and moves apply first, in order."""
        out = tmp_path / "result.yaml"

        result = runner.invoke(
            cli,
            [
                "generate",
                str(ranked_file),
                "--pin",
                "6",
                "--set",
                "6=6.0",
                "--set",
                "1=10",
                "--move",
                "5:4",
                "--out",
                str(out),
            ],
        )

        assert result.exit_code == 0, result.output
        items = load_items(out)
        assert [i.id for i in items] == [1, 2, 3, 4, 6, 5]
        assert scores_of(items) == [10.0, 9.0, 8.0, 7.0, 6.0, 5.0]
        assert items[4].pinned is True

    def test_unpin(self, runner: CliRunner, tmp_path: Path) -> None:
        """Unpinned rows are interpolated like any other."""
        path = _write_items(
            tmp_path / "pinned.yaml",
            [
                {"id": 1, "score": 8.0},
                {"id": 2, "score": 1.0, "pinned": True},
                {"id": 3, "score": 4.0, "pinned": True},
            ],
        )
        out = tmp_path / "result.json"

        result = runner.invoke(
            cli, ["generate", str(path), "--unpin", "2", "--out", str(out)]
        )

        assert result.exit_code == 0, result.output
        assert scores_of(load_items(out)) == [8.0, 6.0, 4.0]

    def test_nothing_to_generate(self, runner: CliRunner, tmp_path: Path) -> None:
        """An empty list is reported, not interpolated."""
        path = _write_items(tmp_path / "empty.yaml", [])

        result = runner.invoke(cli, ["generate", str(path)])

        assert result.exit_code == 1
        assert "Nothing to generate" in result.output

    def test_invalid_file(self, runner: CliRunner, tmp_path: Path) -> None:
        """Validation errors name the bad field."""
        path = _write_items(tmp_path / "bad.yaml", [{"id": "one"}])

        result = runner.invoke(cli, ["generate", str(path)])

        assert result.exit_code == 1
        assert "Invalid item file" in result.output
        assert "0.id" in result.output

    def test_nan_score_in_file(self, runner: CliRunner, tmp_path: Path) -> None:
        """A NaN score is a validation error, not a crash."""
        path = tmp_path / "nan.json"
        path.write_text('{"items": [{"id": 1, "score": NaN}, {"id": 2}]}', encoding="utf-8")

        result = runner.invoke(cli, ["generate", str(path)])

        assert result.exit_code == 1
        assert "Invalid item file" in result.output
        assert "0.score" in result.output

    def test_verbose_reports_metrics(self, runner: CliRunner, ranked_file: Path) -> None:
        """--verbose ends the command with a metrics_summary event."""
        result = runner.invoke(
            cli, ["--json-logs", "-v", "generate", str(ranked_file), "--pin", "5"]
        )

        assert result.exit_code == 0, result.output
        summary_lines = [
            line for line in result.output.splitlines() if '"metrics_summary"' in line
        ]
        assert len(summary_lines) == 1
        summary = json.loads(summary_lines[0])
        assert summary["interpolation"]["passes_total"] == 1
        assert summary["interpolation"]["scores_assigned_total"] == 3
        assert summary["fetch"]["fetches_total"] == 0

    def test_quiet_by_default(self, runner: CliRunner, ranked_file: Path) -> None:
        """Without --verbose no metrics are printed."""
        result = runner.invoke(cli, ["generate", str(ranked_file), "--pin", "5"])

        assert result.exit_code == 0, result.output
        assert "metrics_summary" not in result.output

    def test_unknown_item(self, runner: CliRunner, ranked_file: Path) -> None:
        """Edits to ids not in the list fail cleanly."""
        result = runner.invoke(cli, ["generate", str(ranked_file), "--pin", "42"])

        assert result.exit_code == 1
        assert "Item not found: 42" in result.output

    def test_score_out_of_range(self, runner: CliRunner, ranked_file: Path) -> None:
        """Manual scores must be on the 0-10 scale."""
        result = runner.invoke(cli, ["generate", str(ranked_file), "--set", "2=11"])

        assert result.exit_code == 1
        assert "outside" in result.output

    @pytest.mark.parametrize(
        "args",
        [["--set", "2"], ["--set", "x=1"], ["--move", "1-2"], ["--move", "a:b"]],
    )
    def test_malformed_edit(
        self, runner: CliRunner, ranked_file: Path, args: list[str]
    ) -> None:
        """Malformed edits are usage errors."""
        result = runner.invoke(cli, ["generate", str(ranked_file), *args])

        assert result.exit_code == 2


class TestFetchCommand:
    """Tests for the fetch command."""

    def test_requires_user(
        self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Without --user or ANCHORSCORE_USER there is nothing to fetch."""
        monkeypatch.delenv("ANCHORSCORE_USER", raising=False)

        result = runner.invoke(cli, ["fetch"])

        assert result.exit_code == 1
        assert "No user given" in result.output

    def test_help(self, runner: CliRunner) -> None:
        """Help lists the options."""
        result = runner.invoke(cli, ["fetch", "--help"])

        assert result.exit_code == 0
        assert "--user" in result.output
        assert "--list" in result.output
