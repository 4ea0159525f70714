"""Tests for the lcovkit CLI."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from lcovkit.cli.main import cli
from lcovkit.config import loader

runner = CliRunner()


def _key(path: Path) -> str:
    return os.path.normcase(str(path))


@pytest.fixture(autouse=True)
def _reset_logging(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    monkeypatch.setattr(loader, "GLOBAL_CONFIG_PATH", tmp_path / "global" / "config.yaml")
    yield
    for handler in list(logging.getLogger().handlers):
        handler.close()
    logging.getLogger().handlers.clear()
    structlog.reset_defaults()


class TestCliGroup:
    def test_version(self) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_help_lists_commands(self) -> None:
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "report" in result.output
        assert "measures" in result.output


class TestReportCommand:
    def test_merged_json(
        self, project: Path, write_trace: Callable[[str, str], Path]
    ) -> None:
        ut = write_trace("ut.info", "SF:a.ts\nDA:1,5\nBRDA:1,0,0,2\nend_of_record\n")
        it = write_trace("it.info", f"SF:{project / 'a.ts'}\nDA:1,3\nBRDA:1,0,1,-\n")

        result = runner.invoke(
            cli, ["report", str(ut), str(it), "--base-dir", str(project), "--json"]
        )

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert len(payload["reports"]) == 1
        summary = payload["reports"][0]
        assert summary["source"] == "merged"
        entry = summary["files"][0]
        assert entry["path"] == _key(project / "a.ts")
        assert entry["total_lines"] == 1
        assert entry["conditions"] == 2
        assert entry["covered_conditions"] == 1
        assert payload["unreadable"] == []
        assert payload["issues"] == []

    def test_separate_json(
        self, project: Path, write_trace: Callable[[str, str], Path]
    ) -> None:
        ut = write_trace("ut.info", "SF:a.ts\nDA:1,5\n")
        it = write_trace("it.info", "SF:src/app.ts\nDA:1,0\n")

        result = runner.invoke(
            cli,
            ["report", str(ut), str(it), "--base-dir", str(project), "--separate", "--json"],
        )

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert [r["source"] for r in payload["reports"]] == [str(ut), str(it)]

    def test_unreadable_trace_skipped(
        self, project: Path, write_trace: Callable[[str, str], Path]
    ) -> None:
        ut = write_trace("ut.info", "SF:a.ts\nDA:1,1\n")
        missing = project / "missing.info"

        result = runner.invoke(
            cli, ["report", str(missing), str(ut), "--base-dir", str(project), "--json"]
        )

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["unreadable"] == [str(missing)]
        assert "Could not read content from file" in result.stderr

    def test_all_unreadable_fails(self, project: Path) -> None:
        result = runner.invoke(
            cli, ["report", str(project / "missing.info"), "--base-dir", str(project)]
        )
        assert result.exit_code != 0
        assert "No readable LCOV traces" in result.output

    def test_table_output_reports_issues(
        self, project: Path, write_trace: Callable[[str, str], Path]
    ) -> None:
        trace = write_trace("ut.info", "SF:a.ts\nDA:1,1\nDA:abc,2\nSF:gone.ts\nDA:1,1\n")

        result = runner.invoke(cli, ["report", str(trace), "--base-dir", str(project)])

        assert result.exit_code == 0, result.output
        assert "total" in result.stdout
        assert "1 malformed record(s) skipped" in result.stdout
        assert "1 section(s) with unresolved paths" in result.stdout

    def test_lenient_paths(
        self, project: Path, write_trace: Callable[[str, str], Path]
    ) -> None:
        trace = write_trace("ut.info", "SF:gone.ts\nDA:1,1\n")

        result = runner.invoke(
            cli,
            ["report", str(trace), "--base-dir", str(project), "--lenient-paths", "--json"],
        )

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["reports"][0]["files"][0]["path"] == _key(project / "gone.ts")


class TestMeasuresCommand:
    def _configure(self, project: Path, extra: str = "") -> None:
        (project / ".lcovkit").mkdir()
        (project / ".lcovkit" / "config.yaml").write_text(
            "coverage:\n"
            "  ut_report_paths: [coverage/ut.info]\n"
            "  it_report_paths: [coverage/it.info]\n" + extra
        )
        (project / "coverage").mkdir()
        (project / "coverage" / "ut.info").write_text(
            "SF:src/app.ts\nDA:1,1\nDA:3,0\nBRDA:3,0,0,0\nBRDA:3,0,1,1\nend_of_record\n"
        )
        (project / "coverage" / "it.info").write_text(
            "SF:src/app.ts\nDA:3,2\nBRDA:3,0,0,1\nend_of_record\n"
        )

    def test_json_views(self, project: Path) -> None:
        self._configure(project)

        result = runner.invoke(cli, ["measures", str(project), "--json"])

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert set(payload) == {"ut", "it", "overall"}

        unit = payload["ut"][0]
        assert unit["path"] == _key(project / "src" / "app.ts")
        assert unit["lines_to_cover"] == 2
        assert unit["uncovered_lines"] == 1
        assert unit["uncovered_conditions"] == 1

        overall = payload["overall"][0]
        assert overall["line_hits_data"] == "1=1;3=2"
        assert overall["conditions_to_cover"] == 2
        assert overall["uncovered_conditions"] == 0

    def test_force_zero_coverage(self, project: Path) -> None:
        self._configure(project, "  force_zero_coverage: true\n")

        result = runner.invoke(cli, ["measures", str(project), "--json"])

        assert result.exit_code == 0, result.output
        paths = {m["path"] for m in json.loads(result.stdout)["overall"]}
        assert _key(project / "src" / "util.ts") in paths
        assert _key(project / "a.ts") in paths
        assert _key(project / "src" / "types.d.ts") not in paths

    def test_table_output(self, project: Path) -> None:
        self._configure(project)

        result = runner.invoke(cli, ["measures", str(project)])

        assert result.exit_code == 0, result.output
        assert "overall coverage" in result.stdout

    def test_no_paths_configured(self, project: Path) -> None:
        result = runner.invoke(cli, ["measures", str(project)])
        assert result.exit_code != 0
        assert "No LCOV report paths configured" in result.output

    def test_invalid_config(self, project: Path) -> None:
        (project / ".lcovkit").mkdir()
        (project / ".lcovkit" / "config.yaml").write_text("coverage: [unclosed\n")

        result = runner.invoke(cli, ["measures", str(project)])

        assert result.exit_code != 0
        assert "Failed to parse config" in result.output

    def test_project_logging_config_applied(self, project: Path, tmp_path: Path) -> None:
        log_file = tmp_path.resolve() / "logs" / "lcovkit.log"
        self._configure(
            project,
            "logging:\n"
            "  level: DEBUG\n"
            "  outputs:\n"
            f"    - destination: '{log_file}'\n"
            "      format: json\n",
        )
        (project / "coverage" / "ut.info").write_text("SF:src/app.ts\nDA:x,1\nDA:1,1\n")

        result = runner.invoke(cli, ["measures", str(project), "--json"])

        assert result.exit_code == 0, result.output
        events = [json.loads(line)["event"] for line in log_file.read_text().splitlines()]
        assert "lcov.malformed_record" in events
        assert "views.collected" in events

    def test_unreadable_report_points_to_log_file(self, project: Path, tmp_path: Path) -> None:
        log_file = tmp_path.resolve() / "lcovkit.log"
        self._configure(
            project,
            "  fail_on_unreadable: true\n"
            "logging:\n"
            "  outputs:\n"
            f"    - destination: '{log_file}'\n"
            "      format: json\n",
        )
        (project / "coverage" / "it.info").unlink()

        result = runner.invoke(cli, ["measures", str(project)])

        assert result.exit_code != 0
        assert "Could not read content from file" in result.output
        assert f"See {log_file} for details." in result.output
        assert "measures.report_unreadable" in log_file.read_text()
