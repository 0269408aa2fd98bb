from pathlib import Path

import pytest
from rich.console import Console

from livingmeta.cli import (
    LivingMetaCLI,
    create_parser,
    paper_state_from_args,
    resource_state_from_args,
)
from livingmeta.config import Settings
from livingmeta.console import ConsoleUI
from livingmeta.database.repository import SnapshotRepository


@pytest.fixture
def console() -> Console:
    return Console(record=True, width=200)


@pytest.fixture
def cli(settings: Settings, repo: SnapshotRepository, console: Console) -> LivingMetaCLI:
    return LivingMetaCLI(settings, repo, ConsoleUI(console))


def test_parser_builds_paper_state() -> None:
    args = create_parser().parse_args(
        ["papers", "-q", "lane", "--sport", "speed_skating", "--year-from", "2010",
         "--open-access", "--sort", "citations", "--page", "2"]
    )
    state = paper_state_from_args(args)
    assert state.query == "lane"
    assert state.facets == {"sport": "speed_skating"}
    assert state.flags == {"open_access": True}
    assert state.ranges == {"pub_year": (2010.0, None)}
    assert state.sort == "citations"
    assert state.page == 1


def test_parser_rejects_unknown_sort_and_format() -> None:
    parser = create_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["papers", "--sort", "bogus"])
    with pytest.raises(SystemExit):
        parser.parse_args(["export", "--format", "ris"])


def test_cmd_papers(cli: LivingMetaCLI, console: Console) -> None:
    args = create_parser().parse_args(["papers", "--journal", "Journal of Sports Sciences"])
    cli.cmd_papers(paper_state_from_args(args))
    output = console.export_text()
    assert "Altitude Effects" in output
    assert "Pacing Strategy" not in output
    assert "De Vries, J." in output


def test_cmd_papers_empty(cli: LivingMetaCLI, console: Console) -> None:
    args = create_parser().parse_args(["papers", "-q", "nothing matches this"])
    cli.cmd_papers(paper_state_from_args(args))
    assert "No papers match" in console.export_text()


def test_cmd_export(cli: LivingMetaCLI, tmp_path: Path) -> None:
    args = create_parser().parse_args(["export", "--womens", "--format", "csv"])
    cli.cmd_export(paper_state_from_args(args), args.fmt, tmp_path / "out")
    text = (tmp_path / "out" / "sports-analytics-papers.csv").read_text(encoding="utf-8")
    assert text.count("\n") == 1
    assert "Pacing Strategy" in text


def test_cmd_resources(cli: LivingMetaCLI, console: Console) -> None:
    args = create_parser().parse_args(["resources", "--category", "library"])
    cli.cmd_resources(resource_state_from_args(args))
    output = console.export_text()
    assert "nba_api" in output
    assert "Opta" not in output


def test_cmd_build(cli: LivingMetaCLI, tmp_path: Path, console: Console) -> None:
    cli.cmd_build(tmp_path / "site")
    assert (tmp_path / "site" / "index.html").exists()
    assert "Done." in console.export_text()


def test_main_reports_missing_database(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    from livingmeta import cli as cli_module

    monkeypatch.delenv("LIVINGMETA_DATA_DIR", raising=False)
    code = cli_module.main(
        ["--base-dir", str(tmp_path), "snapshot", "--db", str(tmp_path / "missing.db")]
    )
    assert code == 1


def test_cmd_gaps_resolves_references(cli: LivingMetaCLI, console: Console) -> None:
    cli.cmd_gaps()
    output = console.export_text()
    assert "Is there an inner lane advantage" in output
    assert "De Vries (2012)" in output
    assert "[W9999999999]" in output
    assert "1. Collect women's results" in output


def test_cmd_gaps_unknown_slug(cli: LivingMetaCLI) -> None:
    with pytest.raises(ValueError, match="nope"):
        cli.cmd_gaps("nope")


def test_main_gaps_unknown_slug_exits_nonzero(
    snapshot_dir: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    from livingmeta import cli as cli_module

    monkeypatch.setenv("LIVINGMETA_DATA_DIR", str(snapshot_dir))
    assert cli_module.main(["--base-dir", str(tmp_path), "gaps", "nope"]) == 1
