import json
from pathlib import Path


from pywaiver import cli
from pywaiver.errors import CatalogUnavailable, PipelineStageError
from pywaiver.models import PlayerRecord, RankedEntry, ValueObservation
from pywaiver.pipeline import PipelineResult, RunSummary
from pywaiver.pool import AvailabilitySummary, SourceFailure


def _result() -> PipelineResult:
    summary = RunSummary(
        catalog_players=2,
        rosters=1,
        rostered_players=1,
        availability=AvailabilitySummary(
            catalog_players=2, available_players=1, rostered=1, no_positions=0, excluded_position=0
        ),
        sources_configured=2,
        failed_sources=[SourceFailure("https://down.example", "HTTP 500")],
        malformed_rows=3,
        observations=2,
        ranked=1,
        elapsed_seconds=0.01,
    )
    return PipelineResult(
        available={"2": PlayerRecord(player_id="2", full_name="B End", fantasy_positions=["TE"])},
        observations=[ValueObservation(player="B End", value=12.5)],
        ranked=[RankedEntry(player="B End", value=12.5)],
        summary=summary,
    )


def test_build_settings_merges_profile_under_flags(tmp_path: Path):
    profile = tmp_path / "profile.json"
    profile.write_text(
        json.dumps(
            {
                "league_id": "111",
                "sources": ["https://profile.example"],
                "excluded_positions": ["K"],
                "top_n": 5,
                "name_matcher": "normalized",
            }
        ),
        encoding="utf-8",
    )

    args = cli._parse_args(["--load-profile", str(profile), "--top", "7", "--no-artifacts"])
    settings = cli.build_settings(args)

    assert settings.league_id == "111"
    assert settings.sources == ("https://profile.example",)
    assert settings.excluded_positions == frozenset({"K"})
    assert settings.top_n == 7
    assert settings.name_matcher == "normalized"
    assert settings.output_dir is None


def test_build_settings_exclude_positions_flag():
    args = cli._parse_args(["https://a.example", "--exclude-position", "k", "--exclude-position", "DEF"])
    settings = cli.build_settings(args)
    assert settings.excluded_positions == frozenset({"K", "DEF"})


def test_main_requires_league(capsys):
    assert cli.main(["https://a.example"]) == 2
    assert "league id is required" in capsys.readouterr().err


def test_main_requires_sources(capsys):
    assert cli.main(["--league", "123"]) == 2
    assert "source URL" in capsys.readouterr().err


def test_main_prints_ranked_targets(monkeypatch, capsys, tmp_path: Path):
    captured = {}

    def fake_run(**kwargs):
        captured.update(kwargs)
        return _result()

    monkeypatch.setattr(cli, "run_pipeline", fake_run)
    code = cli.main(
        [
            "https://a.example",
            "https://down.example",
            "--league",
            "123",
            "--catalog-cache",
            str(tmp_path / "catalog.json"),
            "--no-artifacts",
        ]
    )

    out = capsys.readouterr().out
    assert code == 0
    assert "B End" in out
    assert "Skipped sources: https://down.example" in out
    assert "Dropped 3 malformed rows" in out
    assert captured["settings"].sources == ("https://a.example", "https://down.example")


def test_main_fatal_stage_exits_one(monkeypatch, capsys, tmp_path: Path):
    def fake_run(**kwargs):
        raise PipelineStageError("catalog", CatalogUnavailable("offline"))

    monkeypatch.setattr(cli, "run_pipeline", fake_run)
    code = cli.main(
        ["https://a.example", "--league", "123", "--catalog-cache", str(tmp_path / "catalog.json")]
    )

    assert code == 1
    assert "catalog stage failed" in capsys.readouterr().err


def test_main_saves_profile(monkeypatch, tmp_path: Path):
    monkeypatch.setattr(cli, "run_pipeline", lambda **kwargs: _result())
    profile = tmp_path / "saved.json"

    cli.main(
        [
            "https://a.example",
            "--league",
            "123",
            "--top",
            "4",
            "--save-profile",
            str(profile),
            "--catalog-cache",
            str(tmp_path / "catalog.json"),
            "--no-artifacts",
        ]
    )

    saved = json.loads(profile.read_text(encoding="utf-8"))
    assert saved["league_id"] == "123"
    assert saved["top_n"] == 4
    assert saved["sources"] == ["https://a.example"]


def test_cleared_exclusions_survive_profile_round_trip(monkeypatch, tmp_path: Path):
    monkeypatch.setattr(cli, "run_pipeline", lambda **kwargs: _result())
    profile = tmp_path / "saved.json"

    cli.main(
        [
            "https://a.example",
            "--league",
            "123",
            "--exclude-position",
            "",
            "--save-profile",
            str(profile),
            "--catalog-cache",
            str(tmp_path / "catalog.json"),
            "--no-artifacts",
        ]
    )

    assert json.loads(profile.read_text(encoding="utf-8"))["excluded_positions"] == []
    settings = cli.build_settings(cli._parse_args(["--load-profile", str(profile)]))
    assert settings.excluded_positions == frozenset()


def test_profile_without_exclusions_uses_defaults(tmp_path: Path):
    profile = tmp_path / "profile.json"
    profile.write_text(json.dumps({"league_id": "1", "sources": ["https://a.example"]}), encoding="utf-8")

    settings = cli.build_settings(cli._parse_args(["--load-profile", str(profile)]))
    assert settings.excluded_positions == frozenset({"K", "DEF"})
