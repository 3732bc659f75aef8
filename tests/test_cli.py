from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest

from circuit_timer.cli import main as cli
from circuit_timer.core.display import NextInfo, SessionProgress
from circuit_timer.core.partner import ParticipantStatus
from circuit_timer.workout.library import WorkoutCatalog
from circuit_timer.workout.model import Exercise, Phase, WorkoutDefinition


def _tiny_catalog() -> WorkoutCatalog:
    return WorkoutCatalog(
        (
            WorkoutDefinition(
                id="tiny",
                name="Tiny",
                description="",
                phases=(
                    Phase(
                        type="warmup",
                        name="Warmup",
                        exercises=(Exercise("March", duration_sec=2, rest_after_sec=1),),
                    ),
                    Phase(
                        type="workout",
                        name="Main",
                        exercises=(Exercise("Squats", duration_sec=2),),
                    ),
                ),
            ),
        )
    )


def _progress(**overrides) -> SessionProgress:
    values = dict(
        workout_name="Tiny",
        phase_name="Main",
        phase_type="workout",
        phase_icon="",
        phase_index=1,
        phase_total=2,
        exercise_name="Squats",
        exercise_index=0,
        exercise_total=1,
        instructions=(),
        tip=None,
        round=1,
        round_total=2,
        segment="exercise",
        side=None,
        time_left=40,
        time_text="00:40",
        progress_pct=50.0,
        is_running=True,
        is_finished=False,
        partner_mode=False,
        next_info=NextInfo("Rest", "00:10"),
        partner=None,
    )
    values.update(overrides)
    return SessionProgress(**values)


def test_parser_defaults() -> None:
    args = cli.build_parser().parse_args([])

    assert args.run is None
    assert args.catalog == []
    assert args.from_phase == 1
    assert args.tick_interval == 1.0
    assert args.web_port == 8090
    assert not args.partner
    assert not args.mute


def test_print_catalog(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.print_catalog(_tiny_catalog()) == 0
    out = capsys.readouterr().out

    assert "tiny" in out
    assert "00:05" in out
    assert "2 phases" in out

    cli.print_catalog(WorkoutCatalog(()))
    assert "No workouts available" in capsys.readouterr().out


def test_format_progress_line() -> None:
    assert cli.format_progress_line(_progress()) == "Main R1/2 | Squats | 00:40"
    assert cli.format_progress_line(_progress(side="left")) == "Main R1/2 | Squats (left) | 00:40"

    rest = _progress(segment="rest", time_text="00:10", next_info=NextInfo("Next", "Lunges"))
    assert cli.format_progress_line(rest) == "Main R1/2 | Rest | 00:10 | Next: Lunges"


def test_format_progress_line_shows_both_partners() -> None:
    rows = Exercise("Rows", duration_sec=30)
    swings = Exercise("Swings", duration_sec=45)
    partner = (
        ParticipantStatus(exercise=rows, side=None, is_switching=False, finished_early=False),
        ParticipantStatus(exercise=swings, side=None, is_switching=False, finished_early=False),
    )

    line = cli.format_progress_line(_progress(partner_mode=True, partner=partner))

    assert line.endswith("A: Rows | B: Swings")


def test_run_workout_to_completion(capsys: pytest.CaptureFixture[str]) -> None:
    code = asyncio.run(
        cli.run_workout(
            "tiny",
            _tiny_catalog(),
            partner_mode=False,
            start_phase=0,
            sound_enabled=False,
            tick_interval_sec=0.005,
        )
    )

    out = capsys.readouterr().out
    assert code == 0
    assert out.startswith("Tiny - 00:05")
    assert "Warmup R1/1 | March | 00:02" in out
    assert "Main R1/1 | Squats | 00:02" in out
    assert out.rstrip().endswith("Workout complete")


def test_run_workout_rejects_unknown_id_and_phase(capsys: pytest.CaptureFixture[str]) -> None:
    options = dict(partner_mode=False, sound_enabled=False, tick_interval_sec=0.01)

    assert asyncio.run(cli.run_workout("nope", _tiny_catalog(), start_phase=0, **options)) == 1
    assert "Unknown workout 'nope'" in capsys.readouterr().out
    assert asyncio.run(cli.run_workout("tiny", _tiny_catalog(), start_phase=5, **options)) == 1
    assert "has 2 phases" in capsys.readouterr().out


def test_main_reports_broken_catalog(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text(json.dumps({"id": "broken", "phases": []}), encoding="utf-8")

    assert cli.main(["--catalog", str(broken), "--list"]) == 1
    assert "Cannot load workouts" in capsys.readouterr().err


def test_main_rejects_bad_tick_interval(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    assert cli.main(["--run", "full_body_circuit", "--tick-interval", "0"]) == 1
    assert "--tick-interval must be > 0" in capsys.readouterr().err
