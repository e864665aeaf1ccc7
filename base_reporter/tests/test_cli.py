from pathlib import Path

from typer.testing import CliRunner

from base_reporter.cli import app

runner = CliRunner()

PASSING = """\
- event: start
- event: suite
  title: Math
- event: pass
  title: adds
  duration: 120
  slow: 75
- event: test end
- event: suite end
- event: end
"""

FAILING = """\
- event: start
- event: fail
  title: divides
  err:
    message: division by zero
- event: test end
- event: end
"""


def _write(tmp_path: Path, name: str, text: str) -> Path:
    path = tmp_path / name
    path.write_text(text)
    return path


def test_replay_passing_run(tmp_path: Path):
    result = runner.invoke(app, ["replay", str(_write(tmp_path, "ok.yaml", PASSING)), "--no-colors"])
    assert result.exit_code == 0
    assert "Math" in result.stdout
    assert "1 passing" in result.stdout


def test_replay_lists_passes(tmp_path: Path):
    result = runner.invoke(
        app, ["replay", str(_write(tmp_path, "ok.yaml", PASSING)), "--no-colors", "--passes"]
    )
    assert result.exit_code == 0
    assert "adds (120ms)" in result.stdout


def test_replay_failing_run_exits_nonzero(tmp_path: Path):
    result = runner.invoke(app, ["replay", str(_write(tmp_path, "bad.yaml", FAILING)), "--no-colors"])
    assert result.exit_code == 1
    assert "1 failing" in result.stdout
    assert "division by zero" in result.stdout


def test_replay_forced_colors(tmp_path: Path):
    result = runner.invoke(app, ["replay", str(_write(tmp_path, "ok.yaml", PASSING)), "--colors"])
    assert "\u001b[32m 1 passing" in result.stdout


def test_replay_without_end_flushes_partial_report(tmp_path: Path):
    script = _write(tmp_path, "partial.yaml", "- event: start\n- event: pending\n  title: later\n")
    result = runner.invoke(app, ["replay", str(script), "--no-colors"])
    assert result.exit_code == 0
    assert "  - later" in result.stdout


def test_replay_malformed_script(tmp_path: Path):
    result = runner.invoke(app, ["replay", str(_write(tmp_path, "bad.yaml", "- event: explode\n"))])
    assert result.exit_code == 2


def test_replay_missing_config_file(tmp_path: Path):
    script = _write(tmp_path, "ok.yaml", PASSING)
    result = runner.invoke(app, ["replay", str(script), "--config", str(tmp_path / "absent.toml")])
    assert result.exit_code == 2


def test_replay_config_file_with_wrong_type(tmp_path: Path):
    script = _write(tmp_path, "ok.yaml", PASSING)
    config_file = _write(tmp_path, "base_reporter.toml", '[base_reporter]\nverbosity = "3"\n')
    result = runner.invoke(app, ["replay", str(script), "--config", str(config_file)])
    assert result.exit_code == 2
    assert "verbosity" in result.output


def test_diff_unified(tmp_path: Path):
    actual = _write(tmp_path, "actual.txt", "one\ntwo\n")
    expected = _write(tmp_path, "expected.txt", "one\nthree\n")
    result = runner.invoke(app, ["diff", str(actual), str(expected), "--no-colors"])
    assert result.exit_code == 0
    assert "+ expected - actual" in result.stdout
    assert "      +three" in result.stdout
    assert "      -two" in result.stdout


def test_diff_inline(tmp_path: Path):
    actual = _write(tmp_path, "actual.txt", "one two")
    expected = _write(tmp_path, "expected.txt", "one three")
    result = runner.invoke(app, ["diff", str(actual), str(expected), "--inline", "--no-colors"])
    assert result.exit_code == 0
    assert "actual expected" in result.stdout
    assert "one threetwo" in result.stdout
