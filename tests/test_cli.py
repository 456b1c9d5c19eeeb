## perlist — CLI integration tests

import os, sys
import subprocess


def run_cli(*cli_args: str, env: dict | None = None) -> subprocess.CompletedProcess:
    args = [sys.executable, "-m", "perlist"]
    args.extend(cli_args)
    merged_env = os.environ.copy()
    if env:
        merged_env.update(env)
    return subprocess.run(args, capture_output=True, text=True, env=merged_env)


def test_cli_eval_prints_result():
    result = run_cli("eval", "< 1 2 > prepend 0")
    assert result.returncode == 0, result.stderr
    assert result.stdout.strip() == "< 0 1 2 >"


def test_cli_eval_sources_share_bindings():
    result = run_cli("eval", "base = < 1 >", "base prepend 2 .")
    assert result.returncode == 0, result.stderr
    assert result.stdout.strip().splitlines() == ["< 1 >", "< 2 1 >"]


def test_cli_verbose_traces_reclaimed_elements():
    result = run_cli("-v", "eval", "< 7 > tail")
    assert result.returncode == 0, result.stderr
    assert "reclaimed 7" in result.stdout


def test_cli_name_error_reports_location():
    result = run_cli("eval", "a = nil .", "missing tail .")
    assert result.returncode != 0
    assert "<arg 2>:1:1: ListNameError:" in result.stderr
    assert "missing" in result.stderr


def test_cli_parse_error_reports_location():
    result = run_cli("eval", "a = ? .")
    assert result.returncode != 0
    assert "<arg 1>:1:5: ListParseError:" in result.stderr


def test_cli_scenario_release_order():
    result = run_cli("scenario")
    assert result.returncode == 0, result.stderr
    assert "after list_321: C B\n" in result.stdout
    assert "after list_1:   C B A\n" in result.stdout


def test_cli_stress_releases_long_chain():
    result = run_cli("--stats", "stress", "--length", "100000")
    assert result.returncode == 0, result.stderr
    assert "released\t100,000" in result.stdout
    assert "STATISTICS." in result.stdout
    assert "reclaimed\t100,000" in result.stdout
