from pathlib import Path

from typer.testing import CliRunner

from wordcount import pool, storage
from wordcount.cli import app
from wordcount.metrics import FetchResult

runner = CliRunner()


async def fake_fetch(target, url, timeout_s):
    return FetchResult(url=url, count=len(url) % 4)


def empty_config(tmp_path: Path) -> Path:
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("pool_size: 2\n", encoding="utf-8")
    return cfg


def test_cli_prints_counts_and_total(tmp_path: Path, monkeypatch):
    monkeypatch.setattr(pool, "fetch_count", fake_fetch)
    urls = ["http://a.test/", "http://bb.test/", "http://a.test/"]
    args = ["--config", str(empty_config(tmp_path)), "--word", "Go"]
    for u in urls:
        args += ["--url", u]

    result = runner.invoke(app, args)

    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    expected_total = sum(len(u) % 4 for u in urls)
    assert lines[-1] == f"Total: {expected_total}"
    assert sorted(lines[:-1]) == sorted(f"Count for {u}: {len(u) % 4}" for u in urls)


def test_cli_invalid_pool_size_exits_with_error(tmp_path: Path):
    result = runner.invoke(app, ["--config", str(empty_config(tmp_path)), "--pool-size", "0", "--url", "http://a.test/"])
    assert result.exit_code == 2
    assert "Total:" not in result.stdout


def test_cli_invalid_timeout_exits_with_error(tmp_path: Path):
    result = runner.invoke(app, ["--config", str(empty_config(tmp_path)), "--timeout", "0", "--url", "http://a.test/"])
    assert result.exit_code == 2


def test_cli_save_writes_csv(tmp_path: Path, monkeypatch):
    monkeypatch.setattr(pool, "fetch_count", fake_fetch)
    monkeypatch.setattr(storage, "RESULTS_DIR", tmp_path / "results")

    result = runner.invoke(
        app,
        ["--config", str(empty_config(tmp_path)), "--url", "http://a.test/", "--strategy", "queue", "--save", "run"],
    )

    assert result.exit_code == 0
    assert (tmp_path / "results" / "run.csv").exists()


def test_cli_wrongly_typed_yaml_exits_with_error(tmp_path: Path):
    cfg = tmp_path / "bad.yaml"
    cfg.write_text("pool_size: '3'\n", encoding="utf-8")

    result = runner.invoke(app, ["--config", str(cfg), "--url", "http://a.test/"])

    assert result.exit_code == 2
    assert "Total:" not in result.stdout
