from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer

from .pool import run
from .settings import ConfigError, load_count_config
from .storage import save_report


app = typer.Typer(help="Count a word across web pages with a bounded worker pool")


@app.command()
def count(
    word: Optional[str] = typer.Option(None, "--word", "-w", help="Target word (case sensitive substring)"),
    url: Optional[List[str]] = typer.Option(None, "--url", "-u", help="URL to fetch; repeat for several"),
    pool_size: Optional[int] = typer.Option(None, "--pool-size", "-p", help="Max concurrent requests"),
    timeout: Optional[float] = typer.Option(None, "--timeout", "-t", help="Per-request timeout in seconds"),
    strategy: Optional[str] = typer.Option(None, "--strategy", help="Result collection: lock or queue"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file"),
    save: Optional[str] = typer.Option(None, "--save", help="Also write results/<name>.csv"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging to stderr"),
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        cfg = load_count_config(config)
        if word is not None:
            cfg.target_word = word
        if url:
            cfg.urls = list(url)
        if pool_size is not None:
            cfg.pool_size = pool_size
        if timeout is not None:
            cfg.request_timeout_s = timeout
        if strategy is not None:
            cfg.collect_strategy = strategy

        report = run(cfg)
    except ConfigError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=2)

    if save:
        save_report(report, save)


def main() -> None:  # pragma: no cover - thin wrapper
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
