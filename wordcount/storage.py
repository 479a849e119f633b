from pathlib import Path

from .metrics import AggregateReport
from .report import results_to_df
from .settings import PROJECT_ROOT

RESULTS_DIR = PROJECT_ROOT / "results"


def save_report(report: AggregateReport, name: str) -> Path | None:
    """
    Write one row per fetched URL to results/<name>.csv.

    Returns the written path, or None when the run had no results
    (nothing is written for an empty URL list).
    """
    df = results_to_df(report)
    if df.empty:
        return None

    RESULTS_DIR.mkdir(parents=True, exist_ok=True)
    out_path = RESULTS_DIR / f"{name}.csv"
    df.to_csv(out_path, index=False)
    print(f"Saved {out_path} ({report.succeeded} ok, {report.failed} failed)")
    return out_path
