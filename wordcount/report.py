"""
Console report lines and tabular views of a run.

The line wording is fixed; downstream scripts grep for it.
"""

import pandas as pd
from dataclasses import asdict
from .metrics import AggregateReport, FetchResult


def count_line(r: FetchResult) -> str:
    return f"Count for {r.url}: {r.count}"


def total_line(report: AggregateReport) -> str:
    return f"Total: {report.total}"


def print_count(r: FetchResult) -> None:
    print(count_line(r), flush=True)


def results_to_df(report: AggregateReport) -> pd.DataFrame:
    """
    One row per FetchResult, with an `ok` column so failed fetches can be told
    apart from pages that simply had no matches.
    """
    rows = [{**asdict(r), "ok": r.ok} for r in report.results]
    return pd.DataFrame(rows)
