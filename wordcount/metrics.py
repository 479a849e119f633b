from dataclasses import dataclass, field


@dataclass
class FetchResult:
    """
    Normalized per-URL result produced by the fetcher and consumed by the pool.

    Fields:
        url         : The URL that was requested.
        count       : Occurrences of the target word in the body (0 on failure).
        error_type  : String name of the error/exception (e.g. "TimeoutError"),
                      or None when the body was fetched and counted.
        status      : HTTP status code if a response arrived (e.g. 200, 404).
        bytes_len   : Length of the fetched body in bytes (0 on failure).
        ttl_s       : Total time to last byte (seconds).
    """
    url: str
    count: int
    error_type: str | None = None
    status: int | None = None
    bytes_len: int = 0
    ttl_s: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error_type is None


def failed_result(url: str, error_type: str, ttl_s: float = 0.0) -> FetchResult:
    """
    Zero-count FetchResult for a fetch that never produced a body.
    """
    return FetchResult(url=url, count=0, error_type=error_type, ttl_s=ttl_s)


@dataclass
class AggregateReport:
    """
    Outcome of one pool run.

    `results` holds exactly one FetchResult per work item, in completion order.
    `total` is only filled in once every task has finished.
    """
    results: list[FetchResult] = field(default_factory=list)
    total: int = 0

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.ok)

    @property
    def succeeded(self) -> int:
        return len(self.results) - self.failed
