import logging
import time, aiohttp
from .metrics import FetchResult, failed_result

logger = logging.getLogger(__name__)


def count_occurrences(body: bytes | str, target: str) -> int:
    """
    Count non-overlapping, case-sensitive occurrences of `target` in `body`.

    This is a literal substring match, so "Go" is found inside "Golang".
    Bytes bodies are searched for the UTF-8 encoding of `target`.
    """
    if not target:
        return 0
    if isinstance(body, bytes):
        return body.count(target.encode("utf-8"))
    return body.count(target)


async def fetch_count(target: str, url: str, timeout_s: float) -> FetchResult:
    """
    GET `url` and count `target` in the response body.

    A client session is opened for this call only; `timeout_s` bounds the
    whole cycle (connect + read). Any failure yields a zero count with
    `error_type` set, never an exception.
    """
    t0 = time.perf_counter()
    timeout = aiohttp.ClientTimeout(total=timeout_s)

    try:
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(url) as resp:
                body = await resp.read()
                ttl = time.perf_counter() - t0
                return FetchResult(
                    url=url,
                    count=count_occurrences(body, target),
                    error_type=None,
                    status=resp.status,
                    bytes_len=len(body),
                    ttl_s=ttl,
                )
    except Exception as e:
        ttl = time.perf_counter() - t0
        logger.debug("fetch failed for %s: %s: %s", url, type(e).__name__, e)
        return failed_result(url, type(e).__name__, ttl_s=ttl)
