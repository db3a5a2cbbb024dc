from __future__ import annotations
import logging
from typing import AsyncIterator, Awaitable, Callable, Optional, TypeVar

from pypolar.models.pagination import PaginatedResponse
from pypolar.models.query_builder import QueryBuilder
from pypolar.services.errors import ApiError, ErrorKind
from pypolar.services.service_result import Result

logger = logging.getLogger(__name__)

T = TypeVar("T")

FetchPage = Callable[..., Awaitable[Result[PaginatedResponse[T]]]]

# Failures worth asking for the same page again; client errors never are.
RETRYABLE_KINDS = (ErrorKind.TRANSPORT, ErrorKind.UNKNOWN)


async def paginate(
    fetch_page: FetchPage,
    builder: Optional[QueryBuilder] = None,
    limit: int = 100,
    retries: int = 0,
) -> AsyncIterator[Result[T]]:
    """
    Walk a paginated collection as one lazy stream of per-item results.

    `fetch_page(builder, page=n, limit=limit)` is awaited for pages 1, 2, ...
    with the same builder every time. Each item is yielded as Result.ok(item)
    in server order. The next page is only requested once the consumer moves
    past the last item of the current one.

    The stream ends after the page whose number reaches max_page, or after an
    empty page. A failed page is retried up to `retries` times when the
    failure is transient; after that a single Result.fail is yielded and the
    stream stops. Cancelling the consuming task stops it without further
    requests.
    """
    page = 1
    while True:
        logger.debug("Fetching page %s (limit=%s)", page, limit)
        result = await fetch_page(builder, page=page, limit=limit)

        attempt = 0
        while result.is_failure and attempt < retries and _is_retryable(result.error):
            attempt += 1
            logger.warning(
                "Page %s failed (%s), retrying %s/%s",
                page,
                result.error.message,
                attempt,
                retries,
            )
            result = await fetch_page(builder, page=page, limit=limit)

        if result.is_failure:
            logger.warning("Stopping pagination at page %s: %s", page, result.error)
            yield Result.fail(result.error)
            return

        envelope = result.value
        for item in envelope.items:
            yield Result.ok(item)

        current = page if envelope.pagination.page is None else envelope.pagination.page
        if not envelope.items or current >= envelope.pagination.max_page:
            return
        page += 1


def _is_retryable(error: ApiError) -> bool:
    return error.kind in RETRYABLE_KINDS
