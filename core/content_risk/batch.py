"""Batch orchestration for content classification.

Fans items out to an ItemClassifier under one batch-wide asyncio.Semaphore
and writes each result to its input index. Fixed-size chunks only group
items for progress checkpoints; a slow item never holds back later chunks.
"""

import asyncio
import logging
from collections.abc import Iterator, Sequence
from typing import Callable, Optional

from .classifier import ItemClassifier
from .errors import BatchError, BatchErrorKind, OracleErrorKind
from .types import ClassifiedItem, ContentItem

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 5
DEFAULT_CONCURRENCY = 5

# Only transient failures are worth another oracle call
RETRYABLE_KINDS = frozenset({OracleErrorKind.UNAVAILABLE, OracleErrorKind.TIMEOUT})


def chunk_indexed(
    items: Sequence[ContentItem], size: int
) -> Iterator[list[tuple[int, ContentItem]]]:
    """Yield consecutive (index, item) chunks of at most `size` items."""
    for start in range(0, len(items), size):
        yield [(start + offset, item) for offset, item in enumerate(items[start : start + size])]


def _validate_batch(
    items: Optional[Sequence[ContentItem]],
    concurrency: int,
    batch_size: int,
    max_retries: int,
) -> None:
    if items is None or len(items) == 0:
        raise BatchError(
            "Batch requires at least one content item",
            BatchErrorKind.EMPTY_INPUT,
        )
    if concurrency < 1:
        raise BatchError(
            f"concurrency must be >= 1, got {concurrency}",
            BatchErrorKind.INVALID_CONCURRENCY,
        )
    if batch_size < 1:
        raise BatchError(
            f"batch_size must be >= 1, got {batch_size}",
            BatchErrorKind.INVALID_CONCURRENCY,
        )
    if max_retries < 0:
        raise ValueError(f"max_retries must be >= 0, got {max_retries}")


async def classify_batch(
    items: Sequence[ContentItem],
    classifier: ItemClassifier,
    concurrency: int = DEFAULT_CONCURRENCY,
    batch_size: int = DEFAULT_BATCH_SIZE,
    max_retries: int = 0,
    retry_backoff: float = 2.0,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> list[ClassifiedItem]:
    """Classify every item, returning results in input order.

    Individual failures come back as fallback results; they never cancel
    sibling work. At most `concurrency` oracle calls are in flight across
    the whole batch, whatever the chunk size.

    Args:
        items: Content to classify (must be non-empty)
        classifier: Item classifier to apply to each item
        concurrency: Max classifier calls in flight
        batch_size: Items per progress checkpoint
        max_retries: Extra attempts for items that failed as UNAVAILABLE or
            TIMEOUT (0 = single attempt)
        retry_backoff: Delay before retry n is retry_backoff ** n seconds
        progress_callback: Called as (completed, total) after each item

    Returns:
        One ClassifiedItem per input item, same order

    Raises:
        BatchError: Empty input or non-positive concurrency/batch_size
    """
    _validate_batch(items, concurrency, batch_size, max_retries)

    items = list(items)
    total = len(items)
    results: list[Optional[ClassifiedItem]] = [None] * total
    semaphore = asyncio.Semaphore(concurrency)
    completed = 0

    async def classify_with_retries(item: ContentItem) -> ClassifiedItem:
        attempt = 1
        result = await classifier.classify(item, attempt=attempt)
        while (
            not result.succeeded
            and result.error_kind in RETRYABLE_KINDS
            and attempt <= max_retries
        ):
            delay = retry_backoff**attempt
            logger.info(
                f"Retrying '{item.preview()}' after {result.error_kind.value} "
                f"(attempt {attempt + 1}/{max_retries + 1}, waiting {delay:g}s)"
            )
            await asyncio.sleep(delay)
            attempt += 1
            result = await classifier.classify(item, attempt=attempt)
        return result

    async def process_one(index: int, item: ContentItem) -> None:
        nonlocal completed
        async with semaphore:
            results[index] = await classify_with_retries(item)
        completed += 1
        if progress_callback:
            progress_callback(completed, total)

    chunk_count = (total + batch_size - 1) // batch_size
    logger.info(
        f"Classifying {total} items in {chunk_count} chunks "
        f"(batch_size={batch_size}, concurrency={concurrency})"
    )

    async def process_chunk(chunk_number: int, chunk: list[tuple[int, ContentItem]]) -> None:
        await asyncio.gather(*(process_one(index, item) for index, item in chunk))
        logger.info(f"Chunk {chunk_number}/{chunk_count} done ({completed}/{total} items)")

    # Chunks overlap; the semaphore alone bounds in-flight calls
    await asyncio.gather(
        *(
            process_chunk(chunk_number, chunk)
            for chunk_number, chunk in enumerate(chunk_indexed(items, batch_size), start=1)
        )
    )

    ordered = [result for result in results if result is not None]
    failed = sum(1 for result in ordered if not result.succeeded)
    if failed:
        logger.warning(f"Batch finished with {failed}/{total} fallback assessments")
    else:
        logger.info(f"Batch finished: {total} items classified")

    return ordered
