"""Poll licenses activity: wait for the ``xchange.licenses`` metafield.

The storefront integration writes the licenses metafield some time
after the order is created, so the first lookups routinely miss it.
This activity re-fetches the order's metafields on a fixed interval
until the record is populated or the attempt budget runs out.

Only absence is retried.  A non-success response from the store is
terminal and propagates immediately as ``RemoteReadError``; collapsing
the two would either spin on a real outage or give up during normal
propagation delay.

State machine::

    SEARCHING --populated--> FOUND
    SEARCHING --budget spent--> EXHAUSTED
    SEARCHING --non-2xx--> RemoteReadError (raised)
"""

from __future__ import annotations

import asyncio
import enum
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from license_html.core.constants import (
    DEFAULT_POLL_DELAY_SECONDS,
    DEFAULT_POLL_MAX_ATTEMPTS,
    LICENSES_KEY,
    LICENSES_NAMESPACE,
)
from license_html.core.exceptions import TransientError

if TYPE_CHECKING:
    from license_html.models.metafield import Metafield
    from license_html.stores.base import MetafieldStore

logger = logging.getLogger("license_html.activities.poll_licenses")

SleepFunc = Callable[[float], Awaitable[None]]


class RecordNotReadyError(TransientError):
    """Raised when the licenses metafield never appeared within the budget.

    The category stays transient (the record may still show up later),
    but ``retryable`` is ``False``: the attempt budget is already spent
    and nothing in this invocation will try again.
    """

    default_stage = "poll_licenses"
    default_code = "LICENSES_NOT_FOUND"
    http_status = 404

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)


class PollState(enum.Enum):
    """Polling lifecycle state.

    Values:
        SEARCHING: Record not seen yet, attempts remain.
        FOUND:     Populated record located.
        EXHAUSTED: Attempt budget spent without finding the record.
    """

    SEARCHING = "searching"
    FOUND = "found"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True, slots=True)
class PollOutcome:
    """Terminal result of ``poll_licenses``.

    Attributes:
        state: ``PollState.FOUND`` or ``PollState.EXHAUSTED``.
        metafield: The populated licenses metafield when found.
        attempts: Number of fetches issued.
    """

    state: PollState
    metafield: Metafield | None = None
    attempts: int = 0


def find_metafield(
    metafields: list[Metafield],
    *,
    namespace: str = LICENSES_NAMESPACE,
    key: str = LICENSES_KEY,
) -> Metafield | None:
    """Return the first metafield identified by *namespace*/*key*, if any."""
    for metafield in metafields:
        if metafield.matches(namespace, key):
            return metafield
    return None


async def poll_licenses(
    store: MetafieldStore,
    order_id: str,
    *,
    max_attempts: int = DEFAULT_POLL_MAX_ATTEMPTS,
    delay_seconds: float = DEFAULT_POLL_DELAY_SECONDS,
    sleep: SleepFunc = asyncio.sleep,
) -> PollOutcome:
    """Fetch the order's metafields until the licenses record is populated.

    Issues at most *max_attempts* fetches.  Waits *delay_seconds* only
    between a miss and the next fetch: never before the first attempt
    and never after the last one.

    Args:
        store: Open metafield store.
        order_id: The order to inspect.
        max_attempts: Fetch budget (>= 1).
        delay_seconds: Wait between attempts.
        sleep: Awaitable sleep, injectable so tests need not wait.

    Returns:
        A ``PollOutcome`` in state ``FOUND`` or ``EXHAUSTED``.

    Raises:
        RemoteReadError: If any fetch gets a non-success response.
        ValueError: If *max_attempts* is less than 1.
    """
    if max_attempts < 1:
        msg = f"poll_licenses: max_attempts must be >= 1, got {max_attempts}"
        raise ValueError(msg)

    state = PollState.SEARCHING
    attempt = 0

    while state is PollState.SEARCHING:
        attempt += 1
        metafields = await store.list_order_metafields(order_id)
        record = find_metafield(metafields)

        if record is not None and record.is_populated:
            logger.info(
                "Licenses metafield found | order_id=%s | attempt=%d/%d",
                order_id,
                attempt,
                max_attempts,
            )
            return PollOutcome(state=PollState.FOUND, metafield=record, attempts=attempt)

        logger.info(
            "Attempt %d/%d: licenses metafield not found yet | order_id=%s",
            attempt,
            max_attempts,
            order_id,
        )

        if attempt >= max_attempts:
            state = PollState.EXHAUSTED
        else:
            await sleep(delay_seconds)

    logger.warning(
        "Licenses metafield not found after retries | order_id=%s | attempts=%d",
        order_id,
        attempt,
    )
    return PollOutcome(state=state, attempts=attempt)
