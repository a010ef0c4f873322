"""License task orchestrator: poll, parse, render, persist.

Sequences the activities for a single order and resolves every outcome
into one ``TaskResult`` (HTTP status + plain-text body):

    ingress → poll_licenses → parse_licenses → render_licenses → save_licenses_html

| Outcome                  | Status                     |
|--------------------------|----------------------------|
| ClientInputError         | 400, no store calls        |
| RemoteReadError          | upstream status            |
| record never populated   | 404                        |
| MalformedRecordError     | 500, no write              |
| RemoteWriteError         | 500                        |
| task deadline exceeded   | 504                        |
| anything else            | 500, detail only in logs   |
| success                  | 200                        |

The store is opened per invocation and closed on every exit path.
Cancellation of the surrounding task propagates into the pending sleep
or HTTP call; it is never converted into a result.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass

from license_html.activities.parse_licenses import (
    NOT_A_LIST,
    MalformedRecordError,
    parse_licenses,
)
from license_html.activities.poll_licenses import (
    PollState,
    RecordNotReadyError,
    SleepFunc,
    poll_licenses,
)
from license_html.activities.render_licenses import render_licenses
from license_html.activities.save_licenses import save_licenses_html
from license_html.core.config import StoreConfig
from license_html.core.exceptions import LicenseTaskError, PermanentError
from license_html.core.ingress import ClientInputError, parse_task_input
from license_html.stores.base import MetafieldStore, RemoteReadError, RemoteWriteError
from license_html.stores.shopify import ShopifyMetafieldStore

logger = logging.getLogger("license_html.orchestrators.license_pipeline")

StoreFactory = Callable[[StoreConfig], MetafieldStore]

SUCCESS_BODY = "HTML saved successfully."
READ_FAILED_BODY = "Error fetching metafields from Shopify"
NOT_FOUND_BODY = "License metafield not found after retries."
MALFORMED_JSON_BODY = "Failed to parse metafield value as JSON"
NOT_A_LIST_BODY = "Expected metafield to contain a JSON array"
WRITE_FAILED_BODY = "Failed to save HTML to licenses_html metafield"
TIMEOUT_BODY = "Timed out waiting for license metafield"
UNEXPECTED_BODY = "Unexpected server error"


class UnexpectedError(PermanentError):
    """Catch-all for faults outside the task taxonomy."""

    default_stage = "license_pipeline"
    default_code = "UNEXPECTED_ERROR"


@dataclass(frozen=True, slots=True)
class TaskResult:
    """Terminal result of one invocation.

    Attributes:
        status_code: HTTP status reported to the caller.
        body: Plain-text response body.
    """

    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


async def run_license_task(
    payload: bytes | str | dict[str, object],
    *,
    config: StoreConfig,
    store_factory: StoreFactory = ShopifyMetafieldStore,
    sleep: SleepFunc = asyncio.sleep,
    correlation_id: str = "",
) -> TaskResult:
    """Run the license task for the order named in *payload*.

    Args:
        payload: Invocation body (raw bytes/text or a decoded dict).
        config: Store and retry configuration, built once per process.
        store_factory: Builds the ``MetafieldStore`` for this run.
        sleep: Awaitable sleep used between poll attempts.
        correlation_id: Invocation identifier for logs and errors.

    Returns:
        The ``TaskResult`` to hand back to the caller.  Never raises for
        task failures; cancellation still propagates.
    """
    try:
        task_input = parse_task_input(payload)
    except ClientInputError as exc:
        return _failure(exc, correlation_id)

    order_id = task_input["order_id"]
    logger.info(
        "License task started | order_id=%s | correlation_id=%s",
        order_id,
        correlation_id,
    )

    try:
        if config.task_timeout_seconds > 0:
            async with asyncio.timeout(config.task_timeout_seconds):
                result = await _process_order(order_id, config, store_factory, sleep)
        else:
            result = await _process_order(order_id, config, store_factory, sleep)
    except LicenseTaskError as exc:
        return _failure(exc, correlation_id)
    except TimeoutError:
        logger.error(
            "License task timed out | order_id=%s | timeout=%ss | correlation_id=%s",
            order_id,
            config.task_timeout_seconds,
            correlation_id,
        )
        return TaskResult(504, TIMEOUT_BODY)
    except Exception as exc:
        logger.exception(
            "Unexpected error in license task | order_id=%s | correlation_id=%s",
            order_id,
            correlation_id,
        )
        return _failure(UnexpectedError(str(exc)), correlation_id)

    logger.info(
        "License task completed | order_id=%s | status=%d | correlation_id=%s",
        order_id,
        result.status_code,
        correlation_id,
    )
    return result


async def _process_order(
    order_id: str,
    config: StoreConfig,
    store_factory: StoreFactory,
    sleep: SleepFunc,
) -> TaskResult:
    async with store_factory(config) as store:
        outcome = await poll_licenses(
            store,
            order_id,
            max_attempts=config.poll_max_attempts,
            delay_seconds=config.poll_delay_seconds,
            sleep=sleep,
        )
        if outcome.state is PollState.EXHAUSTED or outcome.metafield is None:
            msg = (
                f"Licenses metafield for order {order_id} not found "
                f"after {outcome.attempts} attempts"
            )
            raise RecordNotReadyError(msg)

        entries = parse_licenses(outcome.metafield.value)
        html = render_licenses(entries)
        await save_licenses_html(store, order_id, html)

    logger.info("Rendered licenses | order_id=%s | entries=%d", order_id, len(entries))
    return TaskResult(200, SUCCESS_BODY)


def _failure(exc: LicenseTaskError, correlation_id: str) -> TaskResult:
    """Log *exc* and map it to the caller-facing result."""
    if not exc.correlation_id:
        exc.correlation_id = correlation_id

    status = exc.http_status
    body = _failure_body(exc)
    log = logger.warning if status < 500 else logger.error
    log("License task failed | status=%d | error=%s", status, exc.to_error_dict())
    return TaskResult(status, body)


def _failure_body(exc: LicenseTaskError) -> str:
    if isinstance(exc, ClientInputError):
        return exc.message
    if isinstance(exc, RemoteReadError):
        return READ_FAILED_BODY
    if isinstance(exc, RecordNotReadyError):
        return NOT_FOUND_BODY
    if isinstance(exc, MalformedRecordError):
        return NOT_A_LIST_BODY if exc.reason == NOT_A_LIST else MALFORMED_JSON_BODY
    if isinstance(exc, RemoteWriteError):
        return WRITE_FAILED_BODY
    return UNEXPECTED_BODY
