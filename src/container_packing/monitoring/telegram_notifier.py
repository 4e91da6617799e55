"""Lightweight Telegram notifications for packing benchmarks.

Sends plain-text messages to a Telegram chat via the Bot API for
benchmark start, progress milestones, errors and the final summary.

No retry logic — notifications are non-critical and never raise.
"""

from __future__ import annotations

import logging
import os
from typing import Any

import httpx

logger = logging.getLogger(__name__)

TELEGRAM_API = "https://api.telegram.org/bot{token}/sendMessage"


async def send_telegram(
    message: str,
    chat_id: str | None = None,
    token: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> bool:
    """Send a plain-text message to a Telegram chat.

    Args:
        message: Text to send.
        chat_id: Telegram chat ID. Defaults to TELEGRAM_CHAT_ID env var.
        token: Bot token. Defaults to TELEGRAM_BOT_TOKEN env var.
        transport: Optional httpx transport (used by tests).

    Returns:
        True if Telegram accepted the message, False otherwise.
    """
    token = token or os.environ.get("TELEGRAM_BOT_TOKEN", "")
    if not token:
        return False

    chat_id = chat_id or os.environ.get("TELEGRAM_CHAT_ID", "")
    if not chat_id:
        return False

    url = TELEGRAM_API.format(token=token)
    payload = {"chat_id": chat_id, "text": message}

    try:
        async with httpx.AsyncClient(timeout=10.0, transport=transport) as client:
            resp = await client.post(url, json=payload)
            data = resp.json()
            return bool(data.get("ok", False))
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("telegram notification failed: %s", exc)
        return False


def format_benchmark_start(
    total_runs: int,
    items_per_run: int,
    container_dims: tuple[float, float, float],
) -> str:
    """Format benchmark start notification.

    Example:
        >>> print(format_benchmark_start(10, 50, (589, 235, 239)))
        Benchmark Started
        Runs: 10 (50 items each)
        Container: 589 x 235 x 239 cm
    """
    return (
        f"Benchmark Started\n"
        f"Runs: {total_runs} ({items_per_run} items each)\n"
        f"Container: {container_dims[0]:g} x {container_dims[1]:g} x {container_dims[2]:g} cm"
    )


def format_run_milestone(
    runs_completed: int,
    total_runs: int,
    avg_utilization: float,
) -> str:
    """Format a progress milestone.

    Example:
        >>> print(format_run_milestone(3, 10, 61.25))
        Progress Update
        Completed: 3/10 runs (30%)
        Avg Utilization: 61.2%
    """
    progress_pct = (runs_completed / total_runs) * 100 if total_runs else 100.0
    return (
        f"Progress Update\n"
        f"Completed: {runs_completed}/{total_runs} runs ({progress_pct:.0f}%)\n"
        f"Avg Utilization: {avg_utilization:.1f}%"
    )


def format_error(error_type: str, error_message: str, context: dict[str, Any] | None = None) -> str:
    """Format an error notification.

    Example:
        >>> print(format_error("InputValidationError", "duplicate item id", {"run": 3}))
        Error: InputValidationError
        duplicate item id
        Context: run=3
    """
    lines = [
        f"Error: {error_type}",
        error_message,
    ]
    if context:
        ctx_str = ", ".join(f"{k}={v}" for k, v in context.items())
        lines.append(f"Context: {ctx_str}")
    return "\n".join(lines)


def format_final_summary(
    total_runs: int,
    total_packed: int,
    total_items: int,
    avg_utilization: float,
    runtime_seconds: float,
    errors: int,
) -> str:
    """Format the final benchmark summary.

    Example:
        >>> print(format_final_summary(10, 420, 500, 63.4, 12.5, 0))
        Benchmark Complete
        Runs: 10
        Items packed: 420/500
        Avg Utilization: 63.4%
        Runtime: 12.5 seconds
        Errors: 0
    """
    return (
        f"Benchmark Complete\n"
        f"Runs: {total_runs}\n"
        f"Items packed: {total_packed}/{total_items}\n"
        f"Avg Utilization: {avg_utilization:.1f}%\n"
        f"Runtime: {runtime_seconds:.1f} seconds\n"
        f"Errors: {errors}"
    )
