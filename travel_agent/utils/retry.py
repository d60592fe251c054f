"""
Retry with exponential backoff for slow backend operations
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


def backoff_delay(attempt: int, base_delay: float, max_delay: float) -> float:
    """Delay after a failed attempt (1-based): base doubled per attempt, capped"""
    return min(base_delay * (2 ** (attempt - 1)), max_delay)


async def retry_with_backoff(
    operation: Callable[[], Awaitable[Any]],
    max_attempts: int,
    base_delay: float,
    max_delay: float,
    label: str = "operation",
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> Optional[Any]:
    """
    Run operation until it succeeds or max_attempts are used up.

    Args:
        operation: zero-argument coroutine factory, called once per attempt
        max_attempts: total number of attempts
        base_delay: seconds to wait after the first failure
        max_delay: upper bound for any single wait
        label: name used in log lines
        sleep: awaitable sleep, replaceable in tests

    Returns:
        The first successful result, or None once every attempt failed
    """
    for attempt in range(1, max_attempts + 1):
        try:
            logger.info(f"📧 Attempting {label} (attempt {attempt}/{max_attempts})...")
            result = await operation()
            logger.info(f"✅ {label} succeeded on attempt {attempt}")
            return result
        except Exception as e:
            logger.error(f"❌ {label} attempt {attempt} failed: {e}")

            if attempt == max_attempts:
                logger.error(f"❌ All {label} attempts failed")
                return None

            wait_time = backoff_delay(attempt, base_delay, max_delay)
            logger.info(f"⏳ Waiting {wait_time:.1f}s before retry...")
            await sleep(wait_time)

    return None
