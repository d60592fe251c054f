"""
Per-user FIFO message queue
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict

from ..utils.helpers import mask_phone

logger = logging.getLogger(__name__)


class UserMessageQueue:
    """Chains each user's messages after the previous one settles.

    Different users run concurrently. The entry for a user is dropped as
    soon as the last task in its chain finishes.
    """

    def __init__(self):
        self._tails: Dict[str, asyncio.Task] = {}

    def submit(self, user_id: str, handler: Callable[..., Awaitable[Any]], *args: Any) -> asyncio.Task:
        """Schedule handler(*args) after every earlier message of the same user"""
        previous = self._tails.get(user_id)
        task = asyncio.ensure_future(self._run_after(previous, user_id, handler, *args))
        self._tails[user_id] = task
        task.add_done_callback(lambda done: self._release(user_id, done))
        return task

    async def _run_after(self, previous, user_id: str, handler, *args) -> Any:
        if previous is not None:
            await asyncio.wait([previous])
        try:
            return await handler(*args)
        except Exception as e:
            logger.error(f"❌ Error processing message for {mask_phone(user_id)}: {e}", exc_info=True)
            return None

    def _release(self, user_id: str, task: asyncio.Task) -> None:
        if self._tails.get(user_id) is task:
            del self._tails[user_id]

    def pending_users(self) -> int:
        return len(self._tails)

    async def drain(self) -> None:
        """Wait for every queued message to be processed"""
        while self._tails:
            await asyncio.wait(list(self._tails.values()))
