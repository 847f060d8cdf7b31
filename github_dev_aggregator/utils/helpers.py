"""General utility functions and helper classes."""

import asyncio
from typing import Any, Awaitable


async def gather_or_raise(*awaitables: Awaitable[Any]) -> list[Any]:
    """Run awaitables concurrently and re-raise the first failure once all have finished.

    Unlike a plain ``asyncio.gather``, no sibling is left running in the
    background after one of them fails.
    """
    results = await asyncio.gather(*awaitables, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)
