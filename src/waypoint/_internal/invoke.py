"""Invoke helpers — call sync or async handlers uniformly.

Handlers can be ``def`` or ``async def``. Any code that calls a
user-provided handler asynchronously must handle both cases. This module
provides a single helper so the sync/async check lives in exactly one place.

Usage::

    from waypoint._internal.invoke import invoke

    result = await invoke(handler, params, context)
"""

import inspect
from typing import Any

import anyio
from anyio.lowlevel import checkpoint


async def invoke(handler: Any, *args: Any, timeout: float | None = None) -> Any:
    """Call a handler and await the result if it's awaitable.

    With *timeout*, the whole call (including the awaited result) must
    finish within that many seconds or ``TimeoutError`` is raised. A
    synchronous handler cannot be interrupted; its result is discarded
    if it overruns.
    """
    with anyio.fail_after(timeout):
        result = handler(*args)
        if inspect.isawaitable(result):
            result = await result
        else:
            await checkpoint()
    return result
