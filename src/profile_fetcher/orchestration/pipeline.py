"""
Step Chain Module

An explicit ordered pipeline of result-or-error steps. Each step receives
the previous step's value and returns an awaitable for the next one; the
first failure skips the remaining steps and goes to a single error handler.
A final handler always runs.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, List, Optional

import httpx

from ..errors import ProfileFetcherError


logger = logging.getLogger(__name__)

Step = Callable[[Any], Awaitable[Any]]

# Failures a step may raise that the chain treats as a rejected step
STEP_ERRORS = (ProfileFetcherError, httpx.HTTPError)


@dataclass
class Outcome:
    """
    Result of one orchestration run: either a value or the error that stopped it.

    completed_steps is the number of steps that succeeded before the value
    or error was produced; for a fan-out it is summed over all pipelines.
    """
    value: Any = None
    error: Optional[Exception] = None
    completed_steps: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None


class Chain:
    """
    Sequential composition of async steps.

    Example:
        outcome = await (
            Chain(lambda _: client.fetch_user(1))
            .then(lambda user: client.fetch_user_posts(user.id))
            .catch(report)
            .finally_(done)
            .run()
        )
    """

    def __init__(self, first: Step):
        self._steps: List[Step] = [first]
        self._on_error: Optional[Callable[[Exception], None]] = None
        self._on_finally: Optional[Callable[[], None]] = None

    def then(self, step: Step) -> "Chain":
        """Append a step that runs only after the previous one succeeds."""
        self._steps.append(step)
        return self

    def catch(self, handler: Callable[[Exception], None]) -> "Chain":
        """Set the handler for a failure in any step."""
        self._on_error = handler
        return self

    def finally_(self, handler: Callable[[], None]) -> "Chain":
        """Set the handler that runs regardless of outcome."""
        self._on_finally = handler
        return self

    @property
    def steps(self) -> List[Step]:
        return list(self._steps)

    async def run(self, initial: Any = None) -> Outcome:
        """
        Run the steps in order.

        Args:
            initial: Value passed to the first step.

        Returns:
            Outcome holding the last step's value, or the first error.
        """
        outcome = Outcome()
        value = initial

        try:
            for step in self._steps:
                try:
                    value = await step(value)
                except STEP_ERRORS as e:
                    outcome.error = e
                    logger.debug(
                        f"Chain stopped after {outcome.completed_steps} step(s): {e}"
                    )
                    break
                outcome.completed_steps += 1
            else:
                outcome.value = value

            if outcome.error is not None and self._on_error is not None:
                self._on_error(outcome.error)
        finally:
            if self._on_finally is not None:
                self._on_finally()

        return outcome


async def gather_fail_fast(awaitables: Iterable[Awaitable[Any]]) -> List[Any]:
    """
    Run awaitables concurrently and return their results in input order.

    The first failure is raised immediately; tasks that are still running
    are cancelled and no partial results are returned.
    """
    tasks = [asyncio.ensure_future(aw) for aw in awaitables]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        pending = [task for task in tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            logger.debug(f"Cancelled {len(pending)} unfinished task(s)")
            await asyncio.gather(*pending, return_exceptions=True)
        for task in tasks:
            if task.done() and not task.cancelled():
                # Mark sibling failures as retrieved
                task.exception()
        raise
