"""
Task completion polling

Write operations return a task id; the write becomes visible to reads once
the task is published. Polling has no attempt limit: callers that need a
deadline wrap ``wait_task`` themselves (for example with
``asyncio.wait_for``). This is separate from the transport retry bound of the
dispatcher.
"""
import asyncio
import logging
import time
from typing import Union

from . import paths
from .constants import DEFAULT_WAIT_INTERVAL, TASK_NOT_PUBLISHED, TASK_PUBLISHED
from .dispatcher import AsyncRequestDispatcher, RequestDispatcher
from .types import Mode, Request, Result, Success, TaskReference

logger = logging.getLogger(__name__)


def _task_status(result: Result):
    if isinstance(result, Success) and isinstance(result.body, dict):
        return result.body.get("status")
    return None


class TaskWaiter:
    """Blocking task waiter"""

    def __init__(self, dispatcher: RequestDispatcher):
        self.dispatcher = dispatcher

    def wait_task(
        self,
        index_name: str,
        task_id: Union[int, str],
        interval: float = DEFAULT_WAIT_INTERVAL
    ) -> Result:
        """
        Poll a task until it is published

        Args:
            index_name: Index the task belongs to
            task_id: Task id from a write response
            interval: Seconds to sleep between polls

        Returns:
            The published status as Success, or the first result that is
            neither published nor notPublished
        """
        request = Request(method="GET", path=paths.task(index_name, task_id))
        polls = 0

        while True:
            result = self.dispatcher.send(Mode.WRITE, request)
            polls += 1
            status = _task_status(result)

            if status == TASK_PUBLISHED:
                logger.debug(f"Task {task_id} on {index_name} published after {polls} polls")
                return result

            if status != TASK_NOT_PUBLISHED:
                return result

            time.sleep(interval)

    def wait(self, result: Result, interval: float = DEFAULT_WAIT_INTERVAL) -> Result:
        """
        Wait on the task of a write response

        Responses without indexName and taskID, and error results, are
        returned untouched. Otherwise the original response is returned once
        its task is published.
        """
        task = TaskReference.from_result(result)
        if task is None:
            return result

        outcome = self.wait_task(task.index_name, task.task_id, interval)
        if _task_status(outcome) == TASK_PUBLISHED:
            return result
        return outcome


class AsyncTaskWaiter:
    """Async task waiter"""

    def __init__(self, dispatcher: AsyncRequestDispatcher):
        self.dispatcher = dispatcher

    async def wait_task(
        self,
        index_name: str,
        task_id: Union[int, str],
        interval: float = DEFAULT_WAIT_INTERVAL
    ) -> Result:
        """Poll a task until it is published, see ``TaskWaiter.wait_task``"""
        request = Request(method="GET", path=paths.task(index_name, task_id))
        polls = 0

        while True:
            result = await self.dispatcher.send(Mode.WRITE, request)
            polls += 1
            status = _task_status(result)

            if status == TASK_PUBLISHED:
                logger.debug(f"Task {task_id} on {index_name} published after {polls} polls")
                return result

            if status != TASK_NOT_PUBLISHED:
                return result

            await asyncio.sleep(interval)

    async def wait(self, result: Result, interval: float = DEFAULT_WAIT_INTERVAL) -> Result:
        """Wait on the task of a write response, see ``TaskWaiter.wait``"""
        task = TaskReference.from_result(result)
        if task is None:
            return result

        outcome = await self.wait_task(task.index_name, task.task_id, interval)
        if _task_status(outcome) == TASK_PUBLISHED:
            return result
        return outcome
