# Copyright (c) HotelLux contributors.
# Licensed under the MIT license.

"""
Operator port: how the dashboard asks for confirmation and reports outcomes.

Confirmation is an awaitable that resolves to a yes/no decision, so controllers
can be driven without a real UI blocking the process.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Callable, List, Optional, Protocol, TextIO, Tuple, runtime_checkable

logger = logging.getLogger(__name__)

_YES = {"y", "yes"}


@runtime_checkable
class Operator(Protocol):
    """The human administrator, as seen by controllers."""

    async def confirm(self, message: str) -> bool:
        ...

    def notify(self, message: str) -> None:
        ...

    def report_error(self, message: str, error: Optional[BaseException] = None) -> None:
        ...


class ConsoleOperator:
    """
    Terminal operator: prompts on stdin, writes notices to stdout and errors to stderr.

    :param input_func: Prompt function, ``input`` by default. Runs in a worker
        thread so the event loop keeps serving responses while the prompt is open.
    :param out: Stream for notices.
    :param err: Stream for error notices.
    """

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
    ) -> None:
        self._input = input_func
        self._out = out
        self._err = err

    async def confirm(self, message: str) -> bool:
        try:
            answer = await asyncio.to_thread(self._input, f"{message} [y/N] ")
        except EOFError:
            return False
        return answer.strip().lower() in _YES

    def notify(self, message: str) -> None:
        print(message, file=self._out or sys.stdout)

    def report_error(self, message: str, error: Optional[BaseException] = None) -> None:
        text = f"{message}: {error}" if error is not None else message
        print(text, file=self._err or sys.stderr)


class LoggingOperator:
    """
    Headless operator for scripts: answers every confirmation with ``auto_confirm``
    and sends notices to the log. Notices are also kept on :attr:`notices` and
    :attr:`errors` for inspection.
    """

    def __init__(self, auto_confirm: bool = False) -> None:
        self.auto_confirm = auto_confirm
        self.notices: List[str] = []
        self.errors: List[Tuple[str, Optional[BaseException]]] = []

    async def confirm(self, message: str) -> bool:
        logger.info("%s -> %s", message, "yes" if self.auto_confirm else "no")
        return self.auto_confirm

    def notify(self, message: str) -> None:
        self.notices.append(message)
        logger.info(message)

    def report_error(self, message: str, error: Optional[BaseException] = None) -> None:
        self.errors.append((message, error))
        logger.error("%s: %s", message, error)


__all__ = ["Operator", "ConsoleOperator", "LoggingOperator"]
