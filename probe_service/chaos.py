"""Deliberate process termination for recovery testing."""

import logging
import os
import threading
from typing import Callable

logger = logging.getLogger("chaos")


def hard_exit(code: int) -> None:
    """Flush logging and terminate the whole process immediately."""
    logging.shutdown()
    os._exit(code)


class ChaosController:
    """Schedules process exit shortly after the response has been sent.

    Args:
        delay_seconds: Grace period that lets the HTTP response flush.
        exit_func: Called with the exit code; ``hard_exit`` by default.
    """

    EXIT_CODE = 1

    def __init__(self, delay_seconds: float = 0.1, exit_func: Callable[[int], None] = hard_exit):
        self.delay_seconds = delay_seconds
        self.exit_func = exit_func

    def schedule_kill(self) -> threading.Timer:
        logger.warning(
            "CHAOS: Killing process in %.2fs via API request", self.delay_seconds
        )
        timer = threading.Timer(self.delay_seconds, self.exit_func, args=(self.EXIT_CODE,))
        timer.daemon = True
        timer.start()
        return timer
