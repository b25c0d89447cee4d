# ================================================================================
# Wait / Retry Engine
# ================================================================================
#
# Repeatedly performs an action and polls a condition until the condition
# holds or a deadline elapses.
#
# Key Features:
#   - Fluent builder: Wait.with_retry().doing(action).until(predicate)
#   - Exponential backoff with optional jitter
#   - Sleeps clipped to the remaining time (bounded by deadline + one interval)
#   - Optional cap on the number of polls
#   - Only explicitly ignored exceptions are retried
#
# Usage:
#   Wait.with_retry(WaitConfig(timeout=10)).doing(navigate).until(lambda: page.is_loaded)
#   Wait.with_retry(WaitConfig(timeout=5, initial_interval=0.2)).until(lambda: element.exists)
#
# ================================================================================

from __future__ import annotations

import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple, Type, TypeVar

from loguru import logger

from .exceptions import RetryExhaustedError


T = TypeVar("T")


def _now() -> float:
    """Monotonic time source for deadline calculations."""
    return time.monotonic()


@dataclass(frozen=True)
class WaitConfig:
    """
    Configuration for retry operations.

    Attributes:
        timeout: Overall deadline in seconds
        initial_interval: Delay after the first failed poll, in seconds
        multiplier: Multiplier for exponential backoff (1.0 = fixed interval)
        max_interval: Maximum delay between polls
        jitter: Add +/- 25% random jitter to each delay
        max_attempts: Optional cap on the number of polls
    """
    timeout: float = 60.0
    initial_interval: float = 0.5
    multiplier: float = 1.5
    max_interval: float = 5.0
    jitter: bool = False
    max_attempts: Optional[int] = None

    def __post_init__(self) -> None:
        if self.timeout < 0:
            raise ValueError(f"timeout must be >= 0, got {self.timeout}")
        if self.initial_interval <= 0:
            raise ValueError(f"initial_interval must be > 0, got {self.initial_interval}")
        if self.multiplier < 1:
            raise ValueError(f"multiplier must be >= 1, got {self.multiplier}")
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")


def calculate_next_interval(current_interval: float, config: WaitConfig) -> float:
    """
    Calculate the next wait interval with exponential backoff and jitter.

    Args:
        current_interval: Current interval in seconds
        config: Wait configuration

    Returns:
        Next interval in seconds
    """
    next_interval = min(current_interval * config.multiplier, config.max_interval)

    if config.jitter:
        jitter_factor = 0.75 + (random.random() * 0.5)
        next_interval = min(next_interval * jitter_factor, config.max_interval)

    return next_interval


class RetryState(Enum):
    POLLING = "polling"
    DONE = "done"


class RetryOperation:
    """
    A single retry run: optional action, mandatory predicate.

    Created through Wait.with_retry(); `until()` drives the state machine
    from POLLING to DONE and either returns the predicate's truthy value or
    raises RetryExhaustedError.
    """

    def __init__(
        self,
        config: Optional[WaitConfig] = None,
        ignored_exceptions: Tuple[Type[BaseException], ...] = (),
        description: str = "condition",
    ):
        self.config = config or WaitConfig()
        self.ignored_exceptions = tuple(ignored_exceptions)
        self.description = description
        self.state = RetryState.POLLING
        self.attempts = 0
        self.succeeded: Optional[bool] = None
        self._action: Optional[Callable[[], object]] = None

    def doing(self, action: Callable[[], object]) -> "RetryOperation":
        """Set the action invoked before every poll of the predicate."""
        self._action = action
        return self

    def describe(self, description: str) -> "RetryOperation":
        self.description = description
        return self

    def until(self, predicate: Callable[[], T]) -> T:
        """
        Poll until predicate returns a truthy value.

        Returns:
            The predicate's truthy result

        Raises:
            RetryExhaustedError: Deadline or attempt cap reached first
            RuntimeError: The operation already ran
        """
        if self.state is RetryState.DONE:
            raise RuntimeError("RetryOperation already completed; create a new one")

        config = self.config
        start_time = _now()
        current_interval = config.initial_interval
        last_exception: Optional[BaseException] = None

        logger.debug(
            f"Starting retry: {self.description} "
            f"(timeout={config.timeout}s, interval={config.initial_interval}s)"
        )

        while True:
            self.attempts += 1

            try:
                if self._action is not None:
                    self._action()
                result = predicate()
                if result:
                    self._finish(True)
                    logger.debug(
                        f"Retry successful after {self.attempts} attempts "
                        f"({_now() - start_time:.1f}s): {self.description}"
                    )
                    return result
            except self.ignored_exceptions as e:
                last_exception = e
                logger.warning(f"Attempt {self.attempts} failed with error: {e}")

            elapsed = _now() - start_time
            time_left = config.timeout - elapsed
            if time_left <= 0:
                break
            if config.max_attempts is not None and self.attempts >= config.max_attempts:
                break

            time.sleep(min(current_interval, time_left))
            current_interval = calculate_next_interval(current_interval, config)

        self._finish(False)
        elapsed = _now() - start_time
        error_msg = (
            f"Timeout after {elapsed:.1f}s waiting for: {self.description}"
        )
        logger.error(error_msg)
        raise RetryExhaustedError(
            error_msg,
            description=self.description,
            timeout=config.timeout,
            attempt_count=self.attempts,
            elapsed_time=elapsed,
            last_exception=last_exception,
        ) from last_exception

    def _finish(self, succeeded: bool) -> None:
        self.state = RetryState.DONE
        self.succeeded = succeeded


class Wait:
    """Entry point for retry operations."""

    @staticmethod
    def with_retry(
        config: Optional[WaitConfig] = None,
        ignored_exceptions: Tuple[Type[BaseException], ...] = (),
        description: str = "condition",
    ) -> RetryOperation:
        return RetryOperation(config, ignored_exceptions, description)


__all__ = [
    "RetryOperation",
    "RetryState",
    "Wait",
    "WaitConfig",
    "calculate_next_interval",
]
