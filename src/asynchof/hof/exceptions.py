"""
Execution policy exceptions.

Defines exceptions raised by the policy decorators themselves. Errors
raised by the wrapped operations are never converted into these types.
"""

from typing import List, Optional


class PolicyError(Exception):
    """Base exception for execution policy errors."""

    def __init__(self, message: str, task: str):
        """
        Initialize policy error.

        Args:
            message: Error message
            task: Human-readable label of the decorated operation
        """
        self.message = message
        self.task = task
        super().__init__(self.message)


class RetryExhaustedError(PolicyError):
    """
    Raised when a resilient operation has used up all of its attempts.

    Carries the ordered ledger of every failure, one per attempt. The same
    failures are attached as an ``ExceptionGroup`` through ``__cause__``.
    """

    def __init__(self, task: str, max_attempts: int, errors: List[Exception]):
        """
        Initialize retry exhausted error.

        Args:
            task: Label of the operation that kept failing
            max_attempts: Configured number of retries after the first try
            errors: Failures in the order they happened
        """
        self.max_attempts = max_attempts
        self.errors = list(errors)
        message = f"Resilient {task} failed after {len(self.errors)} attempts"
        super().__init__(message, task)

    @property
    def last_exception(self) -> Optional[Exception]:
        """Most recent failure in the ledger."""
        return self.errors[-1] if self.errors else None


class TimeoutExceededError(PolicyError):
    """Raised when a timed operation loses the race against its timer."""

    def __init__(self, task: str, timeout: float):
        """
        Initialize timeout exceeded error.

        Args:
            task: Label of the operation that timed out
            timeout: Timeout that elapsed, in seconds
        """
        self.timeout = timeout
        super().__init__(f"{task} timed out", task)
