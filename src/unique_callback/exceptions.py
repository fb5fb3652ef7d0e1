"""unique-callback exception hierarchy.

All package-specific exceptions inherit from UniqueCallbackError.
"""


class UniqueCallbackError(Exception):
    """Base exception for all unique-callback errors."""


class BudgetExceededError(UniqueCallbackError):
    """Raised when a call runs out of time or retries before finding a new result."""


class TimeBudgetExceededError(BudgetExceededError):
    """Raised when the wrapper's time budget is spent.

    The budget is measured from wrapper construction, so it is shared by
    every call made through the same wrapped function.
    """

    def __init__(self, max_time: int, retries: int) -> None:
        self.max_time = max_time
        self.retries = retries
        super().__init__(
            f"unique-callback: maxTime of {max_time}ms exceeded "
            f"after {retries} retries"
        )


class RetryBudgetExceededError(BudgetExceededError):
    """Raised when a single call exhausts its retry budget."""

    def __init__(self, max_retries: int) -> None:
        self.max_retries = max_retries
        super().__init__(f"unique-callback: maxRetries of {max_retries} exceeded")
