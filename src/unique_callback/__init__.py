"""unique-callback: wrap a generator function so it never repeats itself.

Each call of the wrapped function returns a result that was not returned
before for the same arguments and is not excluded, retrying the generator
within a time and retry budget.
"""

from unique_callback._version import __version__

# Core entry point
from unique_callback.unique import UniqueCallback, unique

# Configuration
from unique_callback.options import UniqueOptions

# Store keys
from unique_callback.keys import canonical_json, store_key

# Exceptions
from unique_callback.exceptions import (
    BudgetExceededError,
    RetryBudgetExceededError,
    TimeBudgetExceededError,
    UniqueCallbackError,
)

__all__ = [
    "__version__",
    "unique",
    "UniqueCallback",
    "UniqueOptions",
    "canonical_json",
    "store_key",
    "UniqueCallbackError",
    "BudgetExceededError",
    "TimeBudgetExceededError",
    "RetryBudgetExceededError",
]
