from .debounce import debounce, Debouncer
from .throttle import throttle, Throttler

__all__ = (
    # Debounce
    "Debouncer",
    "debounce",
    # Throttle
    "Throttler",
    "throttle",
)
