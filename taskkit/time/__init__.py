from .delay import delay, sleep
from .timeout import timeout, with_timeout

__all__ = (
    # Delay
    "delay",
    "sleep",
    # Timeout
    "timeout",
    "with_timeout",
)
