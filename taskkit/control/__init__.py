from .poll import poll_until, PollPolicy
from .retry import retry, retrying, RetryPolicy

__all__ = (
    # Policies
    "PollPolicy",
    "RetryPolicy",
    # Poll
    "poll_until",
    # Retry
    "retry",
    "retrying",
)
