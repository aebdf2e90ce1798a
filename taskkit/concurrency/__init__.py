from .batch import batch, chunked, BatchPolicy
from .pool import pool, pool_all, run_pooled
from .sequence import sequential
from .settle import settle, settle_all

__all__ = (
    # Policies
    "BatchPolicy",
    # Batch
    "batch",
    "chunked",
    # Pool
    "pool",
    "pool_all",
    "run_pooled",
    # Sequential
    "sequential",
    # Settle
    "settle",
    "settle_all",
)
