"""
Courtside Core Retry - Public API
===================================
"""

from core.retry.helper import with_retry
from core.retry.policy import RetryPolicy

__all__ = ["RetryPolicy", "with_retry"]
