"""Utility modules for Safemark.

Provides:
- hashing: hash_str for content fingerprinting
- logger: get_logger for logging
"""

from safemark.utils.hashing import hash_str
from safemark.utils.logger import get_logger

__all__ = [
    "get_logger",
    "hash_str",
]
