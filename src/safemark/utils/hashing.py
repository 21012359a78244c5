"""Hashing utilities for Safemark.

Provides content fingerprinting for render cache keys.

Example:
    >>> from safemark.utils.hashing import hash_str
    >>> hash_str("hello world")
    'b94d27b9934d3e08a52e52d7da7dabfac484efe37a5380ee9088f7ace2efcde9'
    >>> hash_str("hello world", truncate=16)
    'b94d27b9934d3e08'
"""

import hashlib


def hash_str(
    content: str,
    truncate: int | None = None,
    algorithm: str = "sha256",
) -> str:
    """Hash string content using specified algorithm.

    Args:
        content: String content to hash
        truncate: Truncate result to N characters (None = full hash)
        algorithm: Hash algorithm ('sha256', 'md5')

    Returns:
        Hex digest of hash, optionally truncated
    """
    hasher = hashlib.new(algorithm)
    # surrogatepass: lone surrogates are valid str input and must hash too
    hasher.update(content.encode("utf-8", "surrogatepass"))
    digest = hasher.hexdigest()
    return digest[:truncate] if truncate is not None else digest
