"""Utility functions for the backend."""

from __future__ import annotations

import hashlib


def compute_source_text_hash(text: str) -> str:
    """
    Compute a fingerprint of the source text submitted for generation.

    The hash is stored with every generation attempt and error log so repeated
    submissions of the same text can be spotted without keeping the text itself.
    It is used for deduplication and auditing only, not for security.

    Args:
        text: The raw source text, hashed exactly as submitted

    Returns:
        A 64-character hex string (SHA-256 hash)
    """
    return hashlib.sha256(text.encode("utf-8")).hexdigest()
