from flashforge.hash_utils import compute_source_text_hash


def test_hash_is_sha256_hex() -> None:
    digest = compute_source_text_hash("hello")

    assert digest == "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
    assert len(digest) == 64


def test_hash_is_sensitive_to_whitespace() -> None:
    """Text is hashed exactly as submitted."""
    assert compute_source_text_hash("text") != compute_source_text_hash("text ")
