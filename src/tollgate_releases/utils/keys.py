"""Publisher key parsing.

Release publishers are identified by their Nostr public key. Users paste
keys in either bech32 (``npub1...``) or hex form; everything downstream
(subscription filters, catalogue comparisons) uses lowercase hex.

Examples:
    ```python
    parse_pubkey("npub1...")   # '5075e61f...'
    parse_pubkey("5075E61F...")  # '5075e61f...'
    ```
"""

from __future__ import annotations

from nostr_sdk import PublicKey


def parse_pubkey(value: str) -> str:
    """Return the lowercase hex form of a public key given as hex or npub.

    Args:
        value: Public key in hex or bech32 ``npub`` encoding. Surrounding
            whitespace is ignored.

    Returns:
        64-character lowercase hex public key.

    Raises:
        ValueError: If *value* is not a valid public key.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError("public key must be a non-empty string")

    try:
        return PublicKey.parse(value.strip()).to_hex()
    except Exception as e:  # nostr_sdk raises its own FFI error types
        raise ValueError(f"invalid public key: {value!r}") from e
