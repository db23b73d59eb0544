"""Repeating-key XOR transform and password hashing."""
import hashlib


def xor_transform(data: bytes, key: str) -> bytes:
    """XOR every byte of data with the UTF-8 bytes of key, cycling the key.

    The transform is its own inverse. Empty data or an empty key returns the
    data unchanged. This only hides content from casual inspection: there is
    no integrity check and a known plaintext reveals the key.
    """
    if not data or not key:
        return data
    key_bytes = key.encode("utf-8")
    size = len(key_bytes)
    return bytes(b ^ key_bytes[i % size] for i, b in enumerate(data))


def hash_password(plaintext: str) -> str:
    """Hex SHA-256 digest used for credential storage."""
    return hashlib.sha256(plaintext.encode("utf-8")).hexdigest()
