"""Decryption of values encrypted by passphrase in the version 2 (AES) format."""

from __future__ import annotations

import hashlib
import struct

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

MAGIC = 0xBAADF00D
VERSION_2 = 0x02

_HEADER = struct.Struct("<IHH")
_state = {"passphrase": ""}


class DecryptionError(ValueError):
    """Raised when a ciphertext cannot be decrypted."""


def set_passphrase(passphrase: str) -> None:
    """Set the passphrase used by :func:`decrypt_by_passphrase`."""
    _state["passphrase"] = passphrase


def passphrase_to_key(passphrase: str) -> bytes:
    """Derive the AES-256 key: SHA-256 of the UTF-16LE encoded passphrase."""
    cleaned = "".join("\ufffd" if 0xD800 <= ord(c) <= 0xDFFF else c for c in passphrase)
    return hashlib.sha256(cleaned.encode("utf-16-le")).digest()


def decrypt_by_passphrase(ciphertext: bytes) -> str:
    """Decrypt a version 2 ciphertext with the current passphrase."""
    if not ciphertext:
        raise DecryptionError("ciphertext is empty")
    if ciphertext[0] != VERSION_2:
        raise DecryptionError("required sql v2")
    body = bytes(ciphertext[20:])
    if not body or len(body) % 16:
        raise DecryptionError("ciphertext is not a whole number of blocks")

    decryptor = Cipher(
        algorithms.AES(passphrase_to_key(_state["passphrase"])),
        modes.CBC(bytes(ciphertext[4:20])),
    ).decryptor()
    plain = decryptor.update(body) + decryptor.finalize()

    magic, authenticator, length = _HEADER.unpack_from(plain)
    if magic != MAGIC:
        raise DecryptionError("magic bytes failed")
    if authenticator != 0:
        raise DecryptionError("authenticator unsupported")
    if _HEADER.size + length > len(plain):
        raise DecryptionError("plaintext length exceeds decrypted data")
    return plain[_HEADER.size : _HEADER.size + length].decode("utf-8", errors="replace")