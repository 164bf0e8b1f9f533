"""Encryption keyed on the contents of the base ROM.

The password is the ROM file's raw bytes, so only someone holding an
identical ROM can decrypt a package. The container layout matches
``openssl enc -aes-256-cbc -md sha512 -pbkdf2 -iter 100000 -salt``::

    b"Salted__" | salt (8 bytes) | AES-256-CBC ciphertext (PKCS#7 padded)

with the AES key and IV taken from a single PBKDF2-HMAC-SHA512 derivation.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Tuple

from cryptography.hazmat.primitives import hashes, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from ..errors import PackagingError
from ..logging import get_logger

MAGIC = b"Salted__"
SALT_SIZE = 8
KEY_SIZE = 32
IV_SIZE = 16
ITERATIONS = 100_000


class DecryptionError(ValueError):
    """Raised when ciphertext is malformed or the password is wrong."""


def derive_key_iv(password: bytes, salt: bytes, *, iterations: int = ITERATIONS) -> Tuple[bytes, bytes]:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA512(),
        length=KEY_SIZE + IV_SIZE,
        salt=salt,
        iterations=iterations,
    )
    material = kdf.derive(password)
    return material[:KEY_SIZE], material[KEY_SIZE:]


def encrypt_bytes(
    plaintext: bytes,
    password: bytes,
    *,
    iterations: int = ITERATIONS,
    salt: bytes | None = None,
) -> bytes:
    """Encrypt ``plaintext``; a fresh random salt is used unless one is given."""
    if salt is None:
        salt = os.urandom(SALT_SIZE)
    if len(salt) != SALT_SIZE:
        raise ValueError(f"salt must be {SALT_SIZE} bytes")
    key, iv = derive_key_iv(password, salt, iterations=iterations)

    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    padded = padder.update(plaintext) + padder.finalize()
    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    return MAGIC + salt + encryptor.update(padded) + encryptor.finalize()


def decrypt_bytes(data: bytes, password: bytes, *, iterations: int = ITERATIONS) -> bytes:
    """Invert :func:`encrypt_bytes` using the salt embedded in ``data``."""
    header_size = len(MAGIC) + SALT_SIZE
    if len(data) < header_size or not data.startswith(MAGIC):
        raise DecryptionError("missing salted header")
    body = data[header_size:]
    if not body or len(body) % (algorithms.AES.block_size // 8):
        raise DecryptionError("ciphertext length is not a multiple of the block size")
    key, iv = derive_key_iv(password, data[len(MAGIC):header_size], iterations=iterations)

    decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
    padded = decryptor.update(body) + decryptor.finalize()
    unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
    try:
        return unpadder.update(padded) + unpadder.finalize()
    except ValueError as exc:
        raise DecryptionError("bad decrypt (wrong base ROM?)") from exc


class Aes256CbcEncryptor:
    """Encrypts a file using another file's full contents as the password."""

    def __init__(self, iterations: int = ITERATIONS) -> None:
        self._iterations = iterations
        self.logger = get_logger("crypto")

    def encrypt_file(self, source: Path, destination: Path, *, key_file: Path) -> None:
        try:
            password = key_file.read_bytes()
            plaintext = source.read_bytes()
            ciphertext = encrypt_bytes(plaintext, password, iterations=self._iterations)
            destination.write_bytes(ciphertext)
        except OSError as exc:
            # The message names paths only; key material never reaches it.
            raise PackagingError("encrypt", f"failed to encrypt tar to {destination}") from exc
        self.logger.debug("Encrypted %s to %s (%d bytes)", source.name, destination, len(ciphertext))


__all__ = [
    "Aes256CbcEncryptor",
    "DecryptionError",
    "ITERATIONS",
    "decrypt_bytes",
    "derive_key_iv",
    "encrypt_bytes",
]
