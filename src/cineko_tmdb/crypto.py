"""AES-GCM sealing for secure store values.

Each value is sealed with a fresh 12-byte nonce and the entry's key as
associated data, so a ciphertext copied under another key fails to open.
The stored form is::

    base64( nonce ‖ ciphertext ‖ tag )
"""

from __future__ import annotations

import base64
import os
from pathlib import Path

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .exceptions import TmdbError, TmdbErrorCodes

_NONCE_SIZE = 12
_KEY_SIZE = 32


def load_or_create_key(path: Path) -> bytes:
    """Read the 256-bit key at ``path``, generating it (mode 0600) if absent."""
    try:
        if path.exists():
            key = path.read_bytes()
            if len(key) != _KEY_SIZE:
                raise TmdbError(
                    code=TmdbErrorCodes.STORE_ERROR,
                    message=f"Invalid key length in {path}: {len(key)} bytes",
                )
            return key
        path.parent.mkdir(parents=True, exist_ok=True)
        key = AESGCM.generate_key(bit_length=256)
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        with os.fdopen(fd, "wb") as f:
            f.write(key)
        return key
    except OSError as e:
        raise TmdbError(
            code=TmdbErrorCodes.STORE_ERROR,
            message=f"Failed to load key file: {path}",
            cause=e,
        ) from e


def seal(key: bytes, name: str, plaintext: str) -> str:
    nonce = os.urandom(_NONCE_SIZE)
    ct = AESGCM(key).encrypt(nonce, plaintext.encode("utf-8"), name.encode("utf-8"))
    return base64.b64encode(nonce + ct).decode("ascii")


def unseal(key: bytes, name: str, sealed: str) -> str:
    """Open a value produced by :func:`seal`.

    Raises:
        TmdbError: STORE_ERROR if the key is wrong or the data was tampered with
    """
    try:
        raw = base64.b64decode(sealed, validate=True)
        nonce, ct = raw[:_NONCE_SIZE], raw[_NONCE_SIZE:]
        return AESGCM(key).decrypt(nonce, ct, name.encode("utf-8")).decode("utf-8")
    except (InvalidTag, ValueError) as e:
        raise TmdbError(
            code=TmdbErrorCodes.STORE_ERROR,
            message=f"Failed to decrypt secure value: {name}",
            cause=e,
        ) from e
