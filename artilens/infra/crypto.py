from __future__ import annotations

import os
from dataclasses import dataclass

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC


@dataclass
class EncryptionResult:
    nonce: bytes
    ciphertext: bytes
    tag: bytes


PBKDF2_ITERATIONS = 390000
KEY_LENGTH = 32
SALT_LENGTH = 16
NONCE_LENGTH = 12
TAG_LENGTH = 16


def derive_key(password: str, salt: bytes) -> bytes:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_LENGTH,
        salt=salt,
        iterations=PBKDF2_ITERATIONS,
    )
    return kdf.derive(password.encode("utf-8"))


def encrypt_bytes(data: bytes, key: bytes) -> EncryptionResult:
    nonce = os.urandom(NONCE_LENGTH)
    encryptor = Cipher(algorithms.AES(key), modes.GCM(nonce)).encryptor()
    ciphertext = encryptor.update(data) + encryptor.finalize()
    return EncryptionResult(nonce=nonce, ciphertext=ciphertext, tag=encryptor.tag)


def decrypt_bytes(enc: EncryptionResult, key: bytes) -> bytes:
    decryptor = Cipher(algorithms.AES(key), modes.GCM(enc.nonce, enc.tag)).decryptor()
    return decryptor.update(enc.ciphertext) + decryptor.finalize()


def seal(data: bytes, password: str) -> bytes:
    """Encrypt ``data`` into a self-contained ``salt|nonce|tag|ciphertext`` blob."""
    salt = os.urandom(SALT_LENGTH)
    enc = encrypt_bytes(data, derive_key(password, salt))
    return salt + enc.nonce + enc.tag + enc.ciphertext


def unseal(blob: bytes, password: str) -> bytes:
    salt = blob[:SALT_LENGTH]
    nonce_end = SALT_LENGTH + NONCE_LENGTH
    tag_end = nonce_end + TAG_LENGTH
    enc = EncryptionResult(nonce=blob[SALT_LENGTH:nonce_end], tag=blob[nonce_end:tag_end], ciphertext=blob[tag_end:])
    return decrypt_bytes(enc, derive_key(password, salt))
