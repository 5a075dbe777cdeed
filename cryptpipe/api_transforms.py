"""Ready-made transforms over the cryptography primitives."""

from .main import cryptpipe


def identity_transform():
    return cryptpipe.identity_transform()


def aes_encryptor(key: bytes, iv: bytes, mode: str = "cbc"):
    return cryptpipe.aes_encryptor(key, iv, mode)


def aes_decryptor(key: bytes, iv: bytes, mode: str = "cbc"):
    return cryptpipe.aes_decryptor(key, iv, mode)


def hash_transform(algorithm: str = "sha256"):
    return cryptpipe.hash_transform(algorithm)


def hmac_transform(key: bytes, algorithm: str = "sha256"):
    return cryptpipe.hmac_transform(key, algorithm)


def derive_key(password: str | bytes, salt: bytes, iterations: int | None = None):
    return cryptpipe.derive_key(password, salt, iterations)


__all__ = [
    "aes_decryptor",
    "aes_encryptor",
    "derive_key",
    "hash_transform",
    "hmac_transform",
    "identity_transform",
]
