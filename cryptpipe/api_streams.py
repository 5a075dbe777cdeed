"""Stream/text/file pipeline convenience wrappers."""

from .main import cryptpipe


def _with_friendly_interrupt(fn, *args, **kwargs):
    try:
        return fn(*args, **kwargs)
    except KeyboardInterrupt:
        token = kwargs.get("token")
        if token is not None:
            token.cancel()
        raise KeyboardInterrupt("Exiting...") from None


def transform_bytes(data, transform, destination, *, token=None, dispose_destination: bool = False):
    return _with_friendly_interrupt(
        cryptpipe.transform_bytes,
        data,
        transform,
        destination,
        token=token,
        dispose_destination=dispose_destination,
    )


def transform_stream(
    source,
    transform,
    destination,
    *,
    token=None,
    dispose_source: bool = False,
    dispose_destination: bool = False,
    copy_buffer_size: int | None = None,
):
    return _with_friendly_interrupt(
        cryptpipe.transform_stream,
        source,
        transform,
        destination,
        token=token,
        dispose_source=dispose_source,
        dispose_destination=dispose_destination,
        copy_buffer_size=copy_buffer_size,
    )


def transform_text(
    text,
    transform,
    destination,
    *,
    token=None,
    dispose_destination: bool = False,
    chunk_size: int | None = None,
    encoding=None,
):
    return _with_friendly_interrupt(
        cryptpipe.transform_text,
        text,
        transform,
        destination,
        token=token,
        dispose_destination=dispose_destination,
        chunk_size=chunk_size,
        encoding=encoding,
    )


def iter_text_chunks(text, encoding=None, chunk_size: int | None = None, *, length: int | None = None):
    return cryptpipe.iter_text_chunks(text, encoding, chunk_size, length=length)


def submit(operation, *args, executor=None, token=None, **kwargs):
    return cryptpipe.submit(operation, *args, executor=executor, token=token, **kwargs)


def encrypt_file(path: str, password: str, output: str | None = None, *, token=None, chunk_size: int | None = None):
    return _with_friendly_interrupt(
        cryptpipe.encrypt_file,
        path,
        password,
        output,
        token=token,
        chunk_size=chunk_size,
    )


def decrypt_file(path: str, password: str, output: str | None = None, *, token=None, chunk_size: int | None = None):
    return _with_friendly_interrupt(
        cryptpipe.decrypt_file,
        path,
        password,
        output,
        token=token,
        chunk_size=chunk_size,
    )


def hash_file(path: str, algorithm: str = "sha256", *, token=None):
    return _with_friendly_interrupt(cryptpipe.hash_file, path, algorithm, token=token)


def hash_text(text, algorithm: str = "sha256", *, encoding: str | None = None, token=None):
    return _with_friendly_interrupt(cryptpipe.hash_text, text, algorithm, encoding=encoding, token=token)


__all__ = [
    "decrypt_file",
    "encrypt_file",
    "hash_file",
    "hash_text",
    "iter_text_chunks",
    "submit",
    "transform_bytes",
    "transform_stream",
    "transform_text",
]
