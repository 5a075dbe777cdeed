# CRYPTPIPE STREAM TRANSFORM ENGINE ->

import os as _os_module


class cryptpipe:
    import codecs
    import concurrent.futures
    import io
    import os
    import sys
    import threading
    import pathlib
    import typing
    from cryptography.hazmat.primitives import hashes, hmac, padding
    from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
    from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

    @staticmethod
    def _env_int(name: str) -> "cryptpipe.typing.Optional[int]":
        value = _os_module.getenv(name)
        if not value:
            return None
        try:
            parsed = int(value)
        except (TypeError, ValueError):
            return None
        if parsed <= 0:
            return None
        return parsed

    ENGINE_VERSION = "1.2.0"
    DEFAULT_BUFFER_SIZE = _env_int("CRYPTPIPE_BUFFER_SIZE") or 16 * 1024
    DEFAULT_CHUNK_SIZE = _env_int("CRYPTPIPE_CHUNK_SIZE") or DEFAULT_BUFFER_SIZE
    DEFAULT_ENCODING = "utf-8"
    CONTAINER_MAGIC = b'CPX1'
    CONTAINER_SUFFIX = ".cpx"
    SALT_LEN = 16
    IV_LEN = 16
    KEY_LEN = 32
    KDF_ITERATIONS = _env_int("CRYPTPIPE_KDF_ITERS") or 200_000
    AES_BLOCK_BITS = 128
    UNBOUNDED_ERROR_HANDLERS = frozenset({"namereplace"})

    class OperationCancelled(concurrent.futures.CancelledError):
        """Raised at a suspension point once the cancellation token has fired."""

    class CancellationToken:
        """Thread-safe cancellation flag polled at every I/O boundary."""

        def __init__(self):
            self._event = cryptpipe.threading.Event()
            self._lock = cryptpipe.threading.Lock()
            self._timer = None

        @property
        def cancelled(self) -> bool:
            return self._event.is_set()

        def cancel(self) -> None:
            with self._lock:
                timer, self._timer = self._timer, None
            if timer is not None:
                timer.cancel()
            self._event.set()

        def cancel_after(self, seconds: float) -> None:
            if seconds < 0:
                raise ValueError("cancel_after expects a non-negative delay")
            timer = cryptpipe.threading.Timer(seconds, self.cancel)
            timer.daemon = True
            with self._lock:
                previous, self._timer = self._timer, timer
            if previous is not None:
                previous.cancel()
            timer.start()

        def wait(self, timeout: "cryptpipe.typing.Optional[float]" = None) -> bool:
            return self._event.wait(timeout)

        def raise_if_cancelled(self) -> None:
            if self._event.is_set():
                raise cryptpipe.OperationCancelled("Operation was cancelled")

    class OwnedStream(io.IOBase):
        """Forwarding adapter whose close() reaches the handle only when it owns it.

        Closing never flushes: releasing an unowned handle leaves it untouched.
        """

        _closed = False

        def __init__(self, handle, owns_handle: bool = False):
            if handle is None:
                raise TypeError("OwnedStream requires a handle")
            self._handle = handle
            self._owns_handle = bool(owns_handle)
            self._closed = False
            super().__init__()

        @property
        def closed(self) -> bool:
            return self._closed

        @property
        def handle(self):
            return self._handle

        @property
        def owns_handle(self) -> bool:
            return self._owns_handle

        def _ensure_open(self) -> None:
            if self.closed:
                raise ValueError("I/O operation on closed stream")

        def readable(self) -> bool:
            return bool(getattr(self._handle, "readable", lambda: False)())

        def writable(self) -> bool:
            return bool(getattr(self._handle, "writable", lambda: False)())

        def seekable(self) -> bool:
            return False

        def read(self, size: int = -1) -> bytes:
            self._ensure_open()
            return self._handle.read(size)

        def readinto(self, buffer) -> int:
            self._ensure_open()
            readinto = getattr(self._handle, "readinto", None)
            if readinto is not None:
                return readinto(buffer)
            data = self._handle.read(len(buffer))
            buffer[:len(data)] = data
            return len(data)

        def write(self, data) -> int:
            self._ensure_open()
            return self._handle.write(data)

        def flush(self) -> None:
            self._ensure_open()
            self._handle.flush()

        def close(self) -> None:
            if self._closed:
                return
            self._closed = True
            if self._owns_handle:
                self._handle.close()

    class TransformWriter(io.IOBase):
        """Write-side filter pushing bytes through an update()/finalize() transform into a sink."""

        _closed = False

        def __init__(self, transform, sink):
            if not cryptpipe._is_transform(transform):
                raise TypeError("transform must expose update() and finalize()")
            self._transform = transform
            self._sink = sink
            self._final_block_flushed = False
            self._closed = False
            super().__init__()

        @property
        def closed(self) -> bool:
            return self._closed

        @property
        def has_flushed_final_block(self) -> bool:
            return self._final_block_flushed

        def writable(self) -> bool:
            return True

        def write(self, data) -> int:
            if self.closed:
                raise ValueError("I/O operation on closed transform writer")
            if self._final_block_flushed:
                raise ValueError("Cannot write after the final block was flushed")
            out = self._transform.update(data)
            if out:
                self._sink.write(out)
            return len(data)

        def flush_final_block(self) -> None:
            if self._final_block_flushed:
                return
            self._final_block_flushed = True
            tail = self._transform.finalize()
            if tail:
                self._sink.write(tail)

        def flush(self) -> None:
            if self.closed:
                raise ValueError("I/O operation on closed transform writer")
            self._sink.flush()

        def close(self) -> None:
            # release cascades to the sink without flushing it
            if self._closed:
                return
            self._closed = True
            self._sink.close()

    class TextEncoding:
        """Codec facade exposing the preamble, preamble-free bytes and a worst-case byte bound."""

        _PROBE_CHARS = (
            "\x00", "a", "+", "\x7f", "\x80", "\xff", "\u0100",
            "\u07ff", "\u0800", "\uffff", "\U00010000", "\U0010ffff",
        )

        def __init__(self, name: "cryptpipe.typing.Optional[str]" = None, errors: str = "strict"):
            # the byte bound below holds only for handlers with a fixed replacement width
            if errors in cryptpipe.UNBOUNDED_ERROR_HANDLERS:
                raise ValueError(f"Error handler {errors!r} has no worst-case width and is not supported")
            cryptpipe.codecs.lookup_error(errors)
            self._info = cryptpipe.codecs.lookup(name or cryptpipe.DEFAULT_ENCODING)
            self.name = self._info.name
            self.errors = errors
            self.preamble = self._info.incrementalencoder(errors).encode("")
            widths = []
            for ch in self._PROBE_CHARS:
                try:
                    widths.append(len(self.get_bytes(ch)))
                except UnicodeEncodeError:
                    continue
            self._max_char_width = max(widths, default=1) or 1

        def new_encoder(self):
            encoder = self._info.incrementalencoder(self.errors)
            # prime the encoder so later calls never repeat the preamble
            encoder.encode("")
            return encoder

        def get_bytes(self, chars: str) -> bytes:
            return self.new_encoder().encode(chars, True)

        def max_byte_count(self, char_count: int) -> int:
            if char_count < 0:
                raise ValueError("char_count must be non-negative")
            return (char_count + 1) * self._max_char_width

        def __repr__(self) -> str:
            return f"TextEncoding({self.name!r}, errors={self.errors!r})"

    class IdentityTransform:
        def update(self, data) -> bytes:
            return bytes(data)

        def finalize(self) -> bytes:
            return b""

    class _PaddedCipherTransform:
        """Pairs a cipher context with a PKCS7 padder (encrypt) or unpadder (decrypt)."""

        def __init__(self, cipher_ctx, padding_ctx, decrypt: bool):
            self._cipher = cipher_ctx
            self._padding = padding_ctx
            self._decrypt = decrypt

        def update(self, data) -> bytes:
            if self._decrypt:
                return self._padding.update(self._cipher.update(data))
            return self._cipher.update(self._padding.update(data))

        def finalize(self) -> bytes:
            if self._decrypt:
                return self._padding.update(self._cipher.finalize()) + self._padding.finalize()
            return self._cipher.update(self._padding.finalize()) + self._cipher.finalize()

    class PipelineJob:
        """Handle for a pipeline running on an executor thread."""

        def __init__(self, future: "cryptpipe.concurrent.futures.Future", token: "cryptpipe.CancellationToken"):
            self.future = future
            self.token = token

        def cancel(self) -> bool:
            self.token.cancel()
            return self.future.cancel()

        def done(self) -> bool:
            return self.future.done()

        def result(self, timeout: "cryptpipe.typing.Optional[float]" = None):
            return self.future.result(timeout)

        def exception(self, timeout: "cryptpipe.typing.Optional[float]" = None):
            return self.future.exception(timeout)

    _HASH_ALGORITHMS = {
        "md5": hashes.MD5,
        "sha1": hashes.SHA1,
        "sha224": hashes.SHA224,
        "sha256": hashes.SHA256,
        "sha384": hashes.SHA384,
        "sha512": hashes.SHA512,
        "sha3-256": hashes.SHA3_256,
        "sha3-512": hashes.SHA3_512,
        "blake2b": lambda: cryptpipe.hashes.BLAKE2b(64),
        "blake2s": lambda: cryptpipe.hashes.BLAKE2s(32),
    }

    @staticmethod
    def _warn(message: str) -> None:
        print(f"⚠️  {message}", file=cryptpipe.sys.stderr)

    @staticmethod
    def _is_transform(transform) -> bool:
        return callable(getattr(transform, "update", None)) and callable(getattr(transform, "finalize", None))

    @staticmethod
    def _checkpoint(token: "cryptpipe.typing.Optional[cryptpipe.CancellationToken]") -> None:
        if token is not None:
            token.raise_if_cancelled()

    @staticmethod
    def _resolve_size(value: "cryptpipe.typing.Optional[int]", default: int, label: str) -> int:
        if value is None:
            return default
        size = int(value)
        if size < 1:
            raise ValueError(f"{label} must be a positive integer")
        return size

    @staticmethod
    def _coerce_encoding(
        encoding: "cryptpipe.typing.Union[None, str, cryptpipe.TextEncoding]"
    ) -> "cryptpipe.TextEncoding":
        if isinstance(encoding, cryptpipe.TextEncoding):
            return encoding
        return cryptpipe.TextEncoding(encoding)

    @staticmethod
    def _attach_release_error(primary: BaseException, failure: BaseException) -> None:
        errors = getattr(primary, "release_errors", None)
        if errors is None:
            errors = []
            try:
                primary.release_errors = errors
            except AttributeError:
                pass
        errors.append(failure)
        note = f"release failed: {type(failure).__name__}: {failure}"
        add_note = getattr(primary, "add_note", None)
        if add_note is not None:
            add_note(note)
        cryptpipe._warn(f"{note} (after {type(primary).__name__})")

    @staticmethod
    def _release_all(closers, error: "cryptpipe.typing.Optional[BaseException]") -> None:
        # first failure wins; later release failures are attached to it
        failures = []
        for close in closers:
            try:
                close()
            except Exception as exc:
                failures.append(exc)
        if not failures:
            return
        primary = error if error is not None else failures.pop(0)
        for failure in failures:
            cryptpipe._attach_release_error(primary, failure)
        if error is None:
            raise primary

    @staticmethod
    def _complete(writer, wrapper, destination, token) -> None:
        cryptpipe._checkpoint(token)
        writer.flush_final_block()
        cryptpipe._checkpoint(token)
        writer.flush()
        cryptpipe._checkpoint(token)
        wrapper.flush()
        # the wrapper already forwarded this flush; repeating it is harmless
        cryptpipe._checkpoint(token)
        destination.flush()

    @staticmethod
    def _run(
        destination,
        transform,
        pump: "cryptpipe.typing.Callable[..., int]",
        *,
        token=None,
        dispose_destination: bool = False,
        source=None,
        dispose_source: bool = False
    ) -> int:
        # both handles are wrapped before the writer can reject the transform;
        # release still runs source, writer, destination
        closers = []
        error = None
        try:
            out_wrapper = cryptpipe.OwnedStream(destination, dispose_destination)
            closers.append(out_wrapper.close)
            in_wrapper = None
            if source is not None:
                in_wrapper = cryptpipe.OwnedStream(source, dispose_source)
                closers.insert(0, in_wrapper.close)
            writer = cryptpipe.TransformWriter(transform, out_wrapper)
            closers.insert(len(closers) - 1, writer.close)
            if in_wrapper is not None:
                written = pump(in_wrapper, writer)
            else:
                written = pump(writer)
            cryptpipe._complete(writer, out_wrapper, destination, token)
            return written
        except BaseException as exc:
            error = exc
            raise
        finally:
            cryptpipe._release_all(closers, error)

    @staticmethod
    def _copy(reader, writer, buffer_size: int, token) -> int:
        total = 0
        while True:
            cryptpipe._checkpoint(token)
            chunk = reader.read(buffer_size)
            if not chunk:
                break
            cryptpipe._checkpoint(token)
            writer.write(chunk)
            total += len(chunk)
        return total

    @staticmethod
    def iter_text_chunks(
        text,
        encoding: "cryptpipe.typing.Union[None, str, cryptpipe.TextEncoding]" = None,
        chunk_size: "cryptpipe.typing.Optional[int]" = None,
        *,
        length: "cryptpipe.typing.Optional[int]" = None
    ) -> "cryptpipe.typing.Iterator[bytes]":
        enc = cryptpipe._coerce_encoding(encoding)
        size = cryptpipe._resolve_size(chunk_size, cryptpipe.DEFAULT_CHUNK_SIZE, "chunk_size")
        if isinstance(text, str):
            total = len(text) if length is None else int(length)
            if total < 0 or total > len(text):
                raise ValueError(f"length must be within 0..{len(text)}")
            reader = None
        elif callable(getattr(text, "read", None)):
            if length is not None:
                raise ValueError("length is only supported for str input")
            total = None
            reader = text.read
        else:
            raise TypeError(f"Unsupported text source: {type(text)!r}")
        encoder = enc.new_encoder()
        if enc.preamble:
            yield enc.preamble
        if reader is None:
            position = 0
            while position < total:
                count = min(size, total - position)
                yield encoder.encode(text[position:position + count])
                position += count
        else:
            while True:
                piece = reader(size)
                if not piece:
                    break
                if not isinstance(piece, str):
                    raise TypeError("text stream must yield str, not bytes")
                yield encoder.encode(piece)
        tail = encoder.encode("", True)
        if tail:
            yield tail

    @staticmethod
    def transform_bytes(
        data: "cryptpipe.typing.Union[bytes, bytearray, memoryview]",
        transform,
        destination,
        *,
        token=None,
        dispose_destination: bool = False
    ) -> int:
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"transform_bytes expects bytes-like input, got {type(data)!r}")

        def _pump(writer) -> int:
            cryptpipe._checkpoint(token)
            writer.write(data)
            return len(data)

        return cryptpipe._run(
            destination,
            transform,
            _pump,
            token=token,
            dispose_destination=dispose_destination
        )

    @staticmethod
    def transform_stream(
        source,
        transform,
        destination,
        *,
        token=None,
        dispose_source: bool = False,
        dispose_destination: bool = False,
        copy_buffer_size: "cryptpipe.typing.Optional[int]" = None
    ) -> int:
        if source is None:
            raise TypeError("transform_stream requires a source stream")

        def _pump(reader, writer) -> int:
            size = cryptpipe._resolve_size(copy_buffer_size, cryptpipe.DEFAULT_BUFFER_SIZE, "copy_buffer_size")
            return cryptpipe._copy(reader, writer, size, token)

        return cryptpipe._run(
            destination,
            transform,
            _pump,
            token=token,
            dispose_destination=dispose_destination,
            source=source,
            dispose_source=dispose_source
        )

    @staticmethod
    def transform_text(
        text,
        transform,
        destination,
        *,
        token=None,
        dispose_destination: bool = False,
        chunk_size: "cryptpipe.typing.Optional[int]" = None,
        encoding: "cryptpipe.typing.Union[None, str, cryptpipe.TextEncoding]" = None
    ) -> int:
        def _pump(writer) -> int:
            total = 0
            for chunk in cryptpipe.iter_text_chunks(text, encoding, chunk_size):
                cryptpipe._checkpoint(token)
                writer.write(chunk)
                total += len(chunk)
            return total

        return cryptpipe._run(
            destination,
            transform,
            _pump,
            token=token,
            dispose_destination=dispose_destination
        )

    @staticmethod
    def submit(operation, *args, executor=None, token=None, **kwargs) -> "cryptpipe.PipelineJob":
        token = token or cryptpipe.CancellationToken()
        kwargs["token"] = token
        if executor is not None:
            return cryptpipe.PipelineJob(executor.submit(operation, *args, **kwargs), token)
        own_executor = cryptpipe.concurrent.futures.ThreadPoolExecutor(max_workers=1)
        try:
            future = own_executor.submit(operation, *args, **kwargs)
        finally:
            own_executor.shutdown(wait=False)
        return cryptpipe.PipelineJob(future, token)

    @staticmethod
    def _hash_algorithm(name: str):
        factory = cryptpipe._HASH_ALGORITHMS.get(str(name).strip().lower().replace("_", "-"))
        if factory is None:
            raise ValueError(f"Unsupported hash algorithm: {name}")
        return factory()

    @staticmethod
    def _aes_cipher(key: bytes, iv: bytes, mode: str):
        if len(iv) != cryptpipe.IV_LEN:
            raise ValueError(f"AES IV must be {cryptpipe.IV_LEN} bytes")
        mode = mode.lower()
        if mode == "cbc":
            return cryptpipe.Cipher(cryptpipe.algorithms.AES(key), cryptpipe.modes.CBC(iv))
        if mode == "ctr":
            return cryptpipe.Cipher(cryptpipe.algorithms.AES(key), cryptpipe.modes.CTR(iv))
        raise ValueError(f"Unsupported AES mode: {mode}")

    @staticmethod
    def identity_transform() -> "cryptpipe.IdentityTransform":
        return cryptpipe.IdentityTransform()

    @staticmethod
    def aes_encryptor(key: bytes, iv: bytes, mode: str = "cbc"):
        ctx = cryptpipe._aes_cipher(key, iv, mode).encryptor()
        if mode.lower() != "cbc":
            return ctx
        padder = cryptpipe.padding.PKCS7(cryptpipe.AES_BLOCK_BITS).padder()
        return cryptpipe._PaddedCipherTransform(ctx, padder, decrypt=False)

    @staticmethod
    def aes_decryptor(key: bytes, iv: bytes, mode: str = "cbc"):
        ctx = cryptpipe._aes_cipher(key, iv, mode).decryptor()
        if mode.lower() != "cbc":
            return ctx
        unpadder = cryptpipe.padding.PKCS7(cryptpipe.AES_BLOCK_BITS).unpadder()
        return cryptpipe._PaddedCipherTransform(ctx, unpadder, decrypt=True)

    @staticmethod
    def hash_transform(algorithm: str = "sha256"):
        return cryptpipe.hashes.Hash(cryptpipe._hash_algorithm(algorithm))

    @staticmethod
    def hmac_transform(key: bytes, algorithm: str = "sha256"):
        return cryptpipe.hmac.HMAC(key, cryptpipe._hash_algorithm(algorithm))

    @staticmethod
    def _coerce_password_bytes(
        password: "cryptpipe.typing.Union[str, bytes, bytearray, memoryview]"
    ) -> bytes:
        if isinstance(password, str):
            return password.encode("utf-8")
        if isinstance(password, (bytes, bytearray, memoryview)):
            return bytes(password)
        raise TypeError(f"Unsupported password type: {type(password)!r}")

    @staticmethod
    def derive_key(
        password: "cryptpipe.typing.Union[str, bytes, bytearray, memoryview]",
        salt: bytes,
        iterations: "cryptpipe.typing.Optional[int]" = None
    ) -> bytes:
        pw = cryptpipe._coerce_password_bytes(password)
        if not pw:
            raise ValueError("Password required")
        if len(salt) < cryptpipe.SALT_LEN:
            raise ValueError(f"Salt must be at least {cryptpipe.SALT_LEN} bytes")
        kdf = cryptpipe.PBKDF2HMAC(
            algorithm=cryptpipe.hashes.SHA256(),
            length=cryptpipe.KEY_LEN,
            salt=salt,
            iterations=iterations or cryptpipe.KDF_ITERATIONS
        )
        return kdf.derive(pw)

    @staticmethod
    def _normalize_path(path_like: "cryptpipe.typing.Union[str, cryptpipe.pathlib.Path]") -> "cryptpipe.pathlib.Path":
        path = cryptpipe.pathlib.Path(path_like).expanduser()
        try:
            return path.resolve(strict=False)
        except OSError:
            return path

    @staticmethod
    def _ensure_existing_file(path: "cryptpipe.pathlib.Path") -> None:
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"Input file not found: {path}")

    @staticmethod
    def _remove_partial(path: "cryptpipe.pathlib.Path") -> None:
        try:
            path.unlink()
        except FileNotFoundError:
            pass

    @staticmethod
    def encrypt_file(
        path,
        password: "cryptpipe.typing.Union[str, bytes, bytearray, memoryview]",
        output=None,
        *,
        token=None,
        chunk_size: "cryptpipe.typing.Optional[int]" = None
    ) -> "cryptpipe.pathlib.Path":
        src = cryptpipe._normalize_path(path)
        cryptpipe._ensure_existing_file(src)
        dst = cryptpipe._normalize_path(output) if output else src.with_name(src.name + cryptpipe.CONTAINER_SUFFIX)
        salt = cryptpipe.os.urandom(cryptpipe.SALT_LEN)
        iv = cryptpipe.os.urandom(cryptpipe.IV_LEN)
        key = cryptpipe.derive_key(password, salt)
        try:
            with open(src, "rb") as source, open(dst, "wb") as dest:
                dest.write(cryptpipe.CONTAINER_MAGIC + salt + iv)
                cryptpipe.transform_stream(
                    source,
                    cryptpipe.aes_encryptor(key, iv),
                    dest,
                    token=token,
                    copy_buffer_size=chunk_size
                )
        except BaseException:
            cryptpipe._remove_partial(dst)
            raise
        return dst

    @staticmethod
    def decrypt_file(
        path,
        password: "cryptpipe.typing.Union[str, bytes, bytearray, memoryview]",
        output=None,
        *,
        token=None,
        chunk_size: "cryptpipe.typing.Optional[int]" = None
    ) -> "cryptpipe.pathlib.Path":
        src = cryptpipe._normalize_path(path)
        cryptpipe._ensure_existing_file(src)
        if output:
            dst = cryptpipe._normalize_path(output)
        elif src.suffix == cryptpipe.CONTAINER_SUFFIX:
            dst = src.with_suffix("")
        else:
            dst = src.with_name(src.name + ".out")
        header_len = len(cryptpipe.CONTAINER_MAGIC) + cryptpipe.SALT_LEN + cryptpipe.IV_LEN
        with open(src, "rb") as source:
            header = source.read(header_len)
            if len(header) != header_len or not header.startswith(cryptpipe.CONTAINER_MAGIC):
                raise ValueError(f"{src.name} is not a {cryptpipe.CONTAINER_MAGIC.decode()} container")
            salt = header[len(cryptpipe.CONTAINER_MAGIC):-cryptpipe.IV_LEN]
            iv = header[-cryptpipe.IV_LEN:]
            key = cryptpipe.derive_key(password, salt)
            try:
                with open(dst, "wb") as dest:
                    cryptpipe.transform_stream(
                        source,
                        cryptpipe.aes_decryptor(key, iv),
                        dest,
                        token=token,
                        copy_buffer_size=chunk_size
                    )
            except BaseException:
                cryptpipe._remove_partial(dst)
                raise
        return dst

    @staticmethod
    def hash_file(path, algorithm: str = "sha256", *, token=None) -> str:
        src = cryptpipe._normalize_path(path)
        cryptpipe._ensure_existing_file(src)
        transform = cryptpipe.hash_transform(algorithm)
        digest = cryptpipe.io.BytesIO()
        cryptpipe.transform_stream(
            open(src, "rb"),
            transform,
            digest,
            token=token,
            dispose_source=True
        )
        return digest.getvalue().hex()

    @staticmethod
    def hash_text(
        text,
        algorithm: str = "sha256",
        *,
        encoding: "cryptpipe.typing.Optional[str]" = None,
        token=None
    ) -> str:
        digest = cryptpipe.io.BytesIO()
        cryptpipe.transform_text(
            text,
            cryptpipe.hash_transform(algorithm),
            digest,
            token=token,
            encoding=encoding
        )
        return digest.getvalue().hex()


def cli(argv=None) -> int:
    import argparse

    parser = argparse.ArgumentParser(prog="cryptpipe", description="Streaming cipher/hash toolkit")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("encrypt", "Encrypt one or more files into CPX1 containers"),
        ("decrypt", "Decrypt one or more CPX1 containers"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("paths", nargs='+', help="One or more file paths")
        sub.add_argument("-p", "--password", required=True, help="Password used to derive the AES key")
        sub.add_argument("-o", "--output", default=None, help="Output path (single input only)")
        sub.add_argument(
            "--chunk-size",
            type=int,
            default=None,
            help="Copy buffer size in bytes"
        )

    digest = subparsers.add_parser("hash", help="Print the digest of files or text")
    digest.add_argument("paths", nargs='*', help="Files to hash")
    digest.add_argument("-a", "--algorithm", default="sha256", help="Hash algorithm name")
    digest.add_argument("--text", default=None, help="Hash this text instead of files")
    digest.add_argument("--encoding", default=None, help="Text encoding (default utf-8)")

    args = parser.parse_args(argv)

    if args.command == "hash" and args.text is not None:
        try:
            print(cryptpipe.hash_text(args.text, args.algorithm, encoding=args.encoding))
        except (LookupError, ValueError) as exc:
            print(f"FAIL! {exc}")
            return 1
        return 0
    if not args.paths:
        parser.error("at least one path is required")
    if getattr(args, "output", None) and len(args.paths) > 1:
        parser.error("--output requires a single input path")

    token = cryptpipe.CancellationToken()

    def _handle(raw_path: str) -> str:
        if args.command == "encrypt":
            out = cryptpipe.encrypt_file(raw_path, args.password, args.output, token=token, chunk_size=args.chunk_size)
            return f"SUCCESS! -> {out}"
        if args.command == "decrypt":
            out = cryptpipe.decrypt_file(raw_path, args.password, args.output, token=token, chunk_size=args.chunk_size)
            return f"SUCCESS! -> {out}"
        return cryptpipe.hash_file(raw_path, args.algorithm, token=token)

    results = {}
    max_workers = max(1, min(len(args.paths), cryptpipe.os.cpu_count() or 1))
    executor = cryptpipe.concurrent.futures.ThreadPoolExecutor(max_workers=max_workers)
    try:
        futures = {executor.submit(_handle, path): path for path in args.paths}
        for future in cryptpipe.concurrent.futures.as_completed(futures):
            path = futures[future]
            try:
                results[path] = future.result()
            except cryptpipe.concurrent.futures.CancelledError:
                results[path] = "FAIL! cancelled"
            except Exception as exc:
                results[path] = f"FAIL! {exc}"
    except KeyboardInterrupt:
        token.cancel()
        executor.shutdown(wait=True, cancel_futures=True)
        print("Exiting...", file=cryptpipe.sys.stderr)
        return 130
    finally:
        executor.shutdown(wait=True)

    failures = 0
    for path in args.paths:
        status = results.get(path, "FAIL! cancelled")
        print(f"{path}: {status}")
        if status.startswith("FAIL!"):
            failures += 1
    return 0 if failures == 0 else 1


def main(argv=None) -> int:
    return cli(argv)


if __name__ == "__main__":
    raise SystemExit(main())
