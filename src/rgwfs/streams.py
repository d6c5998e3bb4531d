"""Byte streams over stored objects.

    Objects cannot be written in place, so writers spool everything locally
    and upload the whole object when closed.
"""
import io
import tempfile
import typing as t

from .client.base import ObjectHandle


DEFAULT_SPOOL_SIZE = 1048576


class ObjectReader(io.RawIOBase):
    """Raw reader over the chunks of a downloaded object."""

    def __init__(self, chunks: t.Iterable[bytes]):
        super().__init__()
        self._chunks = iter(chunks)
        self._buffer = b''

    def readable(self) -> bool:
        return True

    def readinto(self, b) -> int:
        while not self._buffer:
            try:
                self._buffer = next(self._chunks)
            except StopIteration:
                return 0
        n = min(len(b), len(self._buffer))
        b[:n] = self._buffer[:n]
        self._buffer = self._buffer[n:]
        return n


class ObjectWriter(io.RawIOBase):
    """Writer that uploads to an object handle on close().

        Leaving a with block because of an exception, or dropping the writer
        without closing it, discards the data instead of uploading it.
    """

    def __init__(self, handle: ObjectHandle, spool_size: int = DEFAULT_SPOOL_SIZE):
        super().__init__()
        self._handle = handle
        self._spool = tempfile.SpooledTemporaryFile(max_size=spool_size)

    def writable(self) -> bool:
        return True

    def write(self, b) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed file")
        return self._spool.write(b)

    def discard(self):
        if not self.closed:
            self._spool.close()
            super().close()

    def close(self):
        if self.closed:
            return
        try:
            self._spool.seek(0)
            self._handle.upload(self._spool)
        finally:
            self._spool.close()
            super().close()

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            self.discard()
        else:
            self.close()
        return False

    def __del__(self):
        # a writer that was never closed is abandoned, not uploaded
        self.discard()
