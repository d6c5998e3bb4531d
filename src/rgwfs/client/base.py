"""Contract for the object storage backend.

    The filesystem layer only ever calls the methods defined here. Every call
    is a fresh round trip; no results are cached.
"""
from __future__ import annotations
import datetime
import typing as t

from rgwfs.exc import PathNotFoundError
from rgwfs.structures import StoredObject


DEFAULT_CHUNK_SIZE = 1048576

Uploadable = t.Union[bytes, bytearray, t.BinaryIO, t.Iterable[bytes]]


class BaseObjectClient:
    """Narrow view of an object store: containers of flat keys with prefix listings."""

    def authenticate(self):
        """Obtain a session with the backend, raising AuthenticationError on failure."""
        raise NotImplementedError

    def list_objects(self,
                     container: str,
                     prefix: str = "",
                     delimiter: str = "",
                     limit: t.Optional[int] = None,
                     marker: str = "") -> list[StoredObject]:
        """List one page of objects whose names start with prefix, sorted by name."""
        raise NotImplementedError

    def iter_objects(self,
                     container: str,
                     prefix: str = "",
                     delimiter: str = "",
                     page_size: int = 1000) -> t.Iterable[StoredObject]:
        """List every matching object, fetching page_size entries per request."""
        marker = ""
        while True:
            page = self.list_objects(container, prefix=prefix, delimiter=delimiter, limit=page_size, marker=marker)
            yield from page
            if len(page) < page_size:
                break
            marker = page[-1].name

    def container_exists(self, container: str) -> bool:
        raise NotImplementedError

    def create_container(self, container: str):
        raise NotImplementedError

    def get_object(self, container: str, key: str) -> ObjectHandle:
        return ObjectHandle(self, container, key)

    def head_object(self, container: str, key: str) -> StoredObject:
        """Retrieve length and last modified time, raising PathNotFoundError if missing."""
        raise NotImplementedError

    def download_object(self, container: str, key: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> t.Iterable[bytes]:
        raise NotImplementedError

    def upload_object(self, container: str, key: str, data: Uploadable):
        raise NotImplementedError

    def delete_object(self, container: str, key: str):
        raise NotImplementedError


class ObjectHandle:
    """Handle to a single object key; each method is its own remote call."""

    def __init__(self, client: BaseObjectClient, container: str, key: str):
        self._client = client
        self.container = container
        self.key = key

    def __str__(self):
        return f"{self.container}/{self.key}"

    def exists(self) -> bool:
        try:
            self._client.head_object(self.container, self.key)
            return True
        except PathNotFoundError:
            return False

    def size(self) -> int:
        return self._client.head_object(self.container, self.key).length

    def modified_time(self) -> t.Optional[datetime.datetime]:
        return self._client.head_object(self.container, self.key).last_modified

    def download(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> t.Iterable[bytes]:
        return self._client.download_object(self.container, self.key, chunk_size)

    def upload(self, data: Uploadable):
        self._client.upload_object(self.container, self.key, data)

    def delete(self):
        self._client.delete_object(self.container, self.key)
