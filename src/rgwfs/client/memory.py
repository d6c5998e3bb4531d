"""Object store held in process memory.

    Follows the listing rules of the Swift API (sorted names, marker paging,
    delimiter grouping) so that the filesystem layer behaves the same as it
    does against Ceph RGW. Useful for tests and for local development by
    setting rgwfs.client_class to rgwfs.client.memory.MemoryObjectClient.
"""
import collections
import datetime
import threading
import typing as t

from rgwfs.exc import PathNotFoundError, AuthenticationError
from rgwfs.structures import StoredObject
from .base import BaseObjectClient, DEFAULT_CHUNK_SIZE, Uploadable


def _utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class MemoryObjectClient(BaseObjectClient):

    def __init__(self,
                 containers: t.Optional[t.Iterable[str]] = None,
                 clock: t.Callable[[], datetime.datetime] = None,
                 fail_auth: bool = False):
        self._containers: dict[str, dict[str, tuple[bytes, datetime.datetime]]] = {}
        self._lock = threading.RLock()
        self._clock = clock or _utc_now
        self._fail_auth = fail_auth
        self.calls = collections.Counter()
        for name in (containers or []):
            self._containers[name] = {}

    def authenticate(self):
        self.calls['authenticate'] += 1
        if self._fail_auth:
            raise AuthenticationError("Failed to create account! Please check your user information")

    def _container(self, container: str) -> dict:
        if container not in self._containers:
            raise PathNotFoundError(f"Container [{container}] does not exist", 2004)
        return self._containers[container]

    def list_objects(self,
                     container: str,
                     prefix: str = "",
                     delimiter: str = "",
                     limit: t.Optional[int] = None,
                     marker: str = "") -> list[StoredObject]:
        self.calls['list_objects'] += 1
        results = []
        with self._lock:
            objects = self._container(container)
            for name in sorted(objects.keys()):
                if limit is not None and len(results) >= limit:
                    break
                if marker and name <= marker:
                    continue
                if not name.startswith(prefix):
                    continue
                if delimiter:
                    end = name.find(delimiter, len(prefix))
                    if end >= 0:
                        dir_name = name[:end + len(delimiter)]
                        if dir_name == marker or (results and results[-1].name == dir_name):
                            continue
                        results.append(StoredObject(dir_name, is_subdir=True))
                        continue
                data, modified = objects[name]
                results.append(StoredObject(name, len(data), modified))
        return results

    def container_exists(self, container: str) -> bool:
        self.calls['container_exists'] += 1
        with self._lock:
            return container in self._containers

    def create_container(self, container: str):
        self.calls['create_container'] += 1
        with self._lock:
            if container not in self._containers:
                self._containers[container] = {}

    def head_object(self, container: str, key: str) -> StoredObject:
        self.calls['head_object'] += 1
        with self._lock:
            objects = self._container(container)
            if key not in objects:
                raise PathNotFoundError(f"Object [{container}/{key}] does not exist", 2004)
            data, modified = objects[key]
            return StoredObject(key, len(data), modified)

    def download_object(self, container: str, key: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> t.Iterable[bytes]:
        self.calls['download_object'] += 1
        with self._lock:
            objects = self._container(container)
            if key not in objects:
                raise PathNotFoundError(f"Object [{container}/{key}] does not exist", 2004)
            data = objects[key][0]
        return (data[i:i + chunk_size] for i in range(0, len(data), chunk_size))

    def upload_object(self, container: str, key: str, data: Uploadable):
        self.calls['upload_object'] += 1
        if isinstance(data, (bytes, bytearray)):
            content = bytes(data)
        elif hasattr(data, 'read'):
            content = data.read()
        else:
            content = b''.join(data)
        with self._lock:
            self._container(container)[key] = (content, self._clock())

    def delete_object(self, container: str, key: str):
        self.calls['delete_object'] += 1
        with self._lock:
            objects = self._container(container)
            if key not in objects:
                raise PathNotFoundError(f"Object [{container}/{key}] does not exist", 2004)
            del objects[key]

    def keys(self, container: str) -> list[str]:
        """All keys currently stored in a container, sorted."""
        with self._lock:
            return sorted(self._container(container).keys())

    def content(self, container: str, key: str) -> bytes:
        with self._lock:
            return self._container(container)[key][0]
