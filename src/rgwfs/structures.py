from __future__ import annotations
import datetime
import typing as t

from .paths import StorePath

if t.TYPE_CHECKING:
    from .client.base import BaseObjectClient


DEFAULT_BLOCK_SIZE = 33554432


def to_epoch_millis(dt: t.Optional[datetime.datetime]) -> int:
    if dt is None:
        return 0
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    return int(dt.timestamp() * 1000)


class _Frozen:

    __slots__ = ()

    def __setattr__(self, key, value):
        raise AttributeError(f"{self.__class__.__name__} is read-only")

    def _init(self, **kwargs):
        for key in kwargs:
            object.__setattr__(self, key, kwargs[key])


class StoredObject(_Frozen):
    """An entry returned by the backend when listing a container.

        When the listing was grouped by a delimiter, entries with is_subdir set
        stand for a common prefix rather than an actual object; their name ends
        with the delimiter and they carry no length or timestamp.
    """

    __slots__ = ('name', 'length', 'last_modified', 'is_subdir')

    def __init__(self,
                 name: str,
                 length: int = 0,
                 last_modified: t.Optional[datetime.datetime] = None,
                 is_subdir: bool = False):
        self._init(name=name, length=length, last_modified=last_modified, is_subdir=is_subdir)

    def __repr__(self):
        return f"StoredObject({self.name!r}, length={self.length}, subdir={self.is_subdir})"


class FileStatus(_Frozen):
    """Status of a path, built fresh by every query."""

    __slots__ = ('path', 'length', 'modification_time', 'block_size', 'owner', 'is_directory')

    def __init__(self,
                 path: StorePath,
                 length: int,
                 modification_time: int,
                 block_size: int,
                 owner: str,
                 is_directory: bool):
        self._init(
            path=path,
            length=length,
            modification_time=modification_time,
            block_size=block_size,
            owner=owner,
            is_directory=is_directory
        )

    @staticmethod
    def directory(path: StorePath, modification_time: int, owner: str) -> FileStatus:
        return FileStatus(path, 0, modification_time, 0, owner, True)

    @staticmethod
    def file(path: StorePath, length: int, modification_time: int, block_size: int, owner: str) -> FileStatus:
        return FileStatus(path, length, modification_time, block_size, owner, False)

    @property
    def is_file(self) -> bool:
        return not self.is_directory

    def modified_datetime(self) -> datetime.datetime:
        return datetime.datetime.fromtimestamp(self.modification_time / 1000, datetime.timezone.utc)

    def __eq__(self, other):
        if not isinstance(other, FileStatus):
            return NotImplemented
        return all(getattr(self, x) == getattr(other, x) for x in FileStatus.__slots__)

    def __hash__(self):
        return hash(self.path)

    def __repr__(self):
        kind = "dir" if self.is_directory else "file"
        return f"FileStatus({str(self.path)!r}, {kind}, length={self.length}, mtime={self.modification_time})"


class SessionContext(_Frozen):
    """Per-filesystem session state.

        Built once when the filesystem is initialized and passed to every
        operation; none of it can change afterwards.
    """

    __slots__ = ('client', 'bucket', 'uri', 'working_dir', 'username', 'block_size', 'rename_limit', 'page_size', 'chunk_size')

    def __init__(self,
                 client: BaseObjectClient,
                 uri: StorePath,
                 working_dir: t.Optional[StorePath] = None,
                 username: str = "",
                 block_size: int = DEFAULT_BLOCK_SIZE,
                 rename_limit: int = 100,
                 page_size: int = 1000,
                 chunk_size: int = 1048576):
        self._init(
            client=client,
            bucket=uri.host,
            uri=uri,
            working_dir=working_dir if working_dir is not None else uri,
            username=username,
            block_size=block_size,
            rename_limit=rename_limit,
            page_size=page_size,
            chunk_size=chunk_size
        )
