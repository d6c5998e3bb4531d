"""Filesystem-style access to a Ceph RGW bucket."""
import getpass
import io
import typing as t

import zirconium as zr
import zrlog
from autoinject import injector

from .client import BaseObjectClient, build_client
from .delete import delete as _delete
from .directories import mkdirs as _mkdirs
from .exc import InvalidPathError, PathNotFoundError, PathExistsError, UnsupportedOperationError
from .listing import list_status as _list_status
from .paths import SCHEME, StorePath, qualify, path_to_key, check_path
from .rename import rename as _rename
from .status import get_file_status as _get_file_status, is_directory as _is_directory
from .streams import ObjectReader, ObjectWriter
from .structures import SessionContext, FileStatus, DEFAULT_BLOCK_SIZE


PathLike = t.Union[str, StorePath]


class RGWFileSystem:
    """Hierarchical filesystem on top of a flat, key-based bucket.

        The filesystem URI (e.g. ceph://my-bucket/) names the bucket. All
        session state is captured in a SessionContext when the filesystem is
        built and never changes afterwards; each operation receives it
        explicitly.

        Settings are read from the [rgwfs] section of the configuration unless
        they are given as arguments.
    """

    config: zr.ApplicationConfig = None

    @injector.construct
    def __init__(self,
                 uri: PathLike,
                 client: t.Optional[BaseObjectClient] = None,
                 owner: t.Optional[str] = None,
                 working_dir: t.Optional[PathLike] = None,
                 block_size: t.Optional[int] = None,
                 rename_limit: t.Optional[int] = None,
                 page_size: t.Optional[int] = None,
                 chunk_size: t.Optional[int] = None):
        self._log = zrlog.get_logger("rgwfs.filesystem")
        root = StorePath.parse(uri)
        if not root.host:
            raise InvalidPathError(f"Filesystem URI [{uri}] does not name a bucket")
        root = StorePath(root.scheme or SCHEME, root.host, "/")
        if client is None:
            client = build_client(self.config)
        client.authenticate()
        if working_dir is None:
            working_dir = self.config.as_str(("rgwfs", "working_dir"), default=None)
        if working_dir is not None:
            working_dir = StorePath.parse(working_dir)
            check_path(root, working_dir)
        self._context = SessionContext(
            client=client,
            uri=root,
            working_dir=None if working_dir is None else working_dir.make_qualified(root, root),
            username=owner or self.config.as_str(("rgwfs", "owner"), default=None) or getpass.getuser(),
            block_size=block_size or self.config.as_int(("rgwfs", "block_size"), default=DEFAULT_BLOCK_SIZE),
            rename_limit=rename_limit or self.config.as_int(("rgwfs", "rename_limit"), default=100),
            page_size=page_size or self.config.as_int(("rgwfs", "page_size"), default=1000),
            chunk_size=chunk_size or self.config.as_int(("rgwfs", "chunk_size"), default=1048576)
        )
        self._log.debug(f"Initialized filesystem for [{root}]")

    @property
    def scheme(self) -> str:
        return SCHEME

    @property
    def uri(self) -> StorePath:
        return self._context.uri

    @property
    def context(self) -> SessionContext:
        return self._context

    def qualify(self, path: PathLike) -> StorePath:
        return qualify(self._context, path)

    def get_working_directory(self) -> StorePath:
        return self._context.working_dir

    def set_working_directory(self, path: PathLike):
        raise UnsupportedOperationError("Set working directory is not supported!")

    def get_default_block_size(self) -> int:
        return self._context.block_size

    def get_file_status(self, path: PathLike) -> FileStatus:
        return _get_file_status(self._context, path)

    def exists(self, path: PathLike) -> bool:
        try:
            _get_file_status(self._context, path)
            return True
        except PathNotFoundError:
            return False

    def is_directory(self, path: PathLike) -> bool:
        return _is_directory(self._context, path)

    def is_file(self, path: PathLike) -> bool:
        try:
            return _get_file_status(self._context, path).is_file
        except PathNotFoundError:
            return False

    def list_status(self, path: PathLike) -> list[FileStatus]:
        return _list_status(self._context, path)

    def mkdirs(self, path: PathLike) -> bool:
        return _mkdirs(self._context, path)

    def rename(self, src: PathLike, dst: PathLike) -> bool:
        return _rename(self._context, src, dst)

    def delete(self, path: PathLike, recursive: bool = False) -> bool:
        return _delete(self._context, path, recursive)

    def open(self, path: PathLike, buffer_size: int = io.DEFAULT_BUFFER_SIZE) -> io.BufferedReader:
        path = self.qualify(path)
        if _get_file_status(self._context, path).is_directory:
            raise PathNotFoundError(f"Can't open {path} because it is a directory", 1001)
        handle = self._context.client.get_object(self._context.bucket, path_to_key(path))
        return io.BufferedReader(ObjectReader(handle.download(self._context.chunk_size)), buffer_size)

    def create(self, path: PathLike, overwrite: bool = True) -> ObjectWriter:
        path = self.qualify(path)
        if path.is_root():
            raise PathExistsError(f"Cannot create a file at the root of [{self._context.bucket}]", 1102)
        try:
            status = _get_file_status(self._context, path)
        except PathNotFoundError:
            status = None
        if status is not None and status.is_directory:
            raise PathExistsError(f"Path is a directory: {path}", 1103)
        if status is not None and not overwrite:
            raise PathExistsError(f"File already exists: {path}", 1104)
        return ObjectWriter(self._context.client.get_object(self._context.bucket, path_to_key(path)), self._context.chunk_size)

    def append(self, path: PathLike, buffer_size: int = io.DEFAULT_BUFFER_SIZE):
        raise UnsupportedOperationError("Append is not supported!")
