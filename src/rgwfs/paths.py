"""Translation between hierarchical paths and flat object keys.

    A path looks like ceph://BUCKET/dir/sub/file. The host names the bucket
    (a container on the backend) and everything after it is the object key,
    without the leading slash. The root of a bucket maps to the empty key.

    Nothing in this module talks to the backend.
"""
from __future__ import annotations
import typing as t

from .exc import InvalidPathError

if t.TYPE_CHECKING:
    from .structures import SessionContext


SCHEME = "ceph"
SEPARATOR = "/"


def _normalize(path: str, absolute: bool) -> str:
    segments = []
    for segment in path.split(SEPARATOR):
        if segment == "" or segment == ".":
            continue
        if segment == ".." and segments and segments[-1] != "..":
            segments.pop()
        elif segment == ".." and absolute:
            continue
        else:
            segments.append(segment)
    joined = SEPARATOR.join(segments)
    return SEPARATOR + joined if absolute else joined


class StorePath:
    """Immutable scheme://host/path triple with slash-separated segments."""

    __slots__ = ('_scheme', '_host', '_path')

    def __init__(self, scheme: str = "", host: str = "", path: str = ""):
        scheme = scheme or ""
        host = host or ""
        path = path or ""
        object.__setattr__(self, '_scheme', scheme)
        object.__setattr__(self, '_host', host)
        object.__setattr__(self, '_path', _normalize(path, bool(scheme or host) or path.startswith(SEPARATOR)))

    def __setattr__(self, key, value):
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    @classmethod
    def parse(cls, value: t.Union[str, StorePath]) -> StorePath:
        """Build a path from a URI string, or return it unchanged if it is one already."""
        if isinstance(value, StorePath):
            return value
        value = str(value)
        if "://" not in value:
            return cls("", "", value)
        # object names may hold "#", "?" or "%", so nothing after the host is parsed
        scheme, _, rest = value.partition("://")
        host, sep, path = rest.partition(SEPARATOR)
        return cls(scheme, host, sep + path)

    @property
    def scheme(self) -> str:
        return self._scheme

    @property
    def host(self) -> str:
        return self._host

    @property
    def path(self) -> str:
        return self._path

    def is_absolute(self) -> bool:
        return self._path.startswith(SEPARATOR)

    def is_qualified(self) -> bool:
        return bool(self._scheme) and bool(self._host) and self.is_absolute()

    def is_root(self) -> bool:
        return self._path == SEPARATOR

    def name(self) -> str:
        """Get the last segment of the path ("" for root)."""
        return self._path[self._path.rfind(SEPARATOR) + 1:]

    def parent(self) -> t.Optional[StorePath]:
        """Get the parent path, or None for root and the empty relative path."""
        if self.is_root() or self._path == "":
            return None
        idx = self._path.rfind(SEPARATOR)
        if idx < 0:
            return StorePath(self._scheme, self._host, "")
        parent = self._path[:idx]
        if parent == "" and self.is_absolute():
            parent = SEPARATOR
        return StorePath(self._scheme, self._host, parent)

    def ancestors(self) -> t.Iterable[StorePath]:
        """Yield each ancestor, nearest first, ending with root."""
        parent = self.parent()
        while parent is not None:
            yield parent
            parent = parent.parent()

    def make_qualified(self, base: StorePath, working_dir: StorePath) -> StorePath:
        """Resolve against a filesystem URI and a working directory."""
        if self.is_qualified():
            return self
        if self.is_absolute():
            path = self._path
        elif working_dir.path.endswith(SEPARATOR):
            path = f"{working_dir.path}{self._path}"
        else:
            path = f"{working_dir.path}{SEPARATOR}{self._path}"
        return StorePath(self._scheme or base.scheme, self._host or base.host, path)

    def __str__(self):
        if self._scheme:
            return f"{self._scheme}://{self._host}{self._path}"
        if self._host:
            return f"//{self._host}{self._path}"
        return self._path

    def __repr__(self):
        return f"StorePath({str(self)!r})"

    def __eq__(self, other):
        if not isinstance(other, StorePath):
            return NotImplemented
        return (self._scheme, self._host, self._path) == (other._scheme, other._host, other._path)

    def __hash__(self):
        return hash((self._scheme, self._host, self._path))


def path_to_key(path: StorePath) -> str:
    """Strip scheme and host from a path, leaving the object key ("" for root)."""
    return path.path.lstrip(SEPARATOR)


def directory_key(key: str) -> str:
    """Get the directory form of a key, which ends with the separator ("" stays "")."""
    if key == "" or key.endswith(SEPARATOR):
        return key
    return key + SEPARATOR


def key_to_path(ctx: SessionContext, key: str) -> StorePath:
    return StorePath(ctx.uri.scheme, ctx.uri.host, SEPARATOR + key)


def check_path(base: StorePath, path: StorePath):
    """Raise InvalidPathError if path names a scheme or bucket other than those of base."""
    if path.scheme and path.scheme.lower() != base.scheme.lower():
        raise InvalidPathError(f"Wrong FS: {path}, expected: {base}", 1501)
    if path.host and path.host != base.host:
        raise InvalidPathError(f"Wrong FS: {path}, expected: {base}", 1502)


def qualify(ctx: SessionContext, path: t.Union[str, StorePath]) -> StorePath:
    path = StorePath.parse(path)
    check_path(ctx.uri, path)
    return path.make_qualified(ctx.uri, ctx.working_dir)
