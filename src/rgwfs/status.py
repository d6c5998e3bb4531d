"""Classification of a path as a file, a directory, or nothing.

    There is no directory primitive in the backend. A path is a directory if
    a listing of the directory form of its key (key + "/") returns anything,
    whether an explicit marker object or a descendant. Root is always a
    directory and is never looked up.

    The status of a file takes two separate calls (length, then modified time)
    against the same key. They are not atomic: an object replaced between the
    two calls yields the length of one version and the time of the other.
"""
import typing as t

from .exc import PathNotFoundError
from .paths import StorePath, qualify, path_to_key, directory_key
from .structures import SessionContext, FileStatus, StoredObject, to_epoch_millis


STATUS_LISTING_LIMIT = 2


def get_file_status(ctx: SessionContext, path: t.Union[str, StorePath]) -> FileStatus:
    path = qualify(ctx, path)
    key = path_to_key(path)
    if key == "":
        return FileStatus.directory(path, 0, ctx.username)
    entries = ctx.client.list_objects(ctx.bucket, prefix=key, limit=STATUS_LISTING_LIMIT)
    if not entries:
        raise PathNotFoundError(f"No such file or directory: {path}")
    dir_entries = _directory_entries(ctx, key)
    if dir_entries:
        return _directory_status(ctx, path, dir_entries)
    handle = ctx.client.get_object(ctx.bucket, key)
    try:
        length = handle.size()
        modified = handle.modified_time()
    except PathNotFoundError as ex:
        raise PathNotFoundError(f"No such file or directory: {path}") from ex
    return FileStatus.file(path, length, to_epoch_millis(modified), ctx.block_size, ctx.username)


def is_directory(ctx: SessionContext, path: t.Union[str, StorePath]) -> bool:
    """Check if anything is stored under the directory form of the path's key."""
    key = path_to_key(qualify(ctx, path))
    if key == "":
        return True
    try:
        return bool(_directory_entries(ctx, key))
    except PathNotFoundError:
        return False


def directory_status(ctx: SessionContext, path: StorePath) -> FileStatus:
    """Status of a path already known to be a directory (e.g. a grouped listing entry)."""
    key = path_to_key(path)
    if key == "":
        return FileStatus.directory(path, 0, ctx.username)
    return _directory_status(ctx, path, _directory_entries(ctx, key))


def _directory_entries(ctx: SessionContext, key: str) -> list[StoredObject]:
    return ctx.client.list_objects(ctx.bucket, prefix=directory_key(key), limit=STATUS_LISTING_LIMIT)


def _directory_status(ctx: SessionContext, path: StorePath, entries: list[StoredObject]) -> FileStatus:
    # first entry in backend order wins
    modified = entries[0].last_modified if entries else None
    return FileStatus.directory(path, to_epoch_millis(modified), ctx.username)
