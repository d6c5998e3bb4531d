"""Move semantics built from copy and delete.

    The backend has no rename. A single file is moved by downloading it,
    uploading it under the new key, then deleting the original. A directory is
    moved by doing the same for every object under its prefix.

    None of this is atomic and nothing is rolled back. A failure after the
    upload but before the delete leaves two copies. A failure partway through
    a directory leaves the subtree split between the old and new locations.
    The boolean result does not report partial progress.
"""
import typing as t

import zrlog

from .exc import PathNotFoundError, CapacityExceededError
from .paths import StorePath, qualify, path_to_key, directory_key
from .status import get_file_status
from .structures import SessionContext


def rename(ctx: SessionContext, src: t.Union[str, StorePath], dst: t.Union[str, StorePath]) -> bool:
    log = zrlog.get_logger("rgwfs.rename")
    src = qualify(ctx, src)
    dst = qualify(ctx, dst)
    if src.is_root():
        log.debug("Cannot rename the root of a filesystem")
        return False
    if _is_ancestor(src, dst):
        log.debug(f"Cannot rename [{src}] into its own subtree [{dst}]")
        return False
    src_status = get_file_status(ctx, src)
    try:
        get_file_status(ctx, dst)
    except PathNotFoundError:
        get_file_status(ctx, dst.parent())
    if src == dst:
        return True
    if src_status.is_directory:
        return _copy_directory(ctx, src, dst)
    return _copy_file(ctx, src, dst)


def _is_ancestor(candidate: StorePath, path: StorePath) -> bool:
    for ancestor in path.ancestors():
        if ancestor == candidate:
            return True
    return False


def _move_object(ctx: SessionContext, src_key: str, dst_key: str):
    log = zrlog.get_logger("rgwfs.rename")
    src_handle = ctx.client.get_object(ctx.bucket, src_key)
    log.info(f"Copying [{src_key}] to [{dst_key}]")
    ctx.client.get_object(ctx.bucket, dst_key).upload(src_handle.download(ctx.chunk_size))
    log.info(f"Removing [{src_key}]")
    src_handle.delete()


def _copy_file(ctx: SessionContext, src: StorePath, dst: StorePath) -> bool:
    src_key = path_to_key(src)
    dst_key = directory_key(path_to_key(dst)) + src.name()
    if dst_key == src_key:
        return True
    _move_object(ctx, src_key, dst_key)
    return True


def _copy_directory(ctx: SessionContext, src: StorePath, dst: StorePath) -> bool:
    src_prefix = directory_key(path_to_key(src))
    dst_prefix = directory_key(path_to_key(dst))
    objects = ctx.client.list_objects(ctx.bucket, prefix=src_prefix, limit=ctx.rename_limit + 1)
    if len(objects) > ctx.rename_limit:
        raise CapacityExceededError(
            f"Cannot rename [{src}]: more than {ctx.rename_limit} objects under it"
        )
    for stored in objects:
        _move_object(ctx, stored.name, dst_prefix + stored.name[len(src_prefix):])
    return True
