"""Removal of files and directories.

    Unlike every other operation, delete never propagates backend I/O
    failures: they are logged and reported as False. A path that does not
    exist is also reported as False. Asking to delete a non-empty directory
    without recursive=True is a usage error and is raised.
"""
import typing as t

import zrlog

from .exc import PathNotFoundError, PathNotEmptyError, StorageError
from .paths import StorePath, qualify, path_to_key, directory_key
from .status import get_file_status
from .structures import SessionContext


def delete(ctx: SessionContext, path: t.Union[str, StorePath], recursive: bool = False) -> bool:
    log = zrlog.get_logger("rgwfs.delete")
    path = qualify(ctx, path)
    if path.is_root():
        log.warning(f"Refusing to delete the root of [{ctx.bucket}]")
        return False
    try:
        status = get_file_status(ctx, path)
        if status.is_directory:
            _delete_directory(ctx, path, recursive)
        else:
            ctx.client.get_object(ctx.bucket, path_to_key(path)).delete()
        return True
    except PathNotFoundError:
        log.debug(f"Nothing to delete at [{path}]")
        return False
    except StorageError:
        log.exception(f"Failed to delete: {path}")
        return False


def _delete_directory(ctx: SessionContext, path: StorePath, recursive: bool):
    log = zrlog.get_logger("rgwfs.delete")
    prefix = directory_key(path_to_key(path))
    if not recursive:
        entries = ctx.client.list_objects(ctx.bucket, prefix=prefix, limit=2)
        if any(x.name != prefix for x in entries):
            raise PathNotEmptyError(f"Directory is not empty: {path}")
    # collect every key before the first delete
    keys = [x.name for x in ctx.client.iter_objects(ctx.bucket, prefix=prefix, page_size=ctx.page_size)]
    for key in keys:
        log.info(f"Removing [{key}]")
        ctx.client.get_object(ctx.bucket, key).delete()
