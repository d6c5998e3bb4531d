"""Directory creation for a backend without directories.

    Ancestors are not created one by one: a directory exists as soon as any key
    lives under its prefix, so a single zero-byte marker object at key + "/"
    makes the target and all of its ancestors visible. The bucket itself is the
    only container ever created; nested containers are not modelled.
"""
import typing as t

import zrlog

from .exc import PathNotFoundError, PathExistsError
from .paths import StorePath, qualify, path_to_key, directory_key
from .status import get_file_status
from .structures import SessionContext


def mkdirs(ctx: SessionContext, path: t.Union[str, StorePath]) -> bool:
    path = qualify(ctx, path)
    try:
        status = get_file_status(ctx, path)
    except PathNotFoundError:
        status = None
    if status is not None:
        if status.is_directory:
            return True
        raise PathExistsError(f"Path is a file: {path}")
    _check_ancestors(ctx, path)
    _create_directory(ctx, path)
    return True


def _check_ancestors(ctx: SessionContext, path: StorePath):
    """Walk upwards until the first existing ancestor, which must be a directory."""
    for ancestor in path.ancestors():
        try:
            status = get_file_status(ctx, ancestor)
        except PathNotFoundError:
            continue
        if status.is_directory:
            return
        raise PathExistsError(f"Can't make directory for path '{ancestor}' since it is a file.", 1101)


def _create_directory(ctx: SessionContext, path: StorePath):
    log = zrlog.get_logger("rgwfs.directories")
    if not ctx.client.container_exists(ctx.bucket):
        log.info(f"Creating container [{ctx.bucket}]")
        ctx.client.create_container(ctx.bucket)
    key = path_to_key(path)
    if key:
        log.debug(f"Creating directory marker [{directory_key(key)}]")
        ctx.client.get_object(ctx.bucket, directory_key(key)).upload(b"")
