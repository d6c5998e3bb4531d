import typing as t

import zrlog

from .paths import StorePath, qualify, path_to_key, directory_key, key_to_path
from .status import get_file_status, directory_status
from .structures import SessionContext, FileStatus, to_epoch_millis


def list_status(ctx: SessionContext, path: t.Union[str, StorePath]) -> list[FileStatus]:
    """List the immediate children of a directory.

        Children are read from one paginated listing grouped by "/", so files
        are classified from the listing metadata itself. Each subdirectory
        costs one extra bounded listing for its modified time. The directory's
        own marker (key + "/") is never reported.

        Listing a file returns just that file's status.
    """
    log = zrlog.get_logger("rgwfs.listing")
    path = qualify(ctx, path)
    status = get_file_status(ctx, path)
    if not status.is_directory:
        return [status]
    prefix = directory_key(path_to_key(path))
    children: dict[StorePath, FileStatus] = {}
    for entry in ctx.client.iter_objects(ctx.bucket, prefix=prefix, delimiter="/", page_size=ctx.page_size):
        if entry.name == prefix:
            log.debug(f"Ignoring: {entry.name}")
            continue
        child_path = key_to_path(ctx, entry.name)
        if entry.is_subdir or entry.name.endswith("/"):
            children[child_path] = directory_status(ctx, child_path)
        elif child_path not in children:
            children[child_path] = FileStatus.file(
                child_path,
                entry.length,
                to_epoch_millis(entry.last_modified),
                ctx.block_size,
                ctx.username
            )
    return list(children.values())
