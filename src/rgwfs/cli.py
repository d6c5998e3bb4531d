import datetime
import pathlib
import shutil
import sys

import click

from .filesystem import RGWFileSystem
from .paths import StorePath
from .structures import FileStatus


def _filesystem(uri: str) -> RGWFileSystem:
    path = StorePath.parse(uri)
    return RGWFileSystem(f"{path.scheme or 'ceph'}://{path.host}/")


def _format_status(status: FileStatus) -> str:
    kind = "d" if status.is_directory else "-"
    modified = datetime.datetime.fromtimestamp(status.modification_time / 1000, datetime.timezone.utc)
    return f"{kind} {status.owner: <10} {status.length: >12} {modified.strftime('%Y-%m-%d %H:%M')} {status.path}"


@click.group
def main():
    from .boot import init_rgwfs
    init_rgwfs()


@main.command
@click.argument("uri")
def ls(uri):
    fs = _filesystem(uri)
    for status in sorted(fs.list_status(uri), key=lambda x: x.path.path):
        print(_format_status(status))


@main.command
@click.argument("uri")
def stat(uri):
    print(_format_status(_filesystem(uri).get_file_status(uri)))


@main.command
@click.argument("uri")
def mkdir(uri):
    _filesystem(uri).mkdirs(uri)


@main.command
@click.argument("source")
@click.argument("target")
def mv(source, target):
    if not _filesystem(source).rename(source, target):
        print(f"Could not rename {source} to {target}")
        sys.exit(1)


@main.command
@click.argument("uri")
@click.option("--recursive", "-r", is_flag=True, default=False)
def rm(uri, recursive):
    if not _filesystem(uri).delete(uri, recursive):
        print(f"Could not delete {uri}")
        sys.exit(1)


@main.command
@click.argument("uri")
def cat(uri):
    with _filesystem(uri).open(uri) as src:
        shutil.copyfileobj(src, sys.stdout.buffer)


@main.command
@click.argument("local_file", type=click.Path(exists=True, dir_okay=False, path_type=pathlib.Path))
@click.argument("uri")
@click.option("--overwrite", is_flag=True, default=False)
def put(local_file: pathlib.Path, uri: str, overwrite: bool):
    with open(local_file, "rb") as src:
        with _filesystem(uri).create(uri, overwrite=overwrite) as dest:
            shutil.copyfileobj(src, dest)
