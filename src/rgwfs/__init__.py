"""
    Filesystem-style access to Ceph RGW buckets.

    The backend stores flat object keys in containers and has neither
    directories nor an atomic rename. This package maps slash-delimited paths
    such as ceph://bucket/dir/file onto keys and emulates the rest:

    - a path is a directory if anything is stored under "key/"
    - listing a directory returns its immediate children, never the directory itself
    - mkdirs writes a zero-byte marker object at "key/"
    - rename copies and then deletes, object by object, without rollback

    Use RGWFileSystem as the entry point.
"""
from .filesystem import RGWFileSystem
from .paths import StorePath
from .structures import FileStatus
from .exc import (
    RGWFSError,
    StorageError,
    PathNotFoundError,
    PathExistsError,
    PathNotEmptyError,
    CapacityExceededError,
    UnsupportedOperationError,
    AuthenticationError,
    InvalidPathError,
    ConfigurationError,
)
