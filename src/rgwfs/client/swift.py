"""Ceph RGW access through its Swift-compatible API."""
import datetime
import email.utils
import functools
import typing as t

import requests
import zirconium as zr
import zrlog
from autoinject import injector
from swiftclient.client import Connection, ClientException

from rgwfs.exc import StorageError, PathNotFoundError, AuthenticationError
from rgwfs.structures import StoredObject
from .base import BaseObjectClient, DEFAULT_CHUNK_SIZE, Uploadable


def wrap_swift_errors(cb):
    """Converts swiftclient and connection errors into rgwfs errors with recoverable set properly."""

    @functools.wraps(cb)
    def _inner(*args, **kwargs):
        try:
            return cb(*args, **kwargs)
        except ClientException as ex:
            status = ex.http_status
            if status == 404:
                raise PathNotFoundError(f"Swift: Resource not found: {str(ex)}", 2004) from ex
            elif status in (401, 403):
                raise StorageError(f"Swift: Access denied: {str(ex)}", 2005) from ex
            elif status is None or status >= 500:
                raise StorageError(f"Swift: {ex.__class__.__name__}: {str(ex)}", 2001, True) from ex
            raise StorageError(f"Swift: {ex.__class__.__name__}: {str(ex)}", 2000) from ex
        except requests.ConnectionError as ex:
            raise StorageError(f"Swift: Connection error: {ex.__class__.__name__}: {str(ex)}", 2002, True) from ex
        except requests.Timeout as ex:
            raise StorageError(f"Swift: Connection timeout error: {ex.__class__.__name__}: {str(ex)}", 2003, True) from ex

    return _inner


def _parse_listing_time(value: t.Optional[str]) -> t.Optional[datetime.datetime]:
    if not value:
        return None
    dt = datetime.datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    return dt


def _parse_header_time(value: t.Optional[str]) -> t.Optional[datetime.datetime]:
    if not value:
        return None
    return email.utils.parsedate_to_datetime(value)


class SwiftObjectClient(BaseObjectClient):
    """Object client backed by python-swiftclient.

        Two authentication modes are supported, selected by rgwfs.auth_method:

        - basic (default): v1 auth against rgwfs.uri with username and password
        - keystone: Keystone v3 against rgwfs.auth_uri, scoped to a project by
          tenant_name/tenant_id within domain_name
    """

    config: zr.ApplicationConfig = None

    @injector.construct
    def __init__(self, connection: t.Optional[Connection] = None):
        self._connection = connection
        self._log = zrlog.get_logger("rgwfs.swift")

    def connection(self) -> Connection:
        if self._connection is None:
            self._connection = self._build_connection()
        return self._connection

    def _build_connection(self) -> Connection:
        username = self.config.as_str(("rgwfs", "username"), default=None)
        password = self.config.as_str(("rgwfs", "password"), default=None)
        if self.config.as_str(("rgwfs", "auth_method"), default="basic") == "keystone":
            domain = self.config.as_str(("rgwfs", "domain_name"), default=None)
            return Connection(
                authurl=self.config.as_str(("rgwfs", "auth_uri"), default=None),
                user=username,
                key=password,
                auth_version="3",
                os_options={
                    "project_name": self.config.as_str(("rgwfs", "tenant_name"), default=None),
                    "project_id": self.config.as_str(("rgwfs", "tenant_id"), default=None),
                    "user_domain_name": domain,
                    "project_domain_name": domain,
                }
            )
        return Connection(
            authurl=self.config.as_str(("rgwfs", "uri"), default=None),
            user=username,
            key=password,
            auth_version="1"
        )

    def authenticate(self):
        try:
            self.connection().get_auth()
        except (ClientException, requests.RequestException) as ex:
            self._log.exception("Swift authentication failed")
            raise AuthenticationError("Failed to create account! Please check your user information") from ex

    @wrap_swift_errors
    def list_objects(self,
                     container: str,
                     prefix: str = "",
                     delimiter: str = "",
                     limit: t.Optional[int] = None,
                     marker: str = "") -> list[StoredObject]:
        _, listing = self.connection().get_container(
            container,
            marker=marker or None,
            limit=limit,
            prefix=prefix or None,
            delimiter=delimiter or None
        )
        results = []
        for entry in listing:
            if 'subdir' in entry:
                results.append(StoredObject(entry['subdir'], is_subdir=True))
            else:
                results.append(StoredObject(
                    entry['name'],
                    int(entry.get('bytes', 0)),
                    _parse_listing_time(entry.get('last_modified'))
                ))
        return results

    def container_exists(self, container: str) -> bool:
        try:
            self._head_container(container)
            return True
        except PathNotFoundError:
            return False

    @wrap_swift_errors
    def _head_container(self, container: str) -> dict:
        return self.connection().head_container(container)

    @wrap_swift_errors
    def create_container(self, container: str):
        self.connection().put_container(container)

    @wrap_swift_errors
    def head_object(self, container: str, key: str) -> StoredObject:
        headers = self.connection().head_object(container, key)
        return StoredObject(
            key,
            int(headers.get('content-length', 0)),
            _parse_header_time(headers.get('last-modified'))
        )

    @wrap_swift_errors
    def download_object(self, container: str, key: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> t.Iterable[bytes]:
        _, body = self.connection().get_object(container, key, resp_chunk_size=chunk_size)
        return body

    @wrap_swift_errors
    def upload_object(self, container: str, key: str, data: Uploadable):
        if isinstance(data, bytearray):
            data = bytes(data)
        self.connection().put_object(container, key, contents=data)

    @wrap_swift_errors
    def delete_object(self, container: str, key: str):
        self.connection().delete_object(container, key)
