"""Object storage clients.

    The backend used by a filesystem is chosen by the rgwfs.client_class
    configuration value, which names a BaseObjectClient subclass by its full
    dotted path.
"""
import importlib

import zirconium as zr

from rgwfs.exc import ConfigurationError
from .base import BaseObjectClient, ObjectHandle
from .memory import MemoryObjectClient


DEFAULT_CLIENT_CLASS = "rgwfs.client.swift.SwiftObjectClient"


def load_client_class(dotted_name: str) -> type:
    module_name, _, class_name = dotted_name.rpartition(".")
    if not module_name:
        raise ConfigurationError(f"Client class [{dotted_name}] should be in format module.Class", 4001)
    try:
        cls = getattr(importlib.import_module(module_name), class_name)
    except ModuleNotFoundError as ex:
        raise ConfigurationError(f"Client module [{module_name}] not found", 4002) from ex
    except AttributeError as ex:
        raise ConfigurationError(f"Client class [{class_name}] not found in [{module_name}]", 4003) from ex
    if not (isinstance(cls, type) and issubclass(cls, BaseObjectClient)):
        raise ConfigurationError(f"[{dotted_name}] is not an object client", 4004)
    return cls


def build_client(config: zr.ApplicationConfig) -> BaseObjectClient:
    return load_client_class(config.as_str(("rgwfs", "client_class"), default=DEFAULT_CLIENT_CLASS))()
