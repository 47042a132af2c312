"""Ordered key/value collections with a fluent transformation API."""

from __future__ import annotations

from .Collection import Collection
from .Model import Model
from .Exceptions import (
    EntityException,
    InvalidArgumentError,
    UndeclaredFieldError,
    UnknownOperationError,
    UnknownProxyError,
)
from .Helpers import collect, data_get, value
from .Support import Arr, Cursor, HigherOrderProxy, MacroRegistry, invoke, read
from .Config import EntitySettings, configure, get_settings

__all__ = [
    "Collection",
    "Model",
    "EntityException",
    "InvalidArgumentError",
    "UndeclaredFieldError",
    "UnknownOperationError",
    "UnknownProxyError",
    "collect",
    "data_get",
    "value",
    "Arr",
    "Cursor",
    "HigherOrderProxy",
    "MacroRegistry",
    "invoke",
    "read",
    "EntitySettings",
    "configure",
    "get_settings"
]
