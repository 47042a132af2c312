from __future__ import annotations

from typing import Any, Callable

from entity.Helpers.helpers import arity_adapter, data_get
from entity.Types import KeySpec


def use_as_callable(value: Any) -> bool:
    """Determine if the given value is callable, but not a string."""
    return not isinstance(value, str) and callable(value)


def value_retriever(value: KeySpec) -> Callable[[Any, Any], Any]:
    """
    Get a value retrieving callback taking (item, key).

    Callables are adapted to the number of arguments they accept; anything
    else is treated as a path resolved against each item.
    """
    if use_as_callable(value):
        return arity_adapter(value, 2)
    
    def retrieve(item: Any, key: Any = None) -> Any:
        return data_get(item, value)
    
    return retrieve
