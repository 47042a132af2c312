"""
Higher order collection proxies

A proxy binds a collection to one of its operations and applies that
operation using each item's own behaviour:

    collection.higher_order('map')('upper')        # item.upper() for each item
    collection.higher_order('sum')('price')        # reads item price
    collection.higher_order('filter').call('is_active')
    collection.higher_order('sort_by').read('profile.age')

The per-item adapters are also exposed as plain builders, ready to pass to
any collection operation directly:

    collection.map(invoke('upper'))
    collection.group_by(read('country'))
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict

from entity.Helpers.helpers import data_get

if TYPE_CHECKING:
    from entity.Collection import Collection

# Proxy modes
CALL = 'call'
READ = 'read'


def invoke(method: str, *args: Any, **kwargs: Any) -> Callable[..., Any]:
    """Build an adapter calling the named method on each item."""
    def adapter(item: Any, key: Any = None) -> Any:
        return getattr(item, method)(*args, **kwargs)
    
    adapter.__name__ = f"invoke_{method}"
    return adapter


def read(path: Any) -> Callable[..., Any]:
    """Build an adapter reading a property or path from each item."""
    def adapter(item: Any, key: Any = None) -> Any:
        return data_get(item, path)
    
    adapter.__name__ = f"read_{path}"
    return adapter


class HigherOrderProxy:
    """Deferred call of a collection operation with a per-item adapter."""
    
    # Proxyable operations and how the proxy builds their adapter
    default_proxies: Dict[str, str] = {
        'average': READ,
        'avg': READ,
        'contains': READ,
        'each': CALL,
        'every': CALL,
        'filter': CALL,
        'first': CALL,
        'flat_map': READ,
        'group_by': READ,
        'key_by': READ,
        'map': CALL,
        'max': READ,
        'min': READ,
        'partition': CALL,
        'reject': CALL,
        'sort_by': READ,
        'sort_by_desc': READ,
        'sum': READ,
        'unique': READ,
    }
    
    def __init__(self, collection: 'Collection[Any]', method: str, mode: str = CALL) -> None:
        self.collection = collection
        self.method = method
        self.mode = mode
    
    def __call__(self, target: Any, *args: Any, **kwargs: Any) -> Any:
        """Apply the operation using the adapter of this proxy's mode."""
        if self.mode == READ:
            if args or kwargs:
                raise TypeError(f"The {self.method} proxy reads a value and takes no extra arguments.")
            return self.read(target)
        return self.call(target, *args, **kwargs)
    
    def call(self, method: str, *args: Any, **kwargs: Any) -> Any:
        """Apply the operation calling method on each item."""
        return self._apply(invoke(method, *args, **kwargs))
    
    def read(self, path: Any) -> Any:
        """Apply the operation reading path from each item."""
        return self._apply(read(path))
    
    def _apply(self, adapter: Callable[..., Any]) -> Any:
        return getattr(self.collection, self.method)(adapter)
    
    def __repr__(self) -> str:
        return f"HigherOrderProxy({self.method}, mode={self.mode})"
