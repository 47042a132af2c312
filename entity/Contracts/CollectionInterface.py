from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Iterator, TypeVar

T = TypeVar('T')


class CollectionInterface(ABC, Generic[T]):
    """
    Collection interface defining the ordered container contract.
    
    Implementations keep keys unique and preserve insertion order, and
    render themselves as JSON when converted to a string.
    """
    
    @abstractmethod
    def get(self, key: Any, default: Any = None) -> Any:
        """Get an item by key."""
        pass
    
    @abstractmethod
    def set(self, key: Any, value: T) -> 'CollectionInterface[T]':
        """Set the item at a key."""
        pass
    
    @abstractmethod
    def has(self, *keys: Any) -> bool:
        """Determine if all keys exist."""
        pass
    
    @abstractmethod
    def remove(self, key: Any) -> 'CollectionInterface[T]':
        """Remove the item at a key."""
        pass
    
    @abstractmethod
    def replace(self, items: Any) -> 'CollectionInterface[T]':
        """Set every key/value of items."""
        pass
    
    @abstractmethod
    def clear(self) -> 'CollectionInterface[T]':
        """Remove all items."""
        pass
    
    @abstractmethod
    def all(self) -> Dict[Any, T]:
        """Get the raw ordered mapping."""
        pass
    
    @abstractmethod
    def count(self) -> int:
        """Get the number of items."""
        pass
    
    @abstractmethod
    def __iter__(self) -> Iterator[T]:
        """Iterate over the values."""
        pass
    
    @abstractmethod
    def json_serialize(self) -> Any:
        """Get the JSON-compatible representation."""
        pass
    
    @abstractmethod
    def __str__(self) -> str:
        """Get the JSON rendering."""
        pass
