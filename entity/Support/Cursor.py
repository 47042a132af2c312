from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from entity.Collection import Collection

_MISSING = object()


class Cursor:
    """Bidirectional position over the keys of a collection."""
    
    def __init__(self, collection: 'Collection[Any]') -> None:
        self.collection = collection
        self.position = 0
    
    def key(self) -> Any:
        """Get the key at the current position, or None past either end."""
        keys = list(self.collection.all())
        if 0 <= self.position < len(keys):
            return keys[self.position]
        return None
    
    def current(self, default: Any = None) -> Any:
        """Get the value at the current position."""
        key = self._key_or_missing()
        if key is _MISSING:
            return default
        return self.collection.get(key)
    
    def next(self) -> 'Cursor':
        """Move one position forward."""
        self.position += 1
        return self
    
    def prev(self) -> 'Cursor':
        """Move one position backward."""
        self.position -= 1
        return self
    
    def valid(self) -> bool:
        """Check whether the cursor points at an item."""
        return self._key_or_missing() is not _MISSING
    
    def rewind(self) -> 'Cursor':
        """Move back to the first item."""
        self.position = 0
        return self
    
    def _key_or_missing(self) -> Optional[Any]:
        keys = list(self.collection.all())
        if 0 <= self.position < len(keys):
            return keys[self.position]
        return _MISSING
    
    def __iter__(self) -> 'Cursor':
        return self
    
    def __next__(self) -> Any:
        if not self.valid():
            raise StopIteration
        item = self.current()
        self.position += 1
        return item
