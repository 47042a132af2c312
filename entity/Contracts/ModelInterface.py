from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict


class ModelInterface(ABC):
    """
    Model interface defining the fixed-schema record contract.
    
    Every operation taking a field name only accepts names declared by
    the concrete type.
    """
    
    @abstractmethod
    def get(self, key: str) -> Any:
        """Get the value of a declared field."""
        pass
    
    @abstractmethod
    def set(self, key: str, value: Any) -> 'ModelInterface':
        """Set the value of a declared field."""
        pass
    
    @abstractmethod
    def replace(self, data: Dict[str, Any]) -> 'ModelInterface':
        """Set several declared fields."""
        pass
    
    @abstractmethod
    def has(self, key: str) -> bool:
        """Determine if a field is declared."""
        pass
    
    @abstractmethod
    def is_empty(self) -> bool:
        """Determine if every field is empty."""
        pass
    
    @abstractmethod
    def delete(self, key: str) -> 'ModelInterface':
        """Restore the default value of a field."""
        pass
    
    @abstractmethod
    def clear(self) -> 'ModelInterface':
        """Restore the default value of every field."""
        pass
    
    @abstractmethod
    def to_array(self) -> Dict[str, Any]:
        """Get the field/value mapping."""
        pass
    
    @abstractmethod
    def __str__(self) -> str:
        """Get the JSON rendering."""
        pass
