from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict

from entity.Contracts.ModelInterface import ModelInterface
from entity.Exceptions import UndeclaredFieldError
from entity.Helpers.helpers import json_encode
from entity.Support.MacroRegistry import Macroable
from entity.Utils.Logger import logger

M = TypeVar('M', bound='Model')


class Model(Macroable, ModelInterface, BaseModel):
    """
    Fixed-schema record with a closed set of declared fields.

    Concrete types declare their fields as annotated class attributes:

        class User(Model):
            name: Optional[str] = None
            roles: List[str] = []

    Reading, writing or resetting a name the type does not declare raises
    UndeclaredFieldError.
    """

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=False,
        arbitrary_types_allowed=True,
    )

    def __init__(self, data: Optional[Mapping[str, Any]] = None, /, **fields: Any) -> None:
        values = {**(dict(data) if data else {}), **fields}
        for name in values:
            self._assert_declared(name)
        super().__init__(**values)

    @classmethod
    def make(cls: Type[M], data: Optional[Mapping[str, Any]] = None) -> M:
        """Create a new model instance."""
        return cls(data)

    @classmethod
    def declared_fields(cls) -> List[str]:
        """Get the declared field names in declaration order."""
        return list(cls.model_fields)

    def get(self, key: str) -> Any:
        """Get the value of a declared field."""
        self._assert_declared(key)
        return getattr(self, key)

    def set(self, key: str, value: Any) -> 'Model':
        """Set the value of a declared field."""
        setattr(self, key, value)
        return self

    def replace(self, data: Mapping[str, Any]) -> 'Model':
        """Set several declared fields."""
        for key, value in data.items():
            self.set(key, value)
        return self

    def has(self, key: str) -> bool:
        """Determine if a field is declared."""
        self._assert_declared(key)
        return True

    def filled(self, key: str) -> bool:
        """Determine if a declared field holds a value."""
        return self.get(key) is not None

    def is_empty(self) -> bool:
        """Determine if every declared field is empty."""
        return not any(getattr(self, name) for name in self.declared_fields())

    def delete(self, key: str) -> 'Model':
        """Restore the declared default of a field."""
        self._assert_declared(key)
        field = type(self).model_fields[key]
        self.set(key, None if field.is_required() else field.get_default(call_default_factory=True))
        return self

    def clear(self) -> 'Model':
        """Restore the declared default of every field."""
        for name in self.declared_fields():
            self.delete(name)
        return self

    def to_array(self) -> Dict[str, Any]:
        """Get the field/value mapping in declaration order."""
        return {name: getattr(self, name) for name in self.declared_fields()}

    def json_serialize(self) -> Dict[str, Any]:
        """Convert the model into something JSON serializable."""
        return {
            name: value.json_serialize() if hasattr(value, 'json_serialize') else value
            for name, value in self.to_array().items()
        }

    def to_json(self, escape_unicode: Optional[bool] = None, indent: Optional[int] = None) -> str:
        """Get the model fields as JSON."""
        return json_encode(self.json_serialize(), escape_unicode, indent)

    def clone(self: M) -> M:
        """Get a new instance holding deep copies of the field values."""
        logger.debug("Model cloned", {'model': type(self).__name__})
        return self.model_copy(deep=True)

    def _assert_declared(self, key: str) -> None:
        if key not in type(self).model_fields:
            raise UndeclaredFieldError(key, type(self).__name__)

    def __setattr__(self, name: str, value: Any) -> None:
        if not name.startswith('_'):
            self._assert_declared(name)
        super().__setattr__(name, value)

    def __getattr__(self, name: str) -> Any:
        """Handle macro calls."""
        if name.startswith('_'):
            return super().__getattr__(name)  # type: ignore[misc]

        macro = self._resolve_macro(name)
        if macro is not None:
            return macro

        raise UndeclaredFieldError(name, type(self).__name__)

    def __str__(self) -> str:
        """JSON representation."""
        return self.to_json()
