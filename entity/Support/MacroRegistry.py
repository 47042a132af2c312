"""
Macro registry

Named extension callables registered per type. Resolution walks the
receiver type's MRO, so a macro registered on a base class is visible to
its subclasses while a subclass registration stays local to the subclass.
"""

from __future__ import annotations

from typing import Any, Callable, ClassVar, Dict, Optional

from entity.Utils.Logger import logger


class Macro:
    """Macro for extending collection and model functionality."""
    
    def __init__(self, name: str, method: Callable[..., Any], owner: type) -> None:
        self.name = name
        self.method = method
        self.owner = owner
    
    def bind(self, instance: Any) -> Callable[..., Any]:
        """Bind the macro to a receiver passed as first argument."""
        def macro_method(*args: Any, **kwargs: Any) -> Any:
            return self.method(instance, *args, **kwargs)
        
        macro_method.__name__ = self.name
        return macro_method
    
    def __repr__(self) -> str:
        return f"Macro({self.owner.__name__}.{self.name})"


class MacroRegistry:
    """Registry of macros scoped per type."""
    
    def __init__(self) -> None:
        self._macros: Dict[type, Dict[str, Macro]] = {}
    
    def register(self, owner: type, name: str, method: Callable[..., Any]) -> None:
        """Register a macro, replacing any macro of the same name on owner."""
        self._macros.setdefault(owner, {})[name] = Macro(name, method, owner)
        logger.debug("Macro registered", {'owner': owner.__name__, 'name': name})
    
    def get(self, owner: type, name: str) -> Optional[Macro]:
        """Get a macro by name from owner or its nearest ancestor."""
        for klass in owner.__mro__:
            macros = self._macros.get(klass)
            if macros and name in macros:
                return macros[name]
        return None
    
    def has(self, owner: type, name: str) -> bool:
        """Check if macro exists for owner or an ancestor."""
        return self.get(owner, name) is not None
    
    def all(self, owner: type) -> Dict[str, Macro]:
        """Get all macros visible from owner."""
        result: Dict[str, Macro] = {}
        for klass in reversed(owner.__mro__):
            result.update(self._macros.get(klass, {}))
        return result
    
    def flush(self, owner: Optional[type] = None) -> None:
        """Remove the macros of owner, or of every type."""
        if owner is None:
            self._macros.clear()
        else:
            self._macros.pop(owner, None)
        logger.debug("Macros flushed", {'owner': owner.__name__ if owner else 'all'})


# Global macro registry
macro_registry = MacroRegistry()


class Macroable:
    """Mixin dispatching unknown method names to registered macros."""
    
    _macro_registry: ClassVar[MacroRegistry] = macro_registry
    
    @classmethod
    def macro(cls, name: str, method: Callable[..., Any]) -> None:
        """Register a custom macro."""
        cls._macro_registry.register(cls, name, method)
    
    @classmethod
    def has_macro(cls, name: str) -> bool:
        """Check if macro is registered."""
        return cls._macro_registry.has(cls, name)
    
    @classmethod
    def flush_macros(cls) -> None:
        """Flush the existing macros of this type."""
        cls._macro_registry.flush(cls)
    
    @classmethod
    def use_macro_registry(cls, registry: MacroRegistry) -> None:
        """Consult the given registry for this type and its subclasses."""
        cls._macro_registry = registry
    
    def _resolve_macro(self, name: str) -> Optional[Callable[..., Any]]:
        """Get the macro registered under name bound to this instance."""
        macro = type(self)._macro_registry.get(type(self), name)
        return macro.bind(self) if macro is not None else None
