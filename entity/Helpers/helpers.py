from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence, Tuple, TypeVar
import inspect
import json

from entity.Types import PathSegments

T = TypeVar('T')

_MISSING = object()


# Value Helpers
def value(value: Any, *args: Any) -> Any:
    """Return value or call callable."""
    return value(*args) if callable(value) else value


def collect(items: Any = None) -> Any:
    """Create collection instance."""
    from entity.Collection import Collection
    return Collection(items)


def tap(value: T, callback: Callable[[T], Any]) -> T:
    """Tap into a value."""
    callback(value)
    return value


# Callable Helpers
def accepted_arguments(callback: Callable[..., Any], available: int) -> int:
    """Count how many of the available positional arguments a callable takes."""
    try:
        signature = inspect.signature(callback)
    except (TypeError, ValueError):
        # Builtins without introspectable signatures take the item only
        return min(1, available)
    
    # Classes and builtins only receive the arguments they require
    required_only = inspect.isclass(callback) or inspect.isbuiltin(callback)

    positional = 0
    for parameter in signature.parameters.values():
        if parameter.kind == inspect.Parameter.VAR_POSITIONAL:
            return min(1, available) if required_only else available
        if parameter.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            if required_only and parameter.default is not inspect.Parameter.empty:
                continue
            positional += 1

    if required_only:
        positional = max(positional, 1)
    return min(positional, available)


def arity_adapter(callback: Callable[..., Any], available: int = 2) -> Callable[..., Any]:
    """Wrap callback so that it receives only the positional arguments it accepts."""
    count = accepted_arguments(callback, available)
    if count >= available:
        return callback
    
    def adapted(*args: Any) -> Any:
        return callback(*args[:count])
    
    return adapted


def call_with_arity(callback: Callable[..., Any], *args: Any) -> Any:
    """Call callback with as many of the given arguments as it accepts."""
    return callback(*args[:accepted_arguments(callback, len(args))])


# Path Helpers
def split_path(key: PathSegments) -> List[Any]:
    """Split a dotted path expression into segments."""
    if isinstance(key, (list, tuple)):
        return list(key)
    if isinstance(key, int) and not isinstance(key, bool):
        return [key]
    return str(key).split('.')


def data_get(target: Any, key: PathSegments, default: Any = None) -> Any:
    """
    Get an item from a nested structure using dot notation.

    A ``*`` segment resolves the remaining path against every element of the
    current level and returns the results as a list. Missing segments return
    the default without raising and nothing is created along the way.
    """
    if key is None:
        return target
    
    segments = split_path(key)
    
    for position, segment in enumerate(segments):
        if segment is None:
            return target
        
        if segment == '*':
            from entity.Support.Arr import Arr
            
            if not Arr.accessible(target):
                return value(default)
            
            remaining = segments[position + 1:]
            result = [data_get(item, remaining, default) for item in Arr.values_of(target)]
            
            if '*' in remaining:
                return list(Arr.collapse(result).values())
            return result
        
        found, target = _get_segment(target, segment)
        if not found:
            return value(default)
    
    return target


def _get_segment(target: Any, segment: Any) -> Tuple[bool, Any]:
    """Read one path segment from target."""
    from entity.Collection import Collection
    from entity.Model import Model
    
    if isinstance(target, Collection):
        candidate = _match_key(target.all(), segment)
        if candidate is _MISSING:
            return False, None
        return True, target.get(candidate)
    
    if isinstance(target, dict) or hasattr(target, 'keys') and hasattr(target, '__getitem__'):
        candidate = _match_key(target, segment)
        if candidate is _MISSING:
            return False, None
        return True, target[candidate]
    
    if isinstance(target, Sequence) and not isinstance(target, (str, bytes)):
        index = _as_index(segment)
        if index is None or index >= len(target):
            return False, None
        return True, target[index]
    
    if isinstance(target, Model):
        if segment in type(target).declared_fields():
            return True, target.get(segment)
        return False, None
    
    if isinstance(segment, str) and not segment.startswith('_') and target is not None \
            and not isinstance(target, (str, bytes, int, float, bool)):
        attribute = getattr(target, segment, _MISSING)
        if attribute is not _MISSING:
            return True, attribute
    
    return False, None


def _match_key(mapping: Any, segment: Any) -> Any:
    """Find the mapping key a path segment refers to."""
    if segment in mapping:
        return segment
    
    index = _as_index(segment)
    if index is not None and index in mapping:
        return index
    
    if isinstance(segment, int) and str(segment) in mapping:
        return str(segment)
    
    return _MISSING


def _as_index(segment: Any) -> Optional[int]:
    """Interpret a path segment as a non-negative integer index."""
    if isinstance(segment, bool):
        return int(segment)
    if isinstance(segment, int):
        return segment if segment >= 0 else None
    if isinstance(segment, str) and segment.isdigit():
        return int(segment)
    return None


# Serialization Helpers
def json_encode(data: Any, escape_unicode: Optional[bool] = None, indent: Optional[int] = None) -> str:
    """Encode data as JSON using the configured escaping and indentation."""
    from entity.Config.settings import get_settings
    
    settings = get_settings()
    return json.dumps(
        data,
        ensure_ascii=settings.json_escape_unicode if escape_unicode is None else escape_unicode,
        indent=settings.json_indent if indent is None else indent,
        default=_json_default
    )


def _json_default(value: Any) -> Any:
    """Serialize nested collections and models, falling back to str()."""
    if hasattr(value, 'json_serialize'):
        return value.json_serialize()
    return str(value)
