from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Optional, Union
import math
import random as _random

from entity.Exceptions import InvalidArgumentError
from entity.Helpers.helpers import arity_adapter, data_get, split_path, value as resolve_value
from entity.Support.Comparison import has_textual_form, is_object

ArrayLike = Union[Dict[Any, Any], List[Any], tuple]


class Arr:
    """Laravel-style array helper class working on ordered key/value mappings."""
    
    @staticmethod
    def accessible(value: Any) -> bool:
        """Determine whether the given value is array accessible."""
        from entity.Collection import Collection
        return isinstance(value, (dict, list, tuple, Collection))
    
    @staticmethod
    def exists(data: Any, key: Any) -> bool:
        """Determine if the given key exists in the provided array."""
        from entity.Collection import Collection
        
        if isinstance(data, Collection):
            return data.has(key)
        if isinstance(data, dict):
            return key in data
        if isinstance(data, (list, tuple)):
            return isinstance(key, int) and 0 <= key < len(data)
        return False
    
    @staticmethod
    def to_dict(data: Any) -> Dict[Any, Any]:
        """Get the key/value mapping of a list, tuple, dict or collection."""
        from entity.Collection import Collection
        
        if isinstance(data, Collection):
            return data.all()
        if isinstance(data, dict):
            return dict(data)
        if isinstance(data, (list, tuple)):
            return dict(enumerate(data))
        return {0: data}
    
    @staticmethod
    def values_of(data: Any) -> List[Any]:
        """Get the values of an array-like value."""
        from entity.Collection import Collection
        
        if isinstance(data, Collection):
            return list(data.all().values())
        if isinstance(data, dict):
            return list(data.values())
        if isinstance(data, (list, tuple, set, frozenset)):
            return list(data)
        if data is None:
            return []
        return [data]
    
    @staticmethod
    def is_list(data: Dict[Any, Any]) -> bool:
        """Determine if the keys of a mapping are 0..n-1 in order."""
        return all(
            isinstance(key, int) and not isinstance(key, bool) and key == index
            for index, key in enumerate(data)
        )
    
    @staticmethod
    def wrap(value: Any) -> Union[List[Any], Dict[Any, Any]]:
        """Wrap the given value in an array if it's not already an array."""
        if value is None:
            return []
        return value if isinstance(value, (list, dict)) else [value]
    
    @staticmethod
    def get(data: Dict[Any, Any], key: Any, default: Any = None) -> Any:
        """Get an item from an array using dot notation."""
        if key is None:
            return data
        if isinstance(key, (str, int)) and key in data:
            return data[key]
        return data_get(data, key, default)
    
    @staticmethod
    def has(data: Dict[Any, Any], *keys: Any) -> bool:
        """Check if all of the given items exist in an array using dot notation."""
        if not keys:
            return False
        
        sentinel = object()
        return all(Arr.get(data, key, sentinel) is not sentinel for key in keys)
    
    @staticmethod
    def forget(data: Dict[Any, Any], keys: Any) -> Dict[Any, Any]:
        """Remove one or many array items using dot notation."""
        for key in keys if isinstance(keys, (list, tuple)) else [keys]:
            if key in data:
                del data[key]
                continue
            
            parts = split_path(key)
            current: Any = data
            for part in parts[:-1]:
                if isinstance(current, dict) and part in current:
                    current = current[part]
                else:
                    current = None
                    break
            
            if isinstance(current, dict) and parts[-1] in current:
                del current[parts[-1]]
        
        return data
    
    @staticmethod
    def where(data: Dict[Any, Any], callback: Callable[..., Any]) -> Dict[Any, Any]:
        """Filter the array using the given callback."""
        callback = arity_adapter(callback, 2)
        return {key: item for key, item in data.items() if callback(item, key)}
    
    @staticmethod
    def first(data: ArrayLike, callback: Optional[Callable[..., Any]] = None, default: Any = None) -> Any:
        """Return the first element in an array passing a given truth test."""
        items = Arr.to_dict(data)
        
        if callback is None:
            for item in items.values():
                return item
            return resolve_value(default)
        
        callback = arity_adapter(callback, 2)
        for key, item in items.items():
            if callback(item, key):
                return item
        return resolve_value(default)
    
    @staticmethod
    def last(data: ArrayLike, callback: Optional[Callable[..., Any]] = None, default: Any = None) -> Any:
        """Return the last element in an array passing a given truth test."""
        items = Arr.to_dict(data)
        
        if callback is None:
            for item in reversed(list(items.values())):
                return item
            return resolve_value(default)
        
        callback = arity_adapter(callback, 2)
        for key in reversed(list(items)):
            if callback(items[key], key):
                return items[key]
        return resolve_value(default)
    
    @staticmethod
    def pluck(data: Any, value: Any, key: Any = None) -> Union[List[Any], Dict[Any, Any]]:
        """Pluck an array of values from an array."""
        value_path = split_path(value)
        
        if key is None:
            return [data_get(item, value_path) for item in Arr.values_of(data)]
        
        key_path = split_path(key)
        result: Dict[Any, Any] = {}
        for item in Arr.values_of(data):
            item_key = data_get(item, key_path)
            if is_object(item_key) and has_textual_form(item_key):
                item_key = str(item_key)
            elif isinstance(item_key, bool):
                item_key = int(item_key)
            result[item_key] = data_get(item, value_path)
        return result
    
    @staticmethod
    def flatten(data: Any, depth: Union[int, float] = math.inf) -> List[Any]:
        """Flatten a multi-dimensional array into a single level."""
        result: List[Any] = []
        
        for item in Arr.values_of(data):
            if not Arr.accessible(item):
                result.append(item)
            elif depth == 1:
                result.extend(Arr.values_of(item))
            else:
                result.extend(Arr.flatten(item, depth - 1))
        
        return result
    
    @staticmethod
    def collapse(data: Any) -> Dict[Any, Any]:
        """Collapse an array of arrays into a single array."""
        return Arr.merge(*[item for item in Arr.values_of(data) if Arr.accessible(item)])
    
    @staticmethod
    def merge(*arrays: Any) -> Dict[Any, Any]:
        """Merge arrays, appending integer keys and overwriting string keys."""
        result: Dict[Any, Any] = {}
        next_index = 0
        
        for array in arrays:
            for key, item in Arr.to_dict(array).items():
                if isinstance(key, int) and not isinstance(key, bool):
                    result[next_index] = item
                    next_index += 1
                else:
                    result[key] = item
        
        return result
    
    @staticmethod
    def cross_join(*arrays: Any) -> List[List[Any]]:
        """Cross join the given arrays, returning all possible permutations."""
        result: List[List[Any]] = [[]]
        for array in arrays:
            new_result: List[List[Any]] = []
            for existing in result:
                for item in Arr.values_of(array):
                    new_result.append(existing + [item])
            result = new_result
        
        return result
    
    @staticmethod
    def except_(data: Dict[Any, Any], keys: Iterable[Any]) -> Dict[Any, Any]:
        """Get all of the given array except for a specified array of keys."""
        excluded = list(keys)
        return {key: item for key, item in data.items() if key not in excluded}
    
    @staticmethod
    def only(data: Dict[Any, Any], keys: Iterable[Any]) -> Dict[Any, Any]:
        """Get a subset of the items from the given array."""
        wanted = list(keys)
        return {key: item for key, item in data.items() if key in wanted}
    
    @staticmethod
    def prepend(data: Dict[Any, Any], value: Any, key: Any = None) -> Dict[Any, Any]:
        """Push an item onto the beginning of an array."""
        if key is not None:
            result = {key: value}
            result.update((k, v) for k, v in data.items() if k != key)
            return result
        
        # Integer keys are renumbered behind the new first item
        return Arr.merge([value], data)
    
    @staticmethod
    def pull(data: Dict[Any, Any], key: Any, default: Any = None) -> Any:
        """Get a value from the array, and remove it."""
        value = Arr.get(data, key, default)
        Arr.forget(data, key)
        return value
    
    @staticmethod
    def combine(keys: Any, values: Any) -> Dict[Any, Any]:
        """Create an array by using one array for keys and another for its values."""
        key_list, value_list = Arr.values_of(keys), Arr.values_of(values)
        if len(key_list) != len(value_list):
            raise InvalidArgumentError(
                "Both parameters should have an equal number of elements"
            )
        return dict(zip(key_list, value_list))
    
    @staticmethod
    def random(data: Any, number: Optional[int] = None, seed: Optional[int] = None) -> Any:
        """Get one or a specified number of random values from an array."""
        items = Arr.values_of(data)
        requested = 1 if number is None else number
        count = len(items)
        
        if requested < 0:
            raise InvalidArgumentError(f"You requested {requested} items, a count cannot be negative.")
        if requested > count:
            raise InvalidArgumentError(
                f"You requested {requested} items, but there are only {count} items available."
            )
        
        generator = Arr._generator(seed)
        
        if number is None:
            return items[generator.randrange(count)]
        
        # Sampled values keep their original relative order
        return [items[index] for index in sorted(generator.sample(range(count), requested))]
    
    @staticmethod
    def shuffle(data: Any, seed: Optional[int] = None) -> List[Any]:
        """Shuffle the given array and return the result."""
        result = Arr.values_of(data)
        Arr._generator(seed).shuffle(result)
        return result
    
    @staticmethod
    def _generator(seed: Optional[int] = None) -> Any:
        """Get a seeded random generator, or the shared one."""
        if seed is None:
            from entity.Config.settings import get_settings
            seed = get_settings().random_seed
        
        return _random.Random(seed) if seed is not None else _random
