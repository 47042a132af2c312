from __future__ import annotations

from typing import Any, Callable, ClassVar, Dict, Iterable, Iterator, List, Optional, Tuple, Type, Union
from functools import cmp_to_key
import math

from entity.Contracts.CollectionInterface import CollectionInterface
from entity.Exceptions import InvalidArgumentError, UnknownOperationError, UnknownProxyError
from entity.Helpers.helpers import arity_adapter, call_with_arity, data_get, json_encode, value as resolve_value
from entity.Support.Arr import Arr
from entity.Support.Comparison import (
    MISSING,
    equals,
    has_textual_form,
    is_object,
    loose_equals,
    operator_for_where,
    spaceship,
    strict_equals,
)
from entity.Support.Cursor import Cursor
from entity.Support.HigherOrderProxy import CALL, HigherOrderProxy
from entity.Support.MacroRegistry import Macroable
from entity.Support.ValueRetriever import use_as_callable, value_retriever
from entity.Types import KeySpec, T
from entity.Utils.Logger import logger


def _is_index(key: Any) -> bool:
    return isinstance(key, int) and not isinstance(key, bool)


class Collection(Macroable, CollectionInterface[T]):
    """Laravel-style ordered key/value collection."""

    # Operations reachable through higher_order(), with their proxy mode
    _proxies: ClassVar[Dict[str, str]] = dict(HigherOrderProxy.default_proxies)

    def __init__(self, items: Any = None) -> None:
        self._items: Dict[Any, T] = {}
        self._next_index = 0
        self.replace(self._get_array_by_items(items))

    @classmethod
    def make(cls, items: Any = None) -> 'Collection[Any]':
        """Create a new collection instance."""
        return cls(items)

    @classmethod
    def wrap(cls, value: Any) -> 'Collection[Any]':
        """Wrap a value in a collection if applicable."""
        if isinstance(value, Collection):
            return cls(value)
        return cls(Arr.wrap(value))

    @classmethod
    def unwrap(cls, value: Any) -> Any:
        """Get the underlying items from the given collection if applicable."""
        if isinstance(value, Collection):
            return value.all()
        return value

    @classmethod
    def times(cls, number: int, callback: Optional[Callable[..., Any]] = None) -> 'Collection[Any]':
        """Create a collection by invoking callback a given number of times."""
        if number < 1:
            return cls()

        collection = cls(list(range(1, number + 1)))
        if callback is None:
            return collection
        return collection.map(callback)

    # Core methods
    def all(self) -> Dict[Any, T]:
        """Get all items as an ordered key/value mapping."""
        return dict(self._items)

    def replace(self, items: Any) -> 'Collection[T]':
        """Set every key/value of the given items, replacing existing keys."""
        for key, item in self._get_array_by_items(items).items():
            # Stored as given; a None key becomes the empty string key
            self.set(self._normalize_key(key), item)
        return self

    def set(self, key: Any, value: T) -> 'Collection[T]':
        """Set the item at a key; a None key appends."""
        if key is None:
            self._items[self._next_index] = value
            self._next_index += 1
            return self

        key = self._normalize_key(key)
        self._items[key] = value
        if _is_index(key) and key >= self._next_index:
            self._next_index = key + 1
        return self

    def put(self, key: Any, value: T) -> 'Collection[T]':
        """Put an item in the collection by key."""
        return self.set(key, value)

    def get(self, key: Any, default: Any = None) -> Any:
        """Get an item from the collection by key."""
        key = self._normalize_key(key)
        if key in self._items:
            return self._items[key]
        return resolve_value(default)

    def has(self, *keys: Any) -> bool:
        """Determine if all of the given keys exist in the collection."""
        if len(keys) == 1 and isinstance(keys[0], (list, tuple)):
            keys = tuple(keys[0])
        return all(self._normalize_key(key) in self._items for key in keys)

    def remove(self, key: Any) -> 'Collection[T]':
        """Remove an item from the collection by key."""
        self._items.pop(self._normalize_key(key), None)
        return self

    def forget(self, keys: Any) -> 'Collection[T]':
        """Remove one or many items from the collection by key."""
        for key in keys if isinstance(keys, (list, tuple)) else [keys]:
            self.remove(key)
        return self

    def clear(self) -> 'Collection[T]':
        """Remove all items from the collection."""
        self._items = {}
        self._next_index = 0
        return self

    def count(self) -> int:
        """Get the number of items."""
        return len(self._items)

    def is_empty(self) -> bool:
        """Check if the collection is empty."""
        return not self._items

    def is_not_empty(self) -> bool:
        """Check if the collection is not empty."""
        return not self.is_empty()

    def keys(self) -> 'Collection[Any]':
        """Get the keys of the collection items."""
        return self._new(list(self._items))

    def values(self) -> 'Collection[T]':
        """Reset the keys on the underlying items."""
        return self._new(list(self._items.values()))

    def items(self) -> Iterator[Tuple[Any, T]]:
        """Iterate over key/value pairs."""
        for key, item in list(self._items.items()):
            yield key, item

    def cursor(self) -> Cursor:
        """Get a bidirectional cursor over the collection."""
        return Cursor(self)

    # Adding/Removing items
    def push(self, *values: T) -> 'Collection[T]':
        """Push one or more items onto the end of the collection."""
        for value in values:
            self.set(None, value)
        return self

    def pop(self) -> Optional[T]:
        """Remove and return the last item."""
        if not self._items:
            return None

        key = next(reversed(list(self._items)))
        value = self._items.pop(key)
        self._reset_next_index()
        return value

    def shift(self) -> Optional[T]:
        """Remove and return the first item, renumbering integer keys."""
        if not self._items:
            return None

        key = next(iter(self._items))
        value = self._items.pop(key)
        self._renumber(list(self._items.items()))
        return value

    def prepend(self, value: T, key: Any = None) -> 'Collection[T]':
        """Push an item onto the beginning of the collection."""
        self._items = Arr.prepend(self._items, value, None if key is None else self._normalize_key(key))
        self._reset_next_index()
        return self

    def pull(self, key: Any, default: Any = None) -> Any:
        """Get and remove an item from the collection."""
        return Arr.pull(self._items, key, default)

    def splice(self, offset: int, length: Optional[int] = None, replacement: Any = None) -> 'Collection[T]':
        """Splice a portion of the collection, returning the removed items."""
        pairs = list(self._items.items())
        start, stop = self._slice_bounds(len(pairs), offset, length)

        inserted: List[Tuple[Any, Any]] = []
        if replacement is not None:
            inserted = [(None, item) for item in Arr.values_of(self._get_array_by_items(replacement))]

        removed = pairs[start:stop]
        self._renumber(pairs[:start] + inserted + pairs[stop:])
        return self._new(self._renumbered(removed))

    def concat(self, source: Iterable[Any]) -> 'Collection[T]':
        """Push all of the given items onto a copy of the collection."""
        result = self._new(self)
        for item in Arr.values_of(self._get_array_by_items(source)):
            result.push(item)
        return result

    def transform(self, callback: Callable[..., T]) -> 'Collection[T]':
        """Transform each item in the collection using a callback."""
        self._items = self.map(callback).all()
        return self

    def each(self, callback: Callable[..., Any]) -> 'Collection[T]':
        """Execute a callback over each item until it returns False."""
        callback = arity_adapter(callback, 2)
        for key, item in list(self._items.items()):
            if callback(item, key) is False:
                break
        return self

    def each_spread(self, callback: Callable[..., Any]) -> 'Collection[T]':
        """Execute a callback over each nested chunk of items."""
        return self.each(lambda chunk, key: call_with_arity(callback, *Arr.values_of(chunk), key))

    def tap(self, callback: Callable[['Collection[T]'], Any]) -> 'Collection[T]':
        """Pass a copy of the collection to the callback and return the collection."""
        callback(self._new(self._items))
        return self

    # Transforming
    def map(self, callback: Callable[..., Any]) -> 'Collection[Any]':
        """Run a map over each of the items."""
        callback = arity_adapter(callback, 2)
        return self._new({key: callback(item, key) for key, item in self._items.items()})

    def map_with_keys(self, callback: Callable[..., Any]) -> 'Collection[Any]':
        """Run an associative map over each of the items."""
        callback = arity_adapter(callback, 2)
        result: Dict[Any, Any] = {}

        for key, item in self._items.items():
            for map_key, map_value in self._pairs_of(callback(item, key)):
                # A repeated key keeps its first position and takes the later value
                result[self._normalize_key(map_key)] = map_value

        return self._new(result)

    def map_to_dictionary(self, callback: Callable[..., Any]) -> 'Collection[Any]':
        """Run a dictionary map over the items, grouping values by returned key."""
        callback = arity_adapter(callback, 2)
        dictionary: Dict[Any, List[Any]] = {}

        for key, item in self._items.items():
            pairs = self._pairs_of(callback(item, key))
            if not pairs:
                continue
            group_key, group_value = pairs[0]
            dictionary.setdefault(self._normalize_key(group_key), []).append(group_value)

        return self._new(dictionary)

    def map_to_groups(self, callback: Callable[..., Any]) -> 'Collection[Any]':
        """Run a grouping map over the items."""
        return self.map_to_dictionary(callback).map(lambda group: self._new(group))

    def map_spread(self, callback: Callable[..., Any]) -> 'Collection[Any]':
        """Run a map over each nested chunk of items."""
        return self.map(lambda chunk, key: call_with_arity(callback, *Arr.values_of(chunk), key))

    def flat_map(self, callback: Callable[..., Any]) -> 'Collection[Any]':
        """Map a collection and flatten the result by a single level."""
        return self.map(callback).collapse()

    def map_into(self, klass: Type[Any]) -> 'Collection[Any]':
        """Map the values into a new class."""
        return self.map(lambda item, key: call_with_arity(klass, item, key))

    # Filtering and searching
    def filter(self, callback: Optional[Callable[..., Any]] = None) -> 'Collection[T]':
        """Run a filter over each of the items."""
        if callback is not None:
            return self._new(Arr.where(self._items, callback))
        return self._new({key: item for key, item in self._items.items() if item})

    def reject(self, callback: Any) -> 'Collection[T]':
        """Create a collection of all elements that do not pass a given truth test."""
        if use_as_callable(callback):
            callback = arity_adapter(callback, 2)
            return self.filter(lambda item, key: not callback(item, key))
        return self.filter(lambda item: not loose_equals(item, callback))

    def where(self, key: Any, operator: Any = MISSING, value: Any = MISSING) -> 'Collection[T]':
        """Filter items by the given key value pair."""
        return self.filter(operator_for_where(key, operator, value))

    def where_strict(self, key: Any, value: Any) -> 'Collection[T]':
        """Filter items by the given key value pair using strict comparison."""
        return self.where(key, '===', value)

    def where_in(self, key: Any, values: Any, strict: bool = False) -> 'Collection[T]':
        """Filter items by the given key value pair."""
        candidates = Arr.values_of(self._get_array_by_items(values))
        return self.filter(
            lambda item: any(equals(data_get(item, key), candidate, strict) for candidate in candidates)
        )

    def where_in_strict(self, key: Any, values: Any) -> 'Collection[T]':
        """Filter items by the given key value pair using strict comparison."""
        return self.where_in(key, values, True)

    def where_not_in(self, key: Any, values: Any, strict: bool = False) -> 'Collection[T]':
        """Filter items by the given key value pair."""
        candidates = Arr.values_of(self._get_array_by_items(values))
        return self.reject(
            lambda item: any(equals(data_get(item, key), candidate, strict) for candidate in candidates)
        )

    def where_not_in_strict(self, key: Any, values: Any) -> 'Collection[T]':
        """Filter items by the given key value pair using strict comparison."""
        return self.where_not_in(key, values, True)

    def where_instance_of(self, klass: Union[type, Tuple[type, ...]]) -> 'Collection[T]':
        """Filter the items, removing any items that don't match the given type."""
        return self.filter(lambda item: isinstance(item, klass))

    def first(self, callback: Optional[Callable[..., Any]] = None, default: Any = None) -> Any:
        """Get the first item from the collection."""
        return Arr.first(self._items, callback, default)

    def last(self, callback: Optional[Callable[..., Any]] = None, default: Any = None) -> Any:
        """Get the last item from the collection."""
        return Arr.last(self._items, callback, default)

    def first_where(self, key: Any, operator: Any = MISSING, value: Any = MISSING) -> Any:
        """Get the first item by the given key value pair."""
        return self.first(operator_for_where(key, operator, value))

    def contains(self, key: Any, operator: Any = MISSING, value: Any = MISSING) -> bool:
        """Determine if an item exists in the collection."""
        if operator is MISSING and value is MISSING:
            if use_as_callable(key):
                placeholder = object()
                return self.first(key, placeholder) is not placeholder
            return any(loose_equals(item, key) for item in self._items.values())

        return self.contains(operator_for_where(key, operator, value))

    def contains_strict(self, key: Any, value: Any = MISSING) -> bool:
        """Determine if an item exists in the collection using strict comparison."""
        if value is not MISSING:
            return self.contains(lambda item: strict_equals(data_get(item, key), value))

        if use_as_callable(key):
            return self.contains(key)

        return any(strict_equals(item, key) for item in self._items.values())

    def every(self, key: Any, operator: Any = MISSING, value: Any = MISSING) -> bool:
        """Determine if all items pass the given truth test."""
        if operator is MISSING and value is MISSING:
            callback = value_retriever(key)
            return all(callback(item, item_key) for item_key, item in self._items.items())

        return self.every(operator_for_where(key, operator, value))

    def search(self, value: Any, strict: bool = False) -> Any:
        """Search the collection for a given value and return the corresponding key."""
        if not use_as_callable(value):
            for key, item in self._items.items():
                if equals(item, value, strict):
                    return key
            return None

        callback = arity_adapter(value, 2)
        for key, item in self._items.items():
            if callback(item, key):
                return key
        return None

    # Aggregating
    def reduce(self, callback: Callable[..., Any], initial: Any = None) -> Any:
        """Reduce the collection to a single value."""
        callback = arity_adapter(callback, 3)
        result = initial
        for key, item in self._items.items():
            result = callback(result, item, key)
        return result

    def sum(self, callback: KeySpec = None) -> Any:
        """Get the sum of the given values."""
        callback = value_retriever(callback)

        def add(result: Any, item: Any, key: Any) -> Any:
            value = callback(item, key)
            return result if value is None else result + value

        return self.reduce(add, 0)

    def avg(self, callback: KeySpec = None) -> Any:
        """Get the average value of a given key."""
        callback = value_retriever(callback)
        items = self.map(callback).filter(lambda item: item is not None)

        count = items.count()
        if count:
            return items.sum() / count
        return None

    def average(self, callback: KeySpec = None) -> Any:
        """Alias for the "avg" method."""
        return self.avg(callback)

    def median(self, key: KeySpec = None) -> Any:
        """Get the median of a given key."""
        values = (self.pluck(key) if key is not None else self) \
            .filter(lambda item: item is not None) \
            .sort() \
            .values()

        count = values.count()
        if count == 0:
            return None

        middle = count // 2
        if count % 2:
            return values.get(middle)

        return self._new([values.get(middle - 1), values.get(middle)]).avg()

    def mode(self, key: KeySpec = None) -> Optional[List[Any]]:
        """Get the values tied for the highest frequency, in ascending order."""
        if self.count() == 0:
            return None

        collection = self.pluck(key) if key is not None else self
        counts: Dict[Any, int] = {}
        for item in collection:
            counts[item] = counts.get(item, 0) + 1

        highest = max(counts.values())
        return sorted(
            (item for item, frequency in counts.items() if frequency == highest),
            key=cmp_to_key(spaceship)
        )

    def max(self, callback: KeySpec = None) -> Any:
        """Get the max value of a given key."""
        callback = value_retriever(callback)

        def larger(result: Any, item: Any, key: Any) -> Any:
            value = callback(item, key)
            if value is None:
                return result
            return value if result is None or spaceship(value, result) > 0 else result

        return self.filter(lambda item: item is not None).reduce(larger)

    def min(self, callback: KeySpec = None) -> Any:
        """Get the min value of a given key."""
        callback = value_retriever(callback)

        def smaller(result: Any, value: Any) -> Any:
            return value if result is None or spaceship(value, result) < 0 else result

        return self.map(callback).filter(lambda value: value is not None).reduce(smaller)

    def implode(self, value: Any, glue: Optional[str] = None) -> str:
        """Concatenate values of a given key as a string."""
        first = self.first()

        if Arr.accessible(first) or is_object(first):
            return (glue or '').join(self._stringify(item) for item in self.pluck(value))

        return str(value).join(self._stringify(item) for item in self._items.values())

    # Sorting
    def sort(self, callback: Optional[Callable[[Any, Any], int]] = None) -> 'Collection[T]':
        """Sort through each item with an optional comparator, keeping keys."""
        comparator = callback if callback is not None else spaceship
        pairs = sorted(self._items.items(), key=cmp_to_key(lambda a, b: comparator(a[1], b[1])))
        return self._new(dict(pairs))

    def sort_by(self, callback: Any, descending: bool = False) -> 'Collection[T]':
        """Sort the collection using the given key spec, keeping keys."""
        if isinstance(callback, list):
            return self._sort_by_many(callback, descending)

        callback = value_retriever(callback)

        # Resolve each comparator value once, then order the keys by it
        results = [(key, callback(item, key)) for key, item in self._items.items()]
        results.sort(key=cmp_to_key(lambda a, b: spaceship(a[1], b[1])), reverse=descending)

        return self._new({key: self._items[key] for key, _ in results})

    def _sort_by_many(self, comparisons: List[Any], descending: bool = False) -> 'Collection[T]':
        """Sort by several key specs, each optionally paired with 'asc' or 'desc'."""
        criteria = []
        for comparison in comparisons:
            direction = 'desc' if descending else 'asc'
            if isinstance(comparison, tuple):
                comparison, direction = comparison[0], comparison[1] if len(comparison) > 1 else direction
            criteria.append((value_retriever(comparison), str(direction).lower() == 'desc'))

        def compare_pairs(a: Tuple[Any, Any], b: Tuple[Any, Any]) -> int:
            for retriever, reverse in criteria:
                result = spaceship(retriever(a[1], a[0]), retriever(b[1], b[0]))
                if result != 0:
                    return -result if reverse else result
            return 0

        pairs = sorted(self._items.items(), key=cmp_to_key(compare_pairs))
        return self._new(dict(pairs))

    def sort_by_desc(self, callback: Any) -> 'Collection[T]':
        """Sort the collection in descending order using the given key spec."""
        return self.sort_by(callback, True)

    def sort_keys(self, descending: bool = False) -> 'Collection[T]':
        """Sort the collection keys."""
        pairs = sorted(self._items.items(), key=cmp_to_key(lambda a, b: spaceship(a[0], b[0])), reverse=descending)
        return self._new(dict(pairs))

    def sort_keys_desc(self) -> 'Collection[T]':
        """Sort the collection keys in descending order."""
        return self.sort_keys(True)

    def reverse(self) -> 'Collection[T]':
        """Reverse items order, keeping keys."""
        return self._new(dict(reversed(list(self._items.items()))))

    def shuffle(self, seed: Optional[int] = None) -> 'Collection[T]':
        """Shuffle the items in the collection."""
        return self._new(Arr.shuffle(self._items, seed))

    # Grouping and partitioning
    def group_by(self, group_by: Any, preserve_keys: bool = False) -> 'Collection[Any]':
        """Group an associative array by a field, a callback or a list of them."""
        next_groups: List[Any] = []
        if isinstance(group_by, list):
            group_by, next_groups = group_by[0], group_by[1:]

        retriever = value_retriever(group_by)
        results: Dict[Any, Collection[Any]] = {}

        for key, item in self._items.items():
            group_keys = retriever(item, key)
            if not isinstance(group_keys, list):
                group_keys = [group_keys]

            for group_key in group_keys:
                group_key = self._normalize_key(group_key)
                if is_object(group_key) and has_textual_form(group_key):
                    group_key = str(group_key)
                if group_key not in results:
                    results[group_key] = self._new()
                results[group_key].set(key if preserve_keys else None, item)

        result = self._new(results)

        if next_groups:
            return result.map(lambda group: group.group_by(list(next_groups), preserve_keys))

        return result

    def key_by(self, key_by: Any) -> 'Collection[T]':
        """Key an associative array by a field or using a callback."""
        retriever = value_retriever(key_by)
        results: Dict[Any, T] = {}

        for key, item in self._items.items():
            resolved_key = retriever(item, key)
            if is_object(resolved_key):
                resolved_key = str(resolved_key)
            results[self._normalize_key(resolved_key)] = item

        return self._new(results)

    def partition(self, key: Any, operator: Any = MISSING, value: Any = MISSING) -> 'Collection[Collection[T]]':
        """Partition the collection into [failing, passing] using the given test."""
        if operator is MISSING and value is MISSING:
            callback = value_retriever(key)
        else:
            callback = operator_for_where(key, operator, value)

        failing, passing = self._new(), self._new()
        for item_key, item in self._items.items():
            (passing if callback(item, item_key) else failing).set(item_key, item)

        return self._new([failing, passing])

    # Set operations
    def unique(self, key: KeySpec = None, strict: bool = False) -> 'Collection[T]':
        """Return only unique items from the collection."""
        callback = value_retriever(key)
        exists: List[Any] = []

        def seen(item: Any, item_key: Any) -> bool:
            identifier = callback(item, item_key)
            if any(equals(identifier, existing, strict) for existing in exists):
                return True
            exists.append(identifier)
            return False

        return self.reject(seen)

    def unique_strict(self, key: KeySpec = None) -> 'Collection[T]':
        """Return only unique items from the collection using strict comparison."""
        return self.unique(key, True)

    def diff(self, items: Any) -> 'Collection[T]':
        """Get the items in the collection that are not present in the given items."""
        others = Arr.values_of(self._get_array_by_items(items))
        return self.filter(lambda item: not any(loose_equals(item, other) for other in others))

    def diff_using(self, items: Any, callback: Callable[[Any, Any], int]) -> 'Collection[T]':
        """Get the items not present in the given items, using the comparator."""
        others = Arr.values_of(self._get_array_by_items(items))
        return self.filter(lambda item: not any(callback(item, other) == 0 for other in others))

    def diff_assoc(self, items: Any) -> 'Collection[T]':
        """Get the items whose keys and values are not present in the given items."""
        others = self._get_array_by_items(items)
        return self.filter(
            lambda item, key: not (key in others and loose_equals(item, others[key]))
        )

    def diff_assoc_using(self, items: Any, callback: Callable[[Any, Any], int]) -> 'Collection[T]':
        """Get the items whose keys and values are not present, comparing keys with the callback."""
        others = self._get_array_by_items(items)
        return self.filter(
            lambda item, key: not any(
                callback(key, other_key) == 0 and loose_equals(item, other)
                for other_key, other in others.items()
            )
        )

    def diff_keys(self, items: Any) -> 'Collection[T]':
        """Get the items whose keys are not present in the given items."""
        others = self._get_array_by_items(items)
        return self.filter(lambda item, key: key not in others)

    def diff_keys_using(self, items: Any, callback: Callable[[Any, Any], int]) -> 'Collection[T]':
        """Get the items whose keys are not present, comparing keys with the callback."""
        others = self._get_array_by_items(items)
        return self.filter(lambda item, key: not any(callback(key, other) == 0 for other in others))

    def intersect(self, items: Any) -> 'Collection[T]':
        """Intersect the collection with the given items."""
        others = Arr.values_of(self._get_array_by_items(items))
        return self.filter(lambda item: any(loose_equals(item, other) for other in others))

    def intersect_by_keys(self, items: Any) -> 'Collection[T]':
        """Intersect the collection with the given items by key."""
        others = self._get_array_by_items(items)
        return self.filter(lambda item, key: key in others)

    def union(self, items: Any) -> 'Collection[T]':
        """Union the collection with the given items; existing keys win."""
        result = dict(self._items)
        for key, item in self._get_array_by_items(items).items():
            result.setdefault(key, item)
        return self._new(result)

    def merge(self, items: Any) -> 'Collection[T]':
        """Merge the collection with the given items."""
        return self._new(Arr.merge(self._items, self._get_array_by_items(items)))

    def combine(self, values: Any) -> 'Collection[Any]':
        """Create a collection by using this collection for keys and another for its values."""
        return self._new(Arr.combine(self._items, self._get_array_by_items(values)))

    def cross_join(self, *lists: Any) -> 'Collection[List[Any]]':
        """Cross join with the given lists, returning all possible permutations."""
        return self._new(Arr.cross_join(self._items, *[self._get_array_by_items(items) for items in lists]))

    def zip(self, *items: Any) -> 'Collection[Collection[Any]]':
        """Zip the collection together with one or more arrays."""
        arrays = [list(self._items.values())]
        arrays.extend(Arr.values_of(self._get_array_by_items(array)) for array in items)
        return self._new([self._new(list(group)) for group in zip(*arrays)])

    # Slicing and taking
    def slice(self, offset: int, length: Optional[int] = None) -> 'Collection[T]':
        """Slice the underlying collection, keeping keys."""
        pairs = list(self._items.items())
        start, stop = self._slice_bounds(len(pairs), offset, length)
        return self._new(dict(pairs[start:stop]))

    def take(self, limit: int) -> 'Collection[T]':
        """Take the first or last {limit} items."""
        if limit < 0:
            return self.slice(limit, abs(limit))
        return self.slice(0, limit)

    def for_page(self, page: int, per_page: int) -> 'Collection[T]':
        """"Paginate" the collection by slicing it into a smaller collection."""
        offset = max(0, (page - 1) * per_page)
        return self.slice(offset, per_page)

    def nth(self, step: int, offset: int = 0) -> 'Collection[T]':
        """Create a new collection consisting of every n-th element."""
        if step < 1:
            raise InvalidArgumentError(f"Step must be a positive integer, {step} given.")

        return self._new([
            item for position, item in enumerate(self._items.values())
            if position % step == offset
        ])

    def chunk(self, size: int) -> 'Collection[Collection[T]]':
        """Chunk the collection into chunks of the given size, keeping keys."""
        if size <= 0:
            return self._new()

        pairs = list(self._items.items())
        return self._new([self._new(dict(pairs[i:i + size])) for i in range(0, len(pairs), size)])

    def split(self, number_of_groups: int) -> 'Collection[Collection[T]]':
        """Split a collection into a certain number of groups."""
        if number_of_groups <= 0:
            raise InvalidArgumentError(f"Number of groups must be positive, {number_of_groups} given.")

        if self.is_empty():
            return self._new()

        group_size, remain = divmod(self.count(), number_of_groups)
        pairs = list(self._items.items())
        groups = self._new()
        start = 0

        for i in range(number_of_groups):
            size = group_size + (1 if i < remain else 0)
            if size:
                groups.push(self._new(self._renumbered(pairs[start:start + size])))
                start += size

        return groups

    def pad(self, size: int, value: Any) -> 'Collection[Any]':
        """Pad collection to the specified length with a value."""
        missing = abs(size) - self.count()
        if missing <= 0:
            return self._new(self._items)

        padding = [value] * missing
        if size > 0:
            return self._new(Arr.merge(self._items, padding))
        return self._new(Arr.merge(padding, self._items))

    # Reshaping
    def flatten(self, depth: Union[int, float] = math.inf) -> 'Collection[Any]':
        """Get a flattened array of the items in the collection."""
        return self._new(Arr.flatten(self._items, depth))

    def collapse(self) -> 'Collection[Any]':
        """Collapse the collection of items into a single array."""
        return self._new(Arr.collapse(self._items))

    def pluck(self, value: Any, key: Any = None) -> 'Collection[Any]':
        """Get the values of a given key."""
        return self._new(Arr.pluck(self._items, value, key))

    def flip(self) -> 'Collection[Any]':
        """Flip the items in the collection."""
        return self._new({item: key for key, item in self._items.items()})

    def except_(self, *keys: Any) -> 'Collection[T]':
        """Get all items except for those with the specified keys."""
        return self._new(Arr.except_(self._items, self._key_list(keys)))

    def only(self, *keys: Any) -> 'Collection[T]':
        """Get the items with the specified keys."""
        if len(keys) == 1 and keys[0] is None:
            return self._new(self._items)
        return self._new(Arr.only(self._items, self._key_list(keys)))

    def random(self, number: Optional[int] = None, seed: Optional[int] = None) -> Any:
        """Get one or a specified number of items randomly from the collection."""
        if number is None:
            return Arr.random(self._items, None, seed)
        return self._new(Arr.random(self._items, number, seed))

    # Utility methods
    def pipe(self, callback: Callable[['Collection[T]'], Any]) -> Any:
        """Pass the collection to the given callback and return the result."""
        return callback(self)

    def when(self, value: Any, callback: Callable[..., Any], default: Optional[Callable[..., Any]] = None) -> Any:
        """Apply the callback if the value is truthy."""
        if value:
            return call_with_arity(callback, self, value)
        if default is not None:
            return call_with_arity(default, self, value)
        return self

    def unless(self, value: Any, callback: Callable[..., Any], default: Optional[Callable[..., Any]] = None) -> Any:
        """Apply the callback if the value is falsy."""
        return self.when(not value, callback, default)

    # Higher order proxies
    @classmethod
    def proxy(cls, method: str, mode: str = CALL) -> None:
        """Add a method to the list of proxied methods."""
        cls._proxies = {**cls._proxies, method: mode}
        logger.debug("Proxy registered", {'owner': cls.__name__, 'method': method, 'mode': mode})

    def higher_order(self, method: str) -> HigherOrderProxy:
        """Get a higher order proxy for the given operation."""
        mode = type(self)._proxies.get(method)
        if mode is None:
            logger.debug("Unknown proxy requested", {'owner': type(self).__name__, 'method': method})
            raise UnknownProxyError(method, type(self)._proxies)
        return HigherOrderProxy(self, method, mode)

    # Serialization
    def to_array(self) -> Dict[Any, Any]:
        """Get the collection of items as a plain mapping, recursively."""
        return {
            key: item.to_array() if isinstance(item, Collection) else item
            for key, item in self._items.items()
        }

    def to_list(self) -> List[T]:
        """Get the values as a list."""
        return list(self._items.values())

    def json_serialize(self) -> Any:
        """Convert the object into something JSON serializable."""
        data = {
            key: item.json_serialize() if hasattr(item, 'json_serialize') else item
            for key, item in self._items.items()
        }
        return list(data.values()) if Arr.is_list(data) else data

    def to_json(self, escape_unicode: Optional[bool] = None, indent: Optional[int] = None) -> str:
        """Get the collection of items as JSON."""
        return json_encode(self.json_serialize(), escape_unicode, indent)

    # Magic methods
    def __iter__(self) -> Iterator[T]:
        """Iterate over the values."""
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        """Get length."""
        return len(self._items)

    def __contains__(self, item: Any) -> bool:
        """Check if a value is in the collection."""
        return self.contains(item)

    def __getitem__(self, key: Any) -> T:
        """Get item by key."""
        return self._items[self._normalize_key(key)]

    def __setitem__(self, key: Any, value: T) -> None:
        """Set item by key."""
        self.set(key, value)

    def __delitem__(self, key: Any) -> None:
        """Remove item by key."""
        del self._items[self._normalize_key(key)]

    def __bool__(self) -> bool:
        """Check if collection is not empty."""
        return self.is_not_empty()

    def __eq__(self, other: object) -> bool:
        """Compare keys, order and values."""
        if not isinstance(other, Collection):
            return NotImplemented
        return list(self._items.items()) == list(other._items.items())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        """String representation."""
        return f"{type(self).__name__}({self._items!r})"

    def __str__(self) -> str:
        """JSON representation."""
        return self.to_json()

    def __getattr__(self, name: str) -> Any:
        """Handle macro calls."""
        if name.startswith('_'):
            raise AttributeError(name)

        macro = self._resolve_macro(name)
        if macro is not None:
            return macro

        logger.debug("Unknown operation", {'owner': type(self).__name__, 'method': name})
        raise UnknownOperationError(name, type(self).__name__)

    # Helper methods
    def _new(self, items: Any = None) -> 'Collection[Any]':
        """Create a collection of the same type."""
        return type(self)(items)

    def _get_array_by_items(self, items: Any) -> Dict[Any, Any]:
        """Results array of items from Collection, Model, mapping or iterable."""
        from entity.Model import Model

        if items is None:
            return {}
        if isinstance(items, Collection):
            return items.all()
        if isinstance(items, Model):
            return items.to_array()
        if isinstance(items, dict):
            return dict(items)
        if hasattr(items, 'keys') and hasattr(items, '__getitem__'):
            return {key: items[key] for key in items.keys()}
        if isinstance(items, (str, bytes)):
            return {0: items}
        if isinstance(items, Iterable):
            return dict(enumerate(items))
        return {0: items}

    def _normalize_key(self, key: Any) -> Any:
        """Normalize a key the way the collection stores it."""
        if key is None:
            return ''
        if isinstance(key, bool):
            return int(key)
        return key

    def _reset_next_index(self) -> None:
        """Point the append index one past the largest integer key."""
        indexes = [key for key in self._items if _is_index(key)]
        self._next_index = max(indexes) + 1 if indexes else 0

    def _renumber(self, pairs: List[Tuple[Any, Any]]) -> None:
        """Replace the items with the pairs, renumbering integer keys."""
        self.clear()
        for key, item in pairs:
            self.set(None if key is None or _is_index(key) else key, item)

    def _renumbered(self, pairs: List[Tuple[Any, Any]]) -> Dict[Any, Any]:
        """Get the pairs as a mapping with integer keys renumbered."""
        return Arr.merge(dict(pairs))

    def _slice_bounds(self, count: int, offset: int, length: Optional[int]) -> Tuple[int, int]:
        """Resolve an offset and length, either of which may count from the end."""
        start = max(0, count + offset) if offset < 0 else min(offset, count)

        if length is None:
            stop = count
        elif length < 0:
            stop = max(start, count + length)
        else:
            stop = min(count, start + length)

        return start, stop

    def _pairs_of(self, result: Any) -> List[Tuple[Any, Any]]:
        """Get the key/value pairs a mapping callback returned."""
        if isinstance(result, Collection):
            return list(result.all().items())
        if isinstance(result, dict):
            return list(result.items())
        if isinstance(result, (tuple, list)) and len(result) == 2:
            return [(result[0], result[1])]
        raise InvalidArgumentError(
            f"Mapping callbacks must return a mapping or a (key, value) pair, {type(result).__name__} given."
        )

    def _key_list(self, keys: Tuple[Any, ...]) -> List[Any]:
        """Flatten key arguments given as varargs, a list or a collection."""
        if len(keys) == 1 and isinstance(keys[0], (list, tuple, Collection)):
            keys = tuple(Arr.values_of(keys[0]))
        return [self._normalize_key(key) for key in keys]

    @staticmethod
    def _stringify(value: Any) -> str:
        """Convert a value to string for implode()."""
        if value is None or value is False:
            return ''
        if value is True:
            return '1'
        return str(value)

