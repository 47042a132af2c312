"""
Value comparison policy

Pure functions shared by the collection's value-based operations:
- loose and strict equality
- three-way ordering across mixed value types
- the operator comparison used by where(), every(), contains() and friends
"""

from __future__ import annotations

import math
from typing import Any, Callable, Optional

from entity.Helpers.helpers import data_get

MISSING: Any = object()

SCALAR_TYPES = (str, bytes, int, float, bool, type(None))
CONTAINER_TYPES = (list, tuple, dict, set, frozenset)

EQUALITY_OPERATORS = ('=', '==', '===')
INEQUALITY_OPERATORS = ('!=', '<>', '!==')


def is_object(value: Any) -> bool:
    """Determine whether value is an object rather than a scalar or plain container."""
    return not isinstance(value, SCALAR_TYPES + CONTAINER_TYPES)


def has_textual_form(value: Any) -> bool:
    """Determine whether value is a string or an object defining its own string form."""
    if isinstance(value, str):
        return True
    return is_object(value) and type(value).__str__ is not object.__str__


def to_number(value: Any) -> Optional[float]:
    """Interpret numbers and numeric strings as floats."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        return None if math.isnan(number) else number
    return None


def loose_equals(left: Any, right: Any) -> bool:
    """Compare two values with type juggling."""
    if isinstance(left, bool) or isinstance(right, bool):
        return bool(left) == bool(right)
    
    if left is None or right is None:
        other = right if left is None else left
        if other is None:
            return True
        if isinstance(other, str):
            return other == ''
        return not other if isinstance(other, (int, float) + CONTAINER_TYPES) else False
    
    if isinstance(left, str) != isinstance(right, str):
        number, text = (left, right) if isinstance(right, str) else (right, left)
        if isinstance(number, (int, float)):
            converted = to_number(text)
            return converted is not None and converted == float(number)
        if has_textual_form(number):
            return str(number) == text
        return False
    
    try:
        return bool(left == right)
    except Exception:
        return left is right


def strict_equals(left: Any, right: Any) -> bool:
    """Compare two values requiring identical types."""
    if isinstance(left, SCALAR_TYPES + CONTAINER_TYPES) or isinstance(right, SCALAR_TYPES + CONTAINER_TYPES):
        return type(left) is type(right) and left == right
    return left is right


def equals(left: Any, right: Any, strict: bool = False) -> bool:
    """Compare two values loosely or strictly."""
    return strict_equals(left, right) if strict else loose_equals(left, right)


def spaceship(left: Any, right: Any) -> int:
    """Three-way comparison returning -1, 0 or 1."""
    if left is None or right is None:
        if left is None and right is None:
            return 0
        return -1 if left is None else 1
    
    left_number, right_number = to_number(left), to_number(right)
    if left_number is not None and right_number is not None:
        return (left_number > right_number) - (left_number < right_number)
    
    try:
        if left < right:
            return -1
        if left > right:
            return 1
        if left == right:
            return 0
    except TypeError:
        pass
    
    # Unrelated types still need a deterministic order
    left_key = (type(left).__name__, str(left))
    right_key = (type(right).__name__, str(right))
    return (left_key > right_key) - (left_key < right_key)


def compare(retrieved: Any, operator: str, value: Any) -> bool:
    """
    Compare a retrieved value against a value with the given operator.

    When fewer than two of the operands have a textual form and exactly one
    of them is an object, equality operators are false and inequality
    operators are true whatever the operand values are.
    """
    strings = [item for item in (retrieved, value) if has_textual_form(item)]
    objects = [item for item in (retrieved, value) if is_object(item)]
    
    if len(strings) < 2 and len(objects) == 1:
        return operator in INEQUALITY_OPERATORS
    
    if operator == '===':
        return strict_equals(retrieved, value)
    if operator == '!==':
        return not strict_equals(retrieved, value)
    if operator in ('!=', '<>'):
        return not loose_equals(retrieved, value)
    if operator in ('<', '>', '<=', '>='):
        return _ordered(retrieved, operator, value)
    
    # '=' and '==' and unknown operators
    return loose_equals(retrieved, value)


def _ordered(left: Any, operator: str, right: Any) -> bool:
    """Apply an ordering operator, treating incomparable operands as unordered."""
    left_number, right_number = to_number(left), to_number(right)
    if left_number is not None and right_number is not None:
        left, right = left_number, right_number
    elif left is None or right is None:
        result = spaceship(left, right)
        return {'<': result < 0, '>': result > 0, '<=': result <= 0, '>=': result >= 0}[operator]
    
    try:
        if operator == '<':
            return bool(left < right)
        if operator == '>':
            return bool(left > right)
        if operator == '<=':
            return bool(left <= right)
        return bool(left >= right)
    except TypeError:
        return False


def operator_for_where(key: Any, operator: Any = MISSING, value: Any = MISSING) -> Callable[..., bool]:
    """
    Build a predicate comparing the value at key against value.

    With only a key the retrieved value is compared to True; with a key and
    a value the operator defaults to '='.
    """
    if operator is MISSING and value is MISSING:
        operator, value = '=', True
    elif value is MISSING:
        operator, value = '=', operator
    
    def predicate(item: Any, item_key: Any = None) -> bool:
        return compare(data_get(item, key), operator, value)
    
    return predicate
