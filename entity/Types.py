"""
Shared type definitions

This module provides the type variables and aliases used across the package:
- Generic item type variable
- Key specs accepted by keyed operations
- Path expressions resolved by data_get()
"""

from __future__ import annotations

from typing import Any, Callable, List, TypeVar, Union

from typing_extensions import TypeAlias

T = TypeVar("T")

# Key spec accepted by keyed operations: a callable or a dotted path
KeySpec: TypeAlias = Union[str, int, List[Any], Callable[..., Any], None]
PathSegments: TypeAlias = Union[str, int, List[Any], None]
