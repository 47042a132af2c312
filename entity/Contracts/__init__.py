from __future__ import annotations

from .CollectionInterface import CollectionInterface
from .ModelInterface import ModelInterface

__all__: list[str] = [
    'CollectionInterface',
    'ModelInterface',
]
