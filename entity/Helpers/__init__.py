from __future__ import annotations

from .helpers import *

__all__ = [
    # Value helpers
    'value', 'collect', 'tap',
    
    # Callable helpers
    'accepted_arguments', 'arity_adapter', 'call_with_arity',
    
    # Path helpers
    'split_path', 'data_get',
    
    # Serialization helpers
    'json_encode',
]
