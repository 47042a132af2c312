from __future__ import annotations

from .settings import EntitySettings, configure, get_settings, reset_settings

__all__: list[str] = [
    'EntitySettings',
    'configure',
    'get_settings',
    'reset_settings',
]
