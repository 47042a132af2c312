from __future__ import annotations

from .Logger import LaravelStyleLogger, get_logger, logger

__all__: list[str] = ['LaravelStyleLogger', 'get_logger', 'logger']
