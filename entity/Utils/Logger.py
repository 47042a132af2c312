from __future__ import annotations

import logging
import sys
from typing import Optional, Dict, Union

from entity.Config.settings import get_settings

LogContext = Dict[str, Union[str, int, float, bool, None]]


class LaravelStyleLogger:
    """Laravel-style logger implementation."""
    
    def __init__(self, name: Optional[str] = None) -> None:
        self.name = name or get_settings().log_channel
        self.logger = logging.getLogger(self.name)
        
        if not self.logger.handlers:
            self._setup_default_handler()
    
    def _setup_default_handler(self) -> None:
        """Set up default logging handler."""
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter(
            '[%(asctime)s] %(levelname)s in %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        self.logger.addHandler(handler)
        self.logger.setLevel(get_settings().get_log_level())
    
    def debug(self, message: str, context: Optional[LogContext] = None) -> None:
        """Log debug message."""
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(self._format_message(message, context))
    
    def info(self, message: str, context: Optional[LogContext] = None) -> None:
        """Log info message."""
        self.logger.info(self._format_message(message, context))
    
    def warning(self, message: str, context: Optional[LogContext] = None) -> None:
        """Log warning message."""
        self.logger.warning(self._format_message(message, context))
    
    def error(self, message: str, context: Optional[LogContext] = None) -> None:
        """Log error message."""
        self.logger.error(self._format_message(message, context))
    
    def _format_message(self, message: str, context: Optional[LogContext] = None) -> str:
        """Format message with context."""
        if context:
            context_str = " | ".join(f"{k}={v}" for k, v in context.items())
            return f"{message} | {context_str}"
        return message


def get_logger(name: Optional[str] = None) -> LaravelStyleLogger:
    """Get a Laravel-style logger instance."""
    return LaravelStyleLogger(name)


# Package logger instance
logger = get_logger()
