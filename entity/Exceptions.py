from __future__ import annotations

from typing import Iterable, Optional


class EntityException(Exception):
    """Base exception for collections and models"""
    pass


class UndeclaredFieldError(EntityException, AttributeError):
    """Exception raised when a model field is not declared by its type"""

    def __init__(self, field: str, model: str) -> None:
        self.field = field
        self.model = model

        super().__init__(f"Unknown property '{field}' in class '{model}'.")


class UnknownProxyError(EntityException, AttributeError):
    """Exception raised when a higher order proxy is not registered"""

    def __init__(self, method: str, allowed: Optional[Iterable[str]] = None) -> None:
        self.method = method
        self.allowed = sorted(allowed) if allowed is not None else []

        message = f"Property [{method}] does not exist on this collection instance."
        if self.allowed:
            message += f" Proxyable method(s) are `{', '.join(self.allowed)}`."

        super().__init__(message)


class UnknownOperationError(EntityException, AttributeError):
    """Exception raised when a method is neither built in nor a registered macro"""

    def __init__(self, method: str, owner: str) -> None:
        self.method = method
        self.owner = owner

        super().__init__(f"Method {owner}::{method} does not exist.")


class InvalidArgumentError(EntityException, ValueError):
    """Exception raised when an operation receives an unusable argument"""
    pass
