from __future__ import annotations

from typing import Iterator

import pytest

from entity.Collection import Collection
from entity.Config.settings import reset_settings
from entity.Support.HigherOrderProxy import HigherOrderProxy
from entity.Support.MacroRegistry import macro_registry


@pytest.fixture(autouse=True)
def clean_registries() -> Iterator[None]:
    """Start every test with no macros, the default proxies and fresh settings."""
    macro_registry.flush()
    Collection._proxies = dict(HigherOrderProxy.default_proxies)
    reset_settings()
    yield
    macro_registry.flush()
    Collection._proxies = dict(HigherOrderProxy.default_proxies)
    reset_settings()
