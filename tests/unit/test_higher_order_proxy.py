"""Test higher order proxies."""

from __future__ import annotations

import pytest
from typing import List

from entity import Collection
from entity.Exceptions import UnknownProxyError
from entity.Support.HigherOrderProxy import CALL, READ, HigherOrderProxy, invoke, read


class Product:
    """Item exposing both methods and properties."""

    def __init__(self, name: str, price: int, category: str, active: bool = True) -> None:
        self.name = name
        self.price = price
        self.category = category
        self.active = active
        self.touched = False

    def is_active(self) -> bool:
        return self.active

    def label(self, prefix: str = '') -> str:
        return f"{prefix}{self.name}"

    def touch(self) -> None:
        self.touched = True


class TestHigherOrderProxy:
    """Test suite for deferred per-item dispatch."""

    @pytest.fixture
    def products(self) -> Collection[Product]:
        """Create products."""
        return Collection([
            Product('a', 30, 'tools'),
            Product('b', 10, 'books', active=False),
            Product('c', 20, 'tools'),
        ])

    def test_map_calls_method_on_each_item(self, products: Collection[Product]) -> None:
        """Test call mode with forwarded arguments."""
        assert products.higher_order('map')('label').to_list() == ['a', 'b', 'c']
        assert products.higher_order('map')('label', '#').to_list() == ['#a', '#b', '#c']

    def test_filter_and_reject(self, products: Collection[Product]) -> None:
        """Test filtering by a method result."""
        assert list(products.higher_order('filter')('is_active').keys()) == [0, 2]
        assert list(products.higher_order('reject')('is_active').keys()) == [1]

    def test_every_and_partition(self, products: Collection[Product]) -> None:
        """Test predicates built from a method."""
        assert not products.higher_order('every')('is_active')

        failing, passing = products.higher_order('partition')('is_active')
        assert list(failing.keys()) == [1]
        assert list(passing.keys()) == [0, 2]

    def test_each(self, products: Collection[Product]) -> None:
        """Test calling a method for its side effect."""
        products.higher_order('each')('touch')

        assert all(product.touched for product in products)

    def test_first(self, products: Collection[Product]) -> None:
        """Test finding the first item whose method returns truthy."""
        assert products.higher_order('first')('is_active').name == 'a'

    def test_read_mode_aggregates(self, products: Collection[Product]) -> None:
        """Test reading a property from each item."""
        assert products.higher_order('sum')('price') == 60
        assert products.higher_order('avg')('price') == 20
        assert products.higher_order('max')('price') == 30
        assert products.higher_order('min')('price') == 10

    def test_read_mode_reshaping(self, products: Collection[Product]) -> None:
        """Test grouping, keying and sorting by a property."""
        assert list(products.higher_order('group_by')('category').keys()) == ['tools', 'books']
        assert list(products.higher_order('key_by')('name').keys()) == ['a', 'b', 'c']
        assert products.higher_order('sort_by')('price').pluck('name').to_list() == ['b', 'c', 'a']
        assert products.higher_order('sort_by_desc')('price').pluck('name').to_list() == ['a', 'c', 'b']
        assert products.higher_order('unique')('category').count() == 2

    def test_explicit_call_and_read(self, products: Collection[Product]) -> None:
        """Test choosing the adapter explicitly."""
        assert products.higher_order('filter').read('active').count() == 2
        assert list(products.higher_order('group_by').call('is_active').keys()) == [1, 0]

    def test_read_mode_rejects_extra_arguments(self, products: Collection[Product]) -> None:
        """Test that a value reading proxy does not drop arguments."""
        with pytest.raises(TypeError):
            products.higher_order('sum')('price', 2)

        with pytest.raises(TypeError):
            products.higher_order('group_by')('category', default='none')

        assert products.higher_order('sum')('price') == 60

    def test_unknown_proxy_raises(self, products: Collection[Product]) -> None:
        """Test accessing a proxy that is not registered."""
        with pytest.raises(UnknownProxyError) as error:
            products.higher_order('explode')

        assert error.value.method == 'explode'
        assert 'map' in error.value.allowed
        assert isinstance(error.value, AttributeError)

    def test_registering_a_proxy(self, products: Collection[Product]) -> None:
        """Test extending the proxy set."""
        Collection.proxy('search')

        assert products.higher_order('search')('is_active') == 0

        Collection.proxy('implode', READ)
        assert Collection._proxies['implode'] == READ

    def test_subclass_registration_stays_local(self) -> None:
        """Test that a subclass proxy does not leak to the base class."""
        class Products(Collection):
            pass

        Products.proxy('search', CALL)

        assert 'search' in Products._proxies
        assert 'search' not in Collection._proxies

    def test_repr(self, products: Collection[Product]) -> None:
        """Test the proxy representation."""
        proxy = products.higher_order('map')

        assert isinstance(proxy, HigherOrderProxy)
        assert repr(proxy) == "HigherOrderProxy(map, mode=call)"


class TestAdapters:
    """Test suite for the per-item adapter builders."""

    def test_invoke(self) -> None:
        """Test calling a method by name."""
        words: Collection[str] = Collection(['a', 'b'])

        assert words.map(invoke('upper')).to_list() == ['A', 'B']
        assert words.map(invoke('center', 3, '*')).to_list() == ['*a*', '*b*']

    def test_read(self) -> None:
        """Test reading a path."""
        rows: List[dict] = [{'a': {'b': 1}}, {'a': {'b': 2}}]

        assert Collection(rows).map(read('a.b')).to_list() == [1, 2]
        assert Collection(rows).group_by(read('a.b')).count() == 2
