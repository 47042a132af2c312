"""Test Model

This test suite covers the closed field set of models and how models
behave as collection items.
"""

from __future__ import annotations

import logging
import pytest
from typing import List, Optional

from entity import Collection, Model
from entity.Exceptions import UndeclaredFieldError


class User(Model):
    name: Optional[str] = None
    age: int = 0
    tags: List[str] = []


class Point(Model):
    x: int
    y: int = 0


class Envelope(Model):
    data: Optional[dict] = None
    kind: str = ''


class TestModel:
    """Test suite for field access."""

    def test_construction(self) -> None:
        """Test building from keywords and from a mapping."""
        assert User(name='a').get('name') == 'a'
        assert User({'name': 'b', 'age': 3}).age == 3
        assert User.make({'age': 4}).age == 4

    def test_field_named_data(self) -> None:
        """Test a declared field sharing the name of the mapping argument."""
        assert Envelope(data={'a': 1}).data == {'a': 1}
        assert Envelope({'data': {'b': 2}, 'kind': 'x'}).to_array() == {'data': {'b': 2}, 'kind': 'x'}
        assert Envelope({'kind': 'x'}, data={'c': 3}).data == {'c': 3}

    def test_construction_rejects_undeclared_fields(self) -> None:
        """Test that unknown names raise."""
        with pytest.raises(UndeclaredFieldError) as error:
            User(nickname='x')

        assert str(error.value) == "Unknown property 'nickname' in class 'User'."
        assert error.value.field == 'nickname'
        assert error.value.model == 'User'

    def test_declared_fields(self) -> None:
        """Test listing fields in declaration order."""
        assert User.declared_fields() == ['name', 'age', 'tags']

    def test_get_undeclared_raises(self) -> None:
        """Test reading an unknown field."""
        with pytest.raises(UndeclaredFieldError):
            User().get('nickname')

        with pytest.raises(UndeclaredFieldError):
            User().nickname

    def test_set_is_chainable(self) -> None:
        """Test writing fields."""
        user = User().set('name', 'a').set('age', 5)

        assert user.name == 'a'
        assert user.age == 5

    def test_set_undeclared_raises(self) -> None:
        """Test writing unknown fields."""
        user = User()

        with pytest.raises(UndeclaredFieldError):
            user.set('nickname', 'x')

        with pytest.raises(UndeclaredFieldError):
            user.nickname = 'x'

    def test_replace(self) -> None:
        """Test writing several fields."""
        user = User().replace({'name': 'a', 'age': 2})

        assert user.to_array() == {'name': 'a', 'age': 2, 'tags': []}

    def test_has_and_filled(self) -> None:
        """Test field checks."""
        user = User(age=1)

        assert user.has('name')
        assert not user.filled('name')
        assert user.filled('age')

        with pytest.raises(UndeclaredFieldError):
            user.has('nickname')

    def test_is_empty(self) -> None:
        """Test that a model is empty when every field is falsy."""
        assert User().is_empty()
        assert not User(tags=['x']).is_empty()

    def test_delete_restores_default(self) -> None:
        """Test resetting one field."""
        user = User(name='a', age=9, tags=['x'])
        user.delete('age').delete('tags')

        assert user.age == 0
        assert user.tags == []
        assert user.name == 'a'

    def test_delete_field_without_default(self) -> None:
        """Test that required fields reset to None."""
        assert Point(x=1, y=2).delete('x').x is None

    def test_delete_undeclared_raises(self) -> None:
        """Test resetting an unknown field."""
        with pytest.raises(UndeclaredFieldError):
            User().delete('nickname')

    def test_clear(self) -> None:
        """Test resetting every field."""
        user = User(name='a', age=9).clear()

        assert user.to_array() == {'name': None, 'age': 0, 'tags': []}

    def test_to_array_keeps_declaration_order(self) -> None:
        """Test the field mapping."""
        assert list(User(age=1, name='a').to_array()) == ['name', 'age', 'tags']

    def test_json(self) -> None:
        """Test JSON rendering."""
        user = User(name='é', age=1)

        assert user.to_json() == '{"name": "é", "age": 1, "tags": []}'
        assert str(user) == user.to_json()
        assert user.to_json(escape_unicode=True) == '{"name": "\\u00e9", "age": 1, "tags": []}'

    def test_clone_is_deep(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that clones do not share field values."""
        user = User(name='a', tags=['x'])

        with caplog.at_level(logging.DEBUG, logger='entity'):
            clone = user.clone()

        clone.tags.append('y')

        assert clone is not user
        assert clone.name == 'a'
        assert user.tags == ['x']
        assert "Model cloned | model=User" in caplog.text

    def test_macros(self) -> None:
        """Test per-type model macros."""
        User.macro('greet', lambda user, greeting='hi': f"{greeting} {user.name}")

        assert User(name='a').greet() == 'hi a'
        assert User(name='a').greet('hello') == 'hello a'

        with pytest.raises(UndeclaredFieldError):
            Point(x=1).greet()


class TestModelsInCollections:
    """Test suite for models held by collections."""

    @pytest.fixture
    def users(self) -> Collection[User]:
        """Create users."""
        return Collection([User(name='a', age=30), User(name='b', age=20), User(name='c', age=30)])

    def test_pluck_and_where(self, users: Collection[User]) -> None:
        """Test path based operations against models."""
        assert users.pluck('name').to_list() == ['a', 'b', 'c']
        assert users.where('age', 30).pluck('name').to_list() == ['a', 'c']

    def test_sort_and_group(self, users: Collection[User]) -> None:
        """Test ordering and grouping models."""
        assert users.sort_by('age').pluck('name').to_list() == ['b', 'a', 'c']
        assert list(users.group_by('age').keys()) == [30, 20]

    def test_json_is_recursive(self) -> None:
        """Test nested serialization."""
        users = Collection([User(name='a')])

        assert users.to_json() == '[{"name": "a", "age": 0, "tags": []}]'

    def test_collection_from_model(self) -> None:
        """Test building a collection from model fields."""
        assert Collection(User(name='a')).all() == {'name': 'a', 'age': 0, 'tags': []}
