# SPDX-FileCopyrightText: 2024-present The stdkit Projects
#
# SPDX-License-Identifier: MIT
#
#   PROGRAM/MODULE: stdkit-base
#   FILE:           tests/test_options.py
#   DESCRIPTION:    Tests for stdkit.base.options
#   CREATED:        3.3.2024
#
# The contents of this file are subject to the MIT License
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
#
# Copyright (c) 2024 stdkit Project
# All Rights Reserved.
#
# Contributor(s): ______________________________________.

from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Any

import pytest

from stdkit.base.options import Options, OptionsLike, getter_for, method_suffix, setter_for
from stdkit.base.types import BadMethodCallError, Error, InvalidArgumentError

# --- Test Setup ---

class SampleOptions(Options):
    """Options with single protected field with setter and getter."""
    def __init__(self, source=None):
        self._test_field: Any = None
        super().__init__(source)
    def set_test_field(self, value: Any) -> None:
        self._test_field = value
    def get_test_field(self) -> Any:
        return self._test_field

class NonStrictOptions(SampleOptions):
    """Options that ignore unknown fields."""
    __strict_mode__ = False

class NoGetterOptions(Options):
    """Options with write-only field."""
    def __init__(self, source=None):
        self._foo = None
        super().__init__(source)
    def set_foo(self, value) -> None:
        self._foo = value

class ParentOptions(Options):
    """Options with public, protected and private fields."""
    parent_public = None
    def __init__(self, source=None):
        self._parent_protected = None
        self.__parent_private = None
        super().__init__(source)
    def set_parent_public(self, value) -> None:
        self.parent_public = value
    def set_parent_protected(self, value) -> None:
        self._parent_protected = value
    def get_parent_protected(self):
        return self._parent_protected

class DerivedOptions(ParentOptions):
    """Options that add own public, protected and private fields."""
    derived_public = None
    def __init__(self, source=None):
        self._derived_protected = None
        self.__derived_private = None
        super().__init__(source)
    def set_derived_public(self, value) -> None:
        self.derived_public = value
    def set_derived_protected(self, value) -> None:
        self._derived_protected = value
    def get_derived_protected(self):
        return self._derived_protected

class CamelCaseOptions(Options):
    """Options with camelCase accessor methods."""
    def __init__(self, source=None):
        self._foo_bar = None
        super().__init__(source)
    def setFooBar(self, value) -> None: # noqa: N802
        self._foo_bar = value
    def getFooBar(self): # noqa: N802
        return self._foo_bar

class CounterOptions(Options):
    """Options with field that does not accept None."""
    def __init__(self, source=None):
        self._count = 0
        super().__init__(source)
    def set_count(self, value: int) -> None:
        if value is None:
            raise TypeError("count must be an int")
        self._count = value
    def get_count(self) -> int:
        return self._count

class PlainSource:
    """Non-Options object that provides option values."""
    def to_dict(self) -> dict[str, Any]:
        return {'test_field': 7}

class HelperOptions(Options):
    """Options with get/set helper methods that are not accessors."""
    def __init__(self, source=None):
        self._port = 0
        self._items = {}
        super().__init__(source)
    def set_port(self, value) -> None:
        self._port = value
    def get_port(self):
        return self._port
    def get_item(self, key):
        return self._items.get(key)
    def set_item(self, key, value) -> None:
        self._items[key] = value

class ProtectedAccessorOptions(Options):
    """Options with protected setter and private (name mangled) getter."""
    def __init__(self, source=None):
        self._x = None
        self._y = None
        super().__init__(source)
    def _set_x(self, value) -> None:
        self._x = value
    def get_x(self):
        return self._x
    def set_y(self, value) -> None:
        self._y = value
    def __get_y(self):
        return self._y

class SecretBaseOptions(Options):
    """Options with private field that has public accessors."""
    def __init__(self, source=None):
        self.__secret = None
        super().__init__(source)
    def set_secret(self, value) -> None:
        self.__secret = value
    def get_secret(self):
        return self.__secret

class SecretDerivedOptions(SecretBaseOptions):
    """Options that inherit private field with accessors."""

class InitDefaultOptions(Options):
    """Options that assign public field without setter in constructor."""
    def __init__(self, source=None):
        self.name = 'x'
        super().__init__(source)

# --- Test Functions ---

def test_construction_with_dict():
    options = SampleOptions({'test_field': 1})
    assert options.test_field == 1

def test_construction_with_mapping():
    options = SampleOptions(MappingProxyType({'test_field': 1}))
    assert options.test_field == 1

def test_construction_with_options():
    options = SampleOptions(SampleOptions({'test_field': 1}))
    assert options.test_field == 1

def test_construction_with_options_like():
    assert isinstance(PlainSource(), OptionsLike)
    options = SampleOptions(PlainSource())
    assert options.test_field == 7

def test_construction_with_none_and_empty():
    assert isinstance(SampleOptions(None), SampleOptions)
    options = SampleOptions({})
    assert options.test_field is None
    assert not options.has('test_field')

def test_invalid_field_raises():
    with pytest.raises(BadMethodCallError):
        SampleOptions({'foo': 'bar'})

def test_non_strict_ignores_invalid_field():
    options = NonStrictOptions({'foo': 'bar', 'test_field': 2})
    assert isinstance(options, NonStrictOptions)
    assert options.test_field == 2
    assert options.foo is None
    assert not options.has('foo')
    assert 'foo' not in vars(options)

def test_non_strict_logs_ignored_field(caplog):
    caplog.set_level(logging.DEBUG)
    NonStrictOptions({'foo': 'bar'})
    assert "Option 'foo' without setter ignored" in caplog.messages

def test_strict_mode_per_instance():
    options = SampleOptions()
    options.__strict_mode__ = False
    options.foo = 'bar'
    assert options.foo is None
    with pytest.raises(BadMethodCallError):
        SampleOptions().foo = 'bar'

def test_unsetting():
    options = SampleOptions({'test_field': 1})
    assert options.has('test_field')
    del options.testField
    assert not options.has('test_field')
    assert options.test_field is None

def test_unset_unknown_raises():
    options = SampleOptions()
    with pytest.raises(InvalidArgumentError, match='The option "foobarField" does not exist'):
        del options.foobarField

def test_unset_unknown_raises_in_non_strict_mode():
    options = NonStrictOptions()
    with pytest.raises(InvalidArgumentError):
        del options.foobarField

def test_unset_rejected_none():
    options = CounterOptions({'count': 3})
    with pytest.raises(InvalidArgumentError, match="cannot be unset as None") as cm:
        del options.count
    assert isinstance(cm.value.__cause__, TypeError)
    assert options.count == 3

def test_get_unknown_raises():
    options = SampleOptions()
    with pytest.raises(BadMethodCallError) as cm:
        options.fieldFoobar # noqa: B018
    assert cm.value.option == 'fieldFoobar'
    assert cm.value.method == 'getFieldFoobar'
    assert str(cm.value) == ('The option "fieldFoobar" does not have a callable "getFieldFoobar" '
                             '("getfieldfoobar") getter method which must be defined')

def test_get_unknown_is_attribute_error():
    options = SampleOptions()
    assert isinstance(BadMethodCallError('x'), AttributeError)
    assert isinstance(BadMethodCallError('x'), Error)
    assert getattr(options, 'fieldFoobar', 'default') == 'default'
    assert not hasattr(options, 'fieldFoobar')

def test_private_storage_bypasses_dispatch():
    options = SampleOptions()
    with pytest.raises(AttributeError) as cm:
        options._missing # noqa: B018
    assert not isinstance(cm.value, BadMethodCallError)
    options._test_field = 5
    assert options.test_field == 5

def test_set_from_array_accepts_dict():
    options = SampleOptions()
    assert options.set_from_array({'test_field': 3}) is options
    assert options.test_field == 3

def test_set_from_array_rejects_non_mapping():
    options = SampleOptions()
    with pytest.raises(InvalidArgumentError, match="must be a mapping or OptionsLike, str given"):
        options.set_from_array('asd')
    with pytest.raises(InvalidArgumentError):
        options.set_from_array([('test_field', 1)])
    with pytest.raises(InvalidArgumentError, match="Option name must be a string"):
        options.set_from_array({1: 'x'})

def test_set_from_array_is_atomic():
    options = SampleOptions()
    with pytest.raises(BadMethodCallError):
        options.set_from_array({'test_field': 5, 'foo': 1})
    assert options.test_field is None

def test_set_from_array_dispatches_underscore_keys():
    options = SampleOptions()
    with pytest.raises(BadMethodCallError):
        options.set_from_array({'_test_field_': 1, '_internal': 2})
    assert '_internal' not in vars(options)

def test_attribute_assignment():
    options = SampleOptions()
    options.test_field = 'a'
    assert options.test_field == 'a'
    options.testField = 'b'
    assert options.test_field == 'b'
    assert vars(options)['_test_field'] == 'b'

def test_parent_public_property():
    options = DerivedOptions({'parent_public': 1})
    assert options.parent_public == 1
    options.parentPublic = 2
    assert options.parent_public == 2

def test_parent_protected_property():
    options = DerivedOptions({'parent_protected': 1})
    assert options.parent_protected == 1

def test_parent_private_property():
    msg = ('The option "parent_private" does not have a callable "setParentPrivate" '
           '("setparentprivate") setter method which must be defined')
    with pytest.raises(BadMethodCallError, match=re.escape(msg)):
        DerivedOptions({'parent_private': 1})

def test_derived_public_property():
    options = DerivedOptions({'derived_public': 1})
    assert options.derived_public == 1

def test_derived_protected_property():
    options = DerivedOptions({'derived_protected': 1})
    assert options.derived_protected == 1

def test_derived_private_property():
    msg = ('The option "derived_private" does not have a callable "setDerivedPrivate" '
           '("setderivedprivate") setter method which must be defined')
    with pytest.raises(BadMethodCallError, match=re.escape(msg)):
        DerivedOptions({'derived_private': 1})

def test_public_field_without_getter():
    options = DerivedOptions({'derived_public': 1})
    assert not options.has('derived_public')
    assert options.has('derived_protected') is False
    options.derived_protected = 0
    assert options.has('derived_protected')

def test_exception_message_contains_actual_used_setter():
    msg = ('The option "foo bar" does not have a callable "setFooBar" ("setfoo bar")'
           ' setter method which must be defined')
    with pytest.raises(BadMethodCallError, match=re.escape(msg)):
        SampleOptions({'foo bar': 'baz'})

def test_isset_false_when_getter_does_not_exist():
    options = NoGetterOptions({'foo': 'bar'})
    assert options._foo == 'bar'
    assert not options.has('foo')
    assert 'foo' not in options

def test_isset_does_not_raise_when_getter_does_not_exist():
    assert NoGetterOptions().has('foo') is False
    assert SampleOptions().has('unknown_field') is False

def test_isset_true_with_valid_data():
    options = SampleOptions({'test_field': 1})
    assert options.has('testField') is True
    assert 'test_field' in options

@pytest.mark.parametrize('value', [0, '', False, []])
def test_isset_true_for_falsy_values(value):
    assert SampleOptions({'test_field': value}).has('test_field') is True

@pytest.mark.parametrize('name', ['foo bar', 'foo_bar', 'fooBar', 'FooBar', 'foo-bar', 'foo__bar'])
def test_name_normalization(name):
    assert method_suffix(name) == 'FooBar'
    options = CamelCaseOptions({name: 1})
    assert getattr(options, name) == 1
    assert options.has(name)

def test_method_suffix():
    assert method_suffix('test_field') == 'TestField'
    assert method_suffix('x') == 'X'
    assert method_suffix('already_Pascal') == 'AlreadyPascal'
    assert method_suffix('__') == ''

def test_accessor_registry():
    registry = DerivedOptions._accessors_
    assert set(registry) == {'parentpublic', 'parentprotected', 'derivedpublic', 'derivedprotected'}
    assert registry['parentprotected'].name == 'parent_protected'
    assert registry['parentprotected'].getter == 'get_parent_protected'
    assert registry['parentpublic'].getter is None
    assert CamelCaseOptions._accessors_['foobar'].name == 'foo_bar'
    assert 'fromarray' not in SampleOptions._accessors_
    assert Options._accessors_ == {}

def test_setter_for_and_getter_for():
    options = SampleOptions({'test_field': 9})
    assert setter_for(options, 'testField') == options.set_test_field
    assert getter_for(options, 'test field')() == 9
    assert setter_for(options, 'missing') is None
    assert getter_for(NoGetterOptions(), 'foo') is None

def test_to_dict():
    options = DerivedOptions({'parent_protected': 1, 'derived_protected': 2, 'derived_public': 3})
    assert options.to_dict() == {'parent_protected': 1, 'derived_protected': 2}
    assert CamelCaseOptions({'foo_bar': 'x'}).to_dict() == {'foo_bar': 'x'}

def test_construction_from_options_equals_construction_from_mapping():
    source = {'parent_protected': 'a', 'derived_protected': 'b'}
    from_mapping = DerivedOptions(source)
    from_options = DerivedOptions(from_mapping)
    assert from_options.to_dict() == from_mapping.to_dict()

def test_repr():
    assert repr(SampleOptions({'test_field': 1})) == "SampleOptions({'test_field': 1})"

def test_helper_methods_are_not_accessors():
    registry = HelperOptions._accessors_
    assert set(registry) == {'port'}
    options = HelperOptions({'port': 1})
    assert options.to_dict() == {'port': 1}
    assert repr(options) == "HelperOptions({'port': 1})"
    assert HelperOptions(options).port == 1
    options.set_item('a', 2)
    assert options.get_item('a') == 2
    with pytest.raises(BadMethodCallError):
        options.item = 3

def test_protected_accessor():
    options = ProtectedAccessorOptions({'x': 1})
    assert options.x == 1
    options.x = 2
    assert options.has('x')
    assert options.to_dict() == {'x': 2}
    assert ProtectedAccessorOptions._accessors_['x'].setter == '_set_x'

def test_private_accessor_is_ignored():
    options = ProtectedAccessorOptions({'y': 1})
    assert ProtectedAccessorOptions._accessors_['y'].getter is None
    assert not options.has('y')
    with pytest.raises(BadMethodCallError):
        options.y # noqa: B018

def test_private_field_with_accessors_in_derived_class():
    base = SecretBaseOptions({'secret': 's1'})
    derived = SecretDerivedOptions({'secret': 's1'})
    assert derived.secret == base.secret == 's1'
    derived.secret = 's2'
    assert derived.secret == 's2'
    assert derived.has('secret')
    assert vars(derived)['_SecretBaseOptions__secret'] == 's2'
    del derived.secret
    assert not derived.has('secret')
    assert derived.to_dict() == {'secret': None}

def test_public_default_assigned_in_init_requires_setter():
    with pytest.raises(BadMethodCallError, match='"setName"'):
        InitDefaultOptions()
