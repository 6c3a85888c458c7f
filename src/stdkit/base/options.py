# SPDX-FileCopyrightText: 2024-present The stdkit Projects
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: stdkit-base
# FILE:           stdkit/base/options.py
# DESCRIPTION:    Validated option objects
# CREATED:        3.3.2024
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
# Contributor(s): ______________________________________

"""stdkit-base - Validated option objects

This module provides `Options`, a base class for objects that hold typed and validated
configuration values (options). Option values are never stored directly from outside.
Every write goes through a *setter* method of the option class, and every read of
a non-public field goes through a *getter* method.

Accessor methods are found by option name. The name is normalized to a method
suffix (``test_field``, ``testField`` and ``test field`` all give ``TestField``), and
methods are matched case-insensitively and regardless of underscores, so
``set_test_field`` and ``setTestField`` are both valid setters for ``test_field``.
Accessors are collected into a per-class registry when the class is defined.

Example::

    from stdkit.base.options import Options

    class ServerOptions(Options):
        def __init__(self, source=None):
            self._port: int = 8080
            super().__init__(source)
        def set_port(self, value: int | None) -> None:
            self._port = 8080 if value is None else int(value)
        def get_port(self) -> int:
            return self._port

    opts = ServerOptions({'port': 9000})
    opts.port           # 9000
    opts.port = 9001    # calls set_port(9001)
    opts.has('port')    # True
    opts.host = 'x'     # raises BadMethodCallError
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from inspect import isfunction, signature
from typing import Any, ClassVar, Protocol, Self, runtime_checkable

from .logging import BraceMessage, get_logger
from .types import BadMethodCallError, InvalidArgumentError

_SEPARATORS = re.compile(r'[\W_]+')
_CAMEL_BOUNDARY = re.compile(r'(?<=[a-z0-9])(?=[A-Z])')

@runtime_checkable
class OptionsLike(Protocol):
    """Protocol for objects that could be used as source of options.

    Any object with `to_dict()` method returning mapping of option names to values
    (`Options` instances included) is accepted where a mapping of options is.
    """
    def to_dict(self) -> dict[str, Any]:
        "Returns option values as mapping of option names to values."

@dataclass
class Accessor:
    """Accessor methods registered for an option.

    Arguments:
        name: Option name in snake_case, derived from accessor method name.
        getter: Name of getter method or `None`.
        setter: Name of setter method or `None`.
    """
    name: str
    getter: str | None = None
    setter: str | None = None

def method_suffix(name: str) -> str:
    """Returns accessor method suffix for option name.

    Name is split on runs of non-alphanumeric characters, first letter of each part
    is upper-cased and parts are joined together.

    Example::

        method_suffix('test_field')  # 'TestField'
        method_suffix('foo bar')     # 'FooBar'
        method_suffix('fooBar')      # 'FooBar'
    """
    return ''.join(part[:1].upper() + part[1:] for part in _SEPARATORS.split(name) if part)

def _field_name(method_name: str) -> str:
    name = method_name.lstrip('_')[3:].lstrip('_')
    return _CAMEL_BOUNDARY.sub('_', name).lower()

def _accessor_kind(klass: type, attr: str, func: Callable) -> str | None:
    """Returns 'get' or 'set' when class function is an accessor method, or `None`.

    Public and protected (single underscore) methods qualify, dunder and name mangled
    (private) ones do not. A getter must be callable without arguments, a setter
    with single value.
    """
    if attr.startswith(('__', f"_{klass.__name__.lstrip('_')}__")):
        return None
    key = attr.replace('_', '').lower()
    kind = key[:3]
    if kind not in ('get', 'set') or len(key) == 3:
        return None
    try:
        signature(func).bind(*([None] if kind == 'get' else [None, None]))
    except (TypeError, ValueError):
        return None
    return kind

def _missing_accessor(name: str, prefix: str, kind: str) -> BadMethodCallError:
    method = prefix + method_suffix(name)
    lowered = (prefix + name.replace('_', '')).lower()
    return BadMethodCallError(f'The option "{name}" does not have a callable "{method}" '
                              f'("{lowered}") {kind} method which must be defined',
                              option=name, method=method)

class Options:
    """Base class for option objects.

    Descendant classes define option fields and their accessor methods. A field may be
    public (``name``), protected (``_name``) or private (``__name``). Public fields are
    read directly, other fields need a getter. All fields need a setter to be assigned.

    Arguments:
        source: Initial option values. Mapping of option names to values, or
                `OptionsLike` object. `None` or empty mapping leaves default values.

    Raises:
        InvalidArgumentError: When `source` is neither mapping nor `OptionsLike`.
        BadMethodCallError: When `source` contains option without setter (in strict mode).

    Important:
        Attributes with names starting with underscore are internal storage. They are
        read and assigned directly, without accessor lookup.

        Assignment to a public name always goes through its setter, even in `__init__`.
        Default values of public fields must therefore be defined as class attributes,
        as `self.name = ...` in `__init__` raises `BadMethodCallError` when there is
        no setter for the field.

        Accessor methods may be public (``set_name``) or protected (``_set_name``).
        Name mangled (``__set_name``) methods are never used as accessors. Getter
        must be callable without arguments and setter with single value, other
        ``get*`` and ``set*`` methods are ordinary methods.
    """
    #: When True, access to option without accessor raises `BadMethodCallError`,
    #: otherwise the write is ignored and read returns `None`.
    __strict_mode__: ClassVar[bool] = True
    #: Accessor registry, built for each descendant class when it's defined.
    _accessors_: ClassVar[dict[str, Accessor]] = {}
    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        registry: dict[str, Accessor] = {}
        for klass in reversed(cls.__mro__):
            if klass is object or klass is Options:
                continue
            for attr, value in vars(klass).items():
                if not isfunction(value) or (kind := _accessor_kind(klass, attr, value)) is None:
                    continue
                key = attr.replace('_', '').lower()[3:]
                accessor = registry.setdefault(key, Accessor(_field_name(attr)))
                setattr(accessor, 'getter' if kind == 'get' else 'setter', attr)
        cls._accessors_ = registry
    def __init__(self, source: Mapping[str, Any] | OptionsLike | None=None):
        if source is not None:
            self.set_from_array(source)
    def __repr__(self):
        return f"{self.__class__.__name__}({self.to_dict()!r})"
    def __contains__(self, name: str) -> bool:
        return self.has(name)
    def __getattr__(self, name: str) -> Any:
        # Called only when regular lookup fails, so public fields are never dispatched
        if name.startswith('_'):
            raise AttributeError(f"'{self.__class__.__name__}' object has no attribute '{name}'")
        if (getter := getter_for(self, name)) is None:
            if self.__strict_mode__:
                raise _missing_accessor(name, 'get', 'getter')
            return None
        return getter()
    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith('_') or method_suffix(name).lower() in self.__dict__.get('_active_', ()):
            super().__setattr__(name, value)
        else:
            self._set_option(name, value)
    def __delattr__(self, name: str) -> None:
        if name.startswith('_'):
            super().__delattr__(name)
            return
        if (setter := setter_for(self, name)) is None:
            raise InvalidArgumentError(f'The option "{name}" does not exist and cannot be unset',
                                       option=name)
        try:
            self._call_setter(name, setter, None)
        except (TypeError, ValueError) as exc:
            raise InvalidArgumentError(f'The option "{name}" cannot be unset as None '
                                       'is an invalid value for it', option=name) from exc
    def _call_setter(self, name: str, setter: Callable, value: Any) -> None:
        # Setter may assign the public attribute it serves, which must not dispatch again
        key = method_suffix(name).lower()
        active: set[str] = self.__dict__.setdefault('_active_', set())
        nested = key in active
        active.add(key)
        try:
            setter(value)
        finally:
            if not nested:
                active.discard(key)
    def _set_option(self, name: str, value: Any) -> None:
        if (setter := setter_for(self, name)) is None:
            if self.__strict_mode__:
                raise _missing_accessor(name, 'set', 'setter')
            get_logger(self).debug(BraceMessage("Option {0!r} without setter ignored", name))
            return
        self._call_setter(name, setter, value)
    def has(self, name: str) -> bool:
        """Returns True if option has a value.

        Option has a value when it has a getter that returns anything but `None`.
        Options without getter never have a value, even when a public field of that
        name exists. This method never raises `BadMethodCallError`.

        Arguments:
            name: Option name.
        """
        if (getter := getter_for(self, name)) is None:
            return False
        return getter() is not None
    def set_from_array(self, options: Mapping[str, Any] | OptionsLike) -> Self:
        """Sets option values from mapping.

        All option names are checked before any value is assigned, so a mapping
        with unknown option fails without changing this instance (in strict mode).

        Arguments:
            options: Mapping of option names to values, or `OptionsLike` object.

        Returns:
            This instance.

        Raises:
            InvalidArgumentError: When `options` is neither mapping nor `OptionsLike`,
                                  or when it contains a key that is not a string.
            BadMethodCallError: When option has no setter (in strict mode).
        """
        if not isinstance(options, Mapping) and isinstance(options, OptionsLike):
            options = options.to_dict()
        if not isinstance(options, Mapping):
            raise InvalidArgumentError(f"Parameter provided to {self.__class__.__name__}."
                                       "set_from_array() must be a mapping or OptionsLike, "
                                       f"{options.__class__.__name__} given")
        for name in options:
            if not isinstance(name, str):
                raise InvalidArgumentError(f"Option name must be a string, {name!r} given")
            if self.__strict_mode__ and setter_for(self, name) is None:
                raise _missing_accessor(name, 'set', 'setter')
        for name, value in options.items():
            self._set_option(name, value)
        return self
    def to_dict(self) -> dict[str, Any]:
        """Returns values of all options that have getter, as mapping of option names
        to values.
        """
        return {accessor.name: getattr(self, accessor.getter)()
                for accessor in self._accessors_.values() if accessor.getter is not None}

def _accessor(options: Options, name: str, kind: str) -> Callable | None:
    accessor = options._accessors_.get(method_suffix(name).lower())
    if accessor is None or (method := getattr(accessor, kind)) is None:
        return None
    return getattr(options, method)

def setter_for(options: Options, name: str) -> Callable | None:
    """Returns bound setter method for option, or `None` when option has no setter.

    Arguments:
        options: Option object.
        name: Option name.
    """
    return _accessor(options, name, 'setter')

def getter_for(options: Options, name: str) -> Callable | None:
    """Returns bound getter method for option, or `None` when option has no getter.

    Arguments:
        options: Option object.
        name: Option name.
    """
    return _accessor(options, name, 'getter')
