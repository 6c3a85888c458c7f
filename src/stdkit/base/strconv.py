# SPDX-FileCopyrightText: 2024-present The stdkit Projects
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: stdkit-base
# FILE:           stdkit/base/strconv.py
# DESCRIPTION:    Data conversion from/to string
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


"""stdkit-base - Option values from/to string

Registry of functions that turn option values of particular types into text, and
parse them back. `stdkit.base.config` uses it to give option setters values of the
type they declare, when the values come from configuration files.

A type without its own entry uses the entry of its nearest base class (in MRO order),
so subclasses of registered types need no registration.

Example::

    from stdkit.base.strconv import convert_to_str, convert_from_str

    convert_from_str(bool, 'off')   # False
    convert_to_str(True)            # 'yes'
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum, IntEnum, IntFlag
from pathlib import Path
from typing import Any, TypeAlias
from uuid import UUID

#: Signature of function that renders a value as text.
TConvertToStr: TypeAlias = Callable[[Any], str]
#: Signature of function that parses text into value of given type.
TConvertFromStr: TypeAlias = Callable[[type, str], Any]

#: Accepted spellings of `True` (case-insensitive). The first one is used for output.
TRUE_STR: tuple[str, ...] = ('yes', 'true', 'on', 'y', '1')
#: Accepted spellings of `False` (case-insensitive). The first one is used for output.
FALSE_STR: tuple[str, ...] = ('no', 'false', 'off', 'n', '0')

@dataclass(frozen=True)
class Convertor:
    """Pair of conversion functions registered for a type.

    Arguments:
        cls: Registered type.
        to_str: Renders instance of `cls` as text.
        from_str: Parses text into instance of `cls` (or of its subclass passed as
                  first argument).
    """
    cls: type
    to_str: TConvertToStr
    from_str: TConvertFromStr
    @property
    def name(self) -> str:
        "Name of registered type."
        return self.cls.__name__

_registry: dict[type, Convertor] = {}

def any2str(value: Any) -> str:
    "Renders value with `str()`. Used when no `to_str` is given at registration."
    return str(value)

def str2any(cls: type, value: str) -> Any:
    "Parses text by calling `cls(value)`. Used when no `from_str` is given at registration."
    return cls(value)

def register_convertor(cls: type, *, to_str: TConvertToStr=any2str,
                       from_str: TConvertFromStr=str2any) -> None:
    """Registers conversion functions for type, replacing any previous registration.

    Arguments:
        cls: Type of option values.
        to_str: Renders value as text.
        from_str: Parses text into value.
    """
    _registry[cls] = Convertor(cls, to_str, from_str)

def _lookup(cls: type) -> Convertor | None:
    return next((_registry[base] for base in cls.__mro__ if base in _registry), None)

def has_convertor(cls: type) -> bool:
    "Returns True when values of `cls` could be converted from/to text."
    return _lookup(cls) is not None

def get_convertor(cls: type) -> Convertor:
    """Returns conversion functions used for values of `cls`.

    Raises:
        TypeError: When neither `cls` nor any of its bases is registered.
    """
    if (convertor := _lookup(cls)) is None:
        raise TypeError(f"Type '{cls.__name__}' has no Convertor")
    return convertor

def convert_to_str(value: Any) -> str:
    """Returns text form of value.

    Raises:
        TypeError: When type of value is not registered.
    """
    return get_convertor(type(value)).to_str(value)

def convert_from_str(cls: type, value: str) -> Any:
    """Returns value of `cls` parsed from text.

    Raises:
        TypeError: When `cls` is not registered.
        ValueError: When text does not represent value of `cls`.
    """
    return get_convertor(cls).from_str(cls, value)

# Built-in conversions

def _bool_to_str(value: bool) -> str: # noqa: FBT001
    return TRUE_STR[0] if value else FALSE_STR[0]

def _str_to_bool(cls: type, value: str) -> bool: # noqa: ARG001
    text = value.strip().lower()
    if text in TRUE_STR:
        return True
    if text in FALSE_STR:
        return False
    raise ValueError(f"'{value}' is not a valid bool string constant")

def _str_to_decimal(cls: type, value: str) -> Decimal:
    try:
        return cls(value)
    except InvalidOperation:
        raise ValueError(f"could not convert string to {cls.__name__}: '{value}'") from None

def _member_name(value: Enum) -> str:
    return value.name

def _find_member(cls: type[Enum], name: str, kind: str) -> Enum:
    wanted = name.strip().lower()
    for member_name, member in cls.__members__.items():
        if member_name.lower() == wanted:
            return member
    raise ValueError(f"'{name.strip()}' is not a valid member of {kind} {cls.__name__}")

def _str_to_enum(cls: type[Enum], value: str) -> Enum:
    return _find_member(cls, value, 'enum')

def _str_to_flag(cls: type[IntFlag], value: str) -> IntFlag:
    result = cls(0)
    for name in value.split('|'):
        result |= _find_member(cls, name, 'flag')
    return result

for _cls in (str, int, float, UUID, Path):
    register_convertor(_cls)
register_convertor(Decimal, from_str=_str_to_decimal)
register_convertor(bool, to_str=_bool_to_str, from_str=_str_to_bool)
register_convertor(Enum, to_str=_member_name, from_str=_str_to_enum)
# 'int' precedes 'Enum' in MRO of these, so they need own entries
register_convertor(IntEnum, to_str=_member_name, from_str=_str_to_enum)
register_convertor(IntFlag, to_str=_member_name, from_str=_str_to_flag)
del _cls
