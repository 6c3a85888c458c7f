# SPDX-FileCopyrightText: 2024-present The stdkit Projects
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: stdkit-base
# FILE:           stdkit/base/stringwrapper.py
# DESCRIPTION:    Encoding-aware string wrappers
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

"""stdkit-base - Encoding-aware string wrappers

String wrappers provide length, substring, search, word wrap and padding operations
that count in *text units* of particular backend instead of Python code points:

- `IntlStringWrapper` counts extended grapheme clusters (user-perceived characters),
  so ``'e\\u0301'`` (decomposed "é") has length 1. Supports only UTF-8.
- `NativeStringWrapper` counts code points. Supports UTF-8 and single-byte encodings.

The encoding of a wrapper determines how `bytes` are converted with `convert()`,
optionally to a second *convert encoding*.

Wrapper classes are kept in a registry, and `get_wrapper()` returns an instance of the
first registered wrapper that supports requested encodings.

Example::

    from stdkit.base.stringwrapper import PadType, get_wrapper

    wrapper = get_wrapper('UTF-8')
    wrapper.strlen('Ame\\u0301lie')       # 6
    wrapper.str_pad('abc', 7, '-', PadType.BOTH)  # '--abc--'
"""

from __future__ import annotations

import codecs
from abc import ABC, abstractmethod
from enum import IntEnum
from math import ceil
from typing import Self

import regex

from .logging import BraceMessage, get_logger
from .types import InvalidArgumentError, WrapperNotFoundError

_GRAPHEME = regex.compile(r'\X')

#: Single-byte encodings supported by `NativeStringWrapper`.
SINGLE_BYTE_ENCODINGS: list[str] = [
    'ASCII',
    'ISO-8859-1', 'ISO-8859-2', 'ISO-8859-3', 'ISO-8859-4', 'ISO-8859-5',
    'ISO-8859-6', 'ISO-8859-7', 'ISO-8859-8', 'ISO-8859-9', 'ISO-8859-10',
    'ISO-8859-11', 'ISO-8859-13', 'ISO-8859-14', 'ISO-8859-15', 'ISO-8859-16',
    'CP1250', 'CP1251', 'CP1252', 'CP1253', 'CP1254', 'CP1255', 'CP1256',
    'CP1257', 'CP1258',
    'KOI8-R', 'KOI8-U', 'CP866', 'CP437', 'CP850', 'TIS-620', 'MAC-ROMAN',
    ]

def canonical_encoding(encoding: str) -> str | None:
    """Returns canonical Python codec name for encoding, or `None` for unknown encoding.

    Example::

        canonical_encoding('UTF8')        # 'utf-8'
        canonical_encoding('Latin-1')     # 'iso8859-1'
    """
    try:
        return codecs.lookup(encoding).name
    except LookupError:
        return None

class PadType(IntEnum):
    "Side(s) padded by `AbstractStringWrapper.str_pad`."
    LEFT = 0
    RIGHT = 1
    BOTH = 2

class AbstractStringWrapper(ABC):
    """Abstract base class for string wrappers.

    Descendants must implement `supported_encodings`, `strlen`, `substr` and `strpos`.
    Other operations are built on top of them.

    Arguments:
        encoding: Text encoding.
        convert_encoding: Optional encoding for `convert()`.

    Raises:
        InvalidArgumentError: When encoding is not supported by wrapper.
    """
    def __init__(self, encoding: str='UTF-8', convert_encoding: str | None=None):
        self._encoding: str = ''
        self._convert_encoding: str | None = None
        self.set_encoding(encoding, convert_encoding)
    @classmethod
    @abstractmethod
    def supported_encodings(cls) -> list[str]:
        "Returns list of encodings supported by wrapper."
    @classmethod
    def is_supported(cls, encoding: str, convert_encoding: str | None=None) -> bool:
        """Returns True if wrapper supports encoding (and convert encoding).

        Encodings are compared by canonical codec names, so ``'utf8'`` and ``'UTF-8'``
        are the same encoding. Unknown encodings are not supported.
        """
        supported = {canonical_encoding(item) for item in cls.supported_encodings()}
        supported.discard(None)
        if canonical_encoding(encoding) not in supported:
            return False
        return convert_encoding is None or canonical_encoding(convert_encoding) in supported
    def set_encoding(self, encoding: str, convert_encoding: str | None=None) -> Self:
        """Sets encoding and optional convert encoding.

        Returns:
            This instance.

        Raises:
            InvalidArgumentError: When encoding is not supported by wrapper.
        """
        if not self.is_supported(encoding):
            raise InvalidArgumentError(f"Wrapper '{self.__class__.__name__}' doesn't support "
                                       f"character encoding '{encoding}'")
        if convert_encoding is not None and not self.is_supported(convert_encoding):
            raise InvalidArgumentError(f"Wrapper '{self.__class__.__name__}' doesn't support "
                                       f"character encoding '{convert_encoding}'")
        self._encoding = canonical_encoding(encoding)
        self._convert_encoding = None if convert_encoding is None else canonical_encoding(convert_encoding)
        return self
    @property
    def encoding(self) -> str:
        "Canonical name of text encoding."
        return self._encoding
    @property
    def convert_encoding(self) -> str | None:
        "Canonical name of convert encoding, or `None`."
        return self._convert_encoding
    @abstractmethod
    def strlen(self, value: str) -> int:
        "Returns length of string in text units."
    @abstractmethod
    def substr(self, value: str, offset: int=0, length: int | None=None) -> str:
        """Returns part of string.

        Arguments:
            value: Input string.
            offset: Start position in text units. Negative offset counts from the end.
            length: Number of text units. `None` means up to end of string, negative
                    value omits that many units from the end.
        """
    @abstractmethod
    def strpos(self, haystack: str, needle: str, offset: int=0) -> int | None:
        """Returns position (in text units) of first occurrence of `needle` in `haystack`
        at or after `offset`, or `None` when not found.
        """
    def text_units(self, value: str) -> list[str]:
        """Returns string split into text units.

        Descendants should override it, as this implementation calls `substr` for
        each unit.
        """
        return [self.substr(value, i, 1) for i in range(self.strlen(value))]
    def convert(self, data: bytes, reverse: bool=False) -> bytes: # noqa: FBT001, FBT002
        """Converts bytes from `encoding` to `convert_encoding`, or back when `reverse`
        is True. Data are returned unchanged when there is no convert encoding.

        Raises:
            UnicodeError: When data could not be decoded or encoded.
        """
        if self._convert_encoding is None or self._convert_encoding == self._encoding:
            return data
        source, target = self._encoding, self._convert_encoding
        if reverse:
            source, target = target, source
        return data.decode(source).encode(target)
    def word_wrap(self, value: str, width: int=75, break_: str='\n', cut: bool=False) -> str: # noqa: FBT001, FBT002
        """Wraps string to given number of text units.

        Arguments:
            value: Input string.
            width: Maximum line width.
            break_: Line break inserted into string.
            cut: When True, words longer than `width` are cut.

        Raises:
            InvalidArgumentError: When `break_` is empty, or when `cut` is requested
                                  with zero `width`.
        """
        if not value:
            return ''
        if not break_:
            raise InvalidArgumentError("Break string cannot be empty")
        if width == 0 and cut:
            raise InvalidArgumentError("Cannot force cut when width is zero")
        units = self.text_units(value)
        break_units = self.text_units(break_)
        break_length = len(break_units)
        def chunk(start: int, end: int) -> str:
            return ''.join(units[start:end])
        result = []
        last_start = last_space = 0
        current = 0
        while current < len(units):
            char = units[current]
            if units[current:current + break_length] == break_units:
                result.append(chunk(last_start, current + break_length))
                current += break_length
                last_start = last_space = current
                continue
            if char == ' ':
                if current - last_start >= width:
                    result.append(chunk(last_start, current) + break_)
                    last_start = current + 1
                last_space = current
            elif current - last_start >= width and cut and last_start >= last_space:
                result.append(chunk(last_start, current) + break_)
                last_start = last_space = current
            elif current - last_start >= width and last_start < last_space:
                result.append(chunk(last_start, last_space) + break_)
                last_start = last_space = last_space + 1
            current += 1
        if last_start != current:
            result.append(chunk(last_start, current))
        return ''.join(result)
    def str_pad(self, value: str, pad_length: int, pad_string: str=' ',
                pad_type: PadType=PadType.RIGHT) -> str:
        """Pads string to `pad_length` text units with `pad_string`.

        String longer than `pad_length` is returned unchanged.

        Raises:
            InvalidArgumentError: When `pad_string` is empty.
        """
        if not pad_string:
            raise InvalidArgumentError("Padding string cannot be empty")
        diff = pad_length - self.strlen(value)
        if diff <= 0:
            return value
        pad_unit = self.strlen(pad_string)
        def padding(size: int) -> str:
            return self.substr(pad_string * ceil(size / pad_unit), 0, size)
        match pad_type:
            case PadType.LEFT:
                return padding(diff) + value
            case PadType.BOTH:
                return padding(diff // 2) + value + padding(diff - diff // 2)
            case _:
                return value + padding(diff)

class IntlStringWrapper(AbstractStringWrapper):
    """String wrapper that works with extended grapheme clusters.

    Uses `regex` module for Unicode text segmentation.
    """
    @classmethod
    def supported_encodings(cls) -> list[str]:
        return ['UTF-8']
    def text_units(self, value: str) -> list[str]:
        return _GRAPHEME.findall(value)
    def strlen(self, value: str) -> int:
        return len(self.text_units(value))
    def substr(self, value: str, offset: int=0, length: int | None=None) -> str:
        units = self.text_units(value)[offset:]
        return ''.join(units if length is None else units[:length])
    def strpos(self, haystack: str, needle: str, offset: int=0) -> int | None:
        units = self.text_units(haystack)
        target = self.text_units(needle)
        size = len(target)
        start = offset + len(units) if offset < 0 else offset
        for i in range(max(start, 0), len(units) - size + 1):
            if units[i:i + size] == target:
                return i
        return None

class NativeStringWrapper(AbstractStringWrapper):
    "String wrapper that works with Unicode code points."
    @classmethod
    def supported_encodings(cls) -> list[str]:
        return ['UTF-8', *SINGLE_BYTE_ENCODINGS]
    def text_units(self, value: str) -> list[str]:
        return list(value)
    def strlen(self, value: str) -> int:
        return len(value)
    def substr(self, value: str, offset: int=0, length: int | None=None) -> str:
        value = value[offset:]
        return value if length is None else value[:length]
    def strpos(self, haystack: str, needle: str, offset: int=0) -> int | None:
        return None if (pos := haystack.find(needle, offset)) < 0 else pos

_DEFAULT_WRAPPERS: tuple[type[AbstractStringWrapper], ...] = (IntlStringWrapper, NativeStringWrapper)
_wrappers: list[type[AbstractStringWrapper]] = list(_DEFAULT_WRAPPERS)

def get_registered_wrappers() -> list[type[AbstractStringWrapper]]:
    "Returns list of registered wrapper classes in lookup order."
    return list(_wrappers)

def register_wrapper(cls: type[AbstractStringWrapper]) -> None:
    """Registers wrapper class at the end of lookup order. Already registered class is
    not registered again.

    Raises:
        InvalidArgumentError: When `cls` is not `AbstractStringWrapper` descendant.
    """
    if not (isinstance(cls, type) and issubclass(cls, AbstractStringWrapper)):
        raise InvalidArgumentError(f"Wrapper must be AbstractStringWrapper descendant, {cls!r} given")
    if cls not in _wrappers:
        _wrappers.append(cls)

def unregister_wrapper(cls: type[AbstractStringWrapper]) -> None:
    "Removes wrapper class from registry. Does nothing if class is not registered."
    if cls in _wrappers:
        _wrappers.remove(cls)

def reset_registered_wrappers() -> None:
    "Restores default registry content."
    _wrappers[:] = _DEFAULT_WRAPPERS

def get_wrapper(encoding: str='UTF-8', convert_encoding: str | None=None) -> AbstractStringWrapper:
    """Returns instance of first registered wrapper that supports encoding(s).

    Raises:
        WrapperNotFoundError: When no registered wrapper supports requested encodings.
    """
    for cls in _wrappers:
        if cls.is_supported(encoding, convert_encoding):
            get_logger('stdkit.base.stringwrapper').debug(
                BraceMessage("Using {0} for {1!r}", cls.__name__, encoding))
            return cls(encoding, convert_encoding)
    raise WrapperNotFoundError(f"No wrapper found supporting '{encoding}'"
                               + ('' if convert_encoding is None else f" and '{convert_encoding}'"),
                               encoding=encoding, convert_encoding=convert_encoding)

def get_single_byte_encodings() -> list[str]:
    "Returns list of single-byte encodings."
    return list(SINGLE_BYTE_ENCODINGS)

def is_single_byte_encoding(encoding: str) -> bool:
    "Returns True if encoding is a single-byte encoding."
    return (name := canonical_encoding(encoding)) is not None \
        and name in {canonical_encoding(item) for item in SINGLE_BYTE_ENCODINGS}

def is_valid_utf8(value: str | bytes) -> bool:
    """Returns True if value is valid UTF-8 data.

    `bytes` must decode as UTF-8, `str` must be encodable to UTF-8 (i.e. must not
    contain lone surrogates).
    """
    try:
        if isinstance(value, bytes):
            value.decode('utf-8')
        else:
            value.encode('utf-8')
    except UnicodeError:
        return False
    return True
