# SPDX-FileCopyrightText: 2024-present The stdkit Projects
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: stdkit-base
# FILE:           stdkit/base/types.py
# DESCRIPTION:    Exceptions
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

"""stdkit-base - Exceptions

This module provides the exception classes used across the `stdkit-base` package.

All package exceptions derive from `Error`, and also from the builtin exception
that describes the same condition, so callers can catch either of them.
"""

from __future__ import annotations

from typing import Any


class Error(Exception):
    """Exception intended as a base for application-related errors.

    Unlike the standard `Exception`, this class accepts arbitrary keyword
    arguments during initialization. These keyword arguments are stored as
    attributes on the exception instance.

    Important:
        Attribute lookup on this class never fails, as all attributes that are not
        actually set have `None` value. The special attribute `__notes__` (used by
        `add_note`) is excluded from this behavior.

    Example::

        try:
            options.set_from_array(data)
        except Error as e:
            if e.option is not None:
                print(f"Bad option: {e.option}")
    """
    def __init__(self, *args, **kwargs):
        super().__init__(*args)
        for name, value in kwargs.items():
            setattr(self, name, value)
    def __getattr__(self, name) -> Any | None:
        if name == '__notes__':
            raise AttributeError
        return None

class InvalidArgumentError(Error, ValueError):
    """Raised when a function receives an argument it can not work with.

    Typical causes are a non-mapping value passed where a mapping of options is
    expected, an attempt to unset an option that does not exist, or an unsupported
    string encoding.
    """

class BadMethodCallError(Error, AttributeError):
    """Raised when an option has no callable accessor method.

    Derives from `AttributeError`, so `hasattr()` and `getattr()` with default value
    work as expected on `Options` instances.

    Attributes `option` (the field name as used by caller) and `method` (the expected
    accessor name) are set by the raising code.
    """

class WrapperNotFoundError(Error, LookupError):
    "Raised when no registered string wrapper supports the requested encoding."
