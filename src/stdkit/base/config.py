# SPDX-FileCopyrightText: 2024-present The stdkit Projects
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: stdkit-base
# FILE:           stdkit/base/config.py
# DESCRIPTION:    Options in configuration files
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

"""stdkit-base - Options in configuration files

This module connects `Options` objects with configuration files in `configparser`
format. A section of configuration file holds values for one `Options` instance.

Values read from file are strings. Before they are passed to option setter, they are
converted with `stdkit.base.strconv` to the type annotated on the setter's value
parameter (when there is a convertor for it). Empty value means `None`.

Example::

    from configparser import ConfigParser
    from stdkit.base.config import EnvExtendedInterpolation, load_options

    parser = ConfigParser(interpolation=EnvExtendedInterpolation())
    parser.read_string('''
    [server]
    port = 9000
    home = ${env:HOME}/server
    ''')
    opts = load_options(ServerOptions(), parser, 'server')
"""

from __future__ import annotations

import os
import re
from collections.abc import Callable
from configparser import DEFAULTSECT, ConfigParser, ExtendedInterpolation
from inspect import Parameter, signature
from types import NoneType, UnionType
from typing import Any, TypeVar, Union, get_args, get_origin, get_type_hints

from .logging import BraceMessage, get_logger
from .options import Options, setter_for
from .strconv import convert_from_str, convert_to_str, has_convertor
from .types import InvalidArgumentError

T = TypeVar("T", bound=Options)

#: Escaped dollar sign, or reference to environment variable
_ENV_REF = re.compile(r'\$(?:\$|\{env:([^${}:]*)\})')

def _expand_env(match: re.Match) -> str:
    if (name := match.group(1)) is None:
        return match.group(0)
    return os.getenv(name.upper(), '').replace('$', '$$')

class EnvExtendedInterpolation(ExtendedInterpolation):
    """`configparser.ExtendedInterpolation` that also understands references into
    the virtual "env" section.

    `${env:name}` is replaced with value of environment variable NAME (the name is
    upper-cased), or with empty string when the variable is not defined. Values taken
    from environment are used literally, they are not interpolated further.

    Example::

       ${env:path} is reference to PATH environment variable.
    """
    def _interpolate_some(self, parser, option, accum, rest, section, map, # noqa: A002
                          depth):
        super()._interpolate_some(parser, option, accum, _ENV_REF.sub(_expand_env, rest),
                                  section, map, depth)

def _value_type(setter: Callable) -> type | None:
    params = [p for p in signature(setter).parameters.values()
              if p.kind in (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)]
    if not params:
        return None
    hint = get_type_hints(getattr(setter, '__func__', setter)).get(params[0].name)
    if isinstance(hint, UnionType) or get_origin(hint) is Union:
        args = [arg for arg in get_args(hint) if arg is not NoneType]
        hint = args[0] if len(args) == 1 else None
    return hint if isinstance(hint, type) else None

def _from_config(options: Options, name: str, value: str) -> Any:
    if value == '':
        return None
    if (setter := setter_for(options, name)) is None:
        return value
    cls = _value_type(setter)
    if cls is None or cls is str or not has_convertor(cls):
        return value
    return convert_from_str(cls, value)

def load_options(options: T, parser: ConfigParser, section: str) -> T:
    """Sets option values from configuration section.

    Values inherited from the DEFAULT section are used only for options that have
    a setter, so DEFAULT may hold variables shared by interpolation. Options could
    be loaded from DEFAULT section itself, in which case all its values are used.

    Arguments:
        options: Option object to be updated.
        parser: Configuration.
        section: Name of section with option values.

    Returns:
        Updated option object.

    Raises:
        InvalidArgumentError: When section is missing.
        BadMethodCallError: When section contains option without setter (in strict mode).
        ValueError: When value could not be converted to type expected by setter.
    """
    if not parser.has_section(section) and section != DEFAULTSECT:
        raise InvalidArgumentError(f"Missing configuration section '{section}'", section=section)
    defaults = {} if section == DEFAULTSECT else parser.defaults()
    values = {name: _from_config(options, name, value) for name, value in parser.items(section)
              if name not in defaults or setter_for(options, name) is not None}
    get_logger(options).debug(BraceMessage("Loading {0} option(s) from section [{1}]",
                                           len(values), section))
    options.set_from_array(values)
    return options

def save_options(options: Options, parser: ConfigParser, section: str) -> None:
    """Writes option values into configuration section.

    The section is created when it does not exist. Options with `None` value are not
    written. The `$` character is escaped as `$$`.

    Arguments:
        options: Option object.
        parser: Configuration.
        section: Name of section for option values.

    Raises:
        TypeError: When value type has no string convertor.
    """
    if section != DEFAULTSECT and not parser.has_section(section):
        parser.add_section(section)
    for name, value in options.to_dict().items():
        if value is not None:
            text = value if isinstance(value, str) else convert_to_str(value)
            parser.set(section, name, text.replace('$', '$$'))
