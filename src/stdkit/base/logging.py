# SPDX-FileCopyrightText: 2024-present The stdkit Projects
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: stdkit-base
# FILE:           stdkit/base/logging.py
# DESCRIPTION:    Context-based logging
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

"""stdkit-base - Context-based logging

This module provides a thin context-based logging layer built on top of standard
`logging` module. Package classes do not use hard-coded module loggers. Instead they
ask `get_logger()` for a logger bound to themselves (the *agent*), and the
`LoggingManager` decides the name of the underlying `logging.Logger`.

The context-based logging:

1. Adds `agent` and `context` information into `logging.LogRecord`, that could be
   used in logging entry formats.
2. Allows to build logger names from agent names, and to rename agents.

Message wrapper `BraceMessage` defers `str.format` interpolation until the record
is actually emitted.

Example::

    from stdkit.base.logging import get_logger, logging_manager, AGENT

    logging_manager.logger_fmt = ['myapp', AGENT]
    get_logger(obj).debug("Started")  # Logger 'myapp.<module>.<Class>'
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any


class FormatElement(Enum):
    """Sentinels used within `LoggingManager.logger_fmt` list."""
    AGENT = 1

#: Sentinel replaced with agent name in `LoggingManager.logger_fmt`.
AGENT: FormatElement = FormatElement.AGENT

class BraceMessage:
    """Lazy logging message wrapper using brace (`str.format`) style formatting.

    Example::

        logger.debug(BraceMessage("Option {0!r} ignored", name))
    """
    def __init__(self, fmt: str, /, *args, **kwargs):
        self.fmt: str = fmt
        self.args: tuple[Any, ...] = args
        self.kwargs: dict[str, Any] = kwargs
    def __str__(self) -> str:
        return self.fmt.format(*self.args, **self.kwargs)

class ContextFilter(logging.Filter):
    """Logging filter ensuring `agent` and `context` fields exist on `LogRecord`.

    Attach it to handlers whose formatters use these fields, so records from
    standard loggers do not raise `AttributeError`.
    """
    def filter(self, record) -> bool:
        for attr in ('agent', 'context'):
            if not hasattr(record, attr):
                setattr(record, attr, None)
        return True

class ContextLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter injecting `agent` and `context` info into log records.

    The `context` is taken from `log_context` attribute of the agent object at the
    time the message is logged, or `None` if agent has no such attribute.

    Arguments:
        logger: The standard `logging.Logger` instance to wrap.
        agent: The original agent object or string passed to `get_logger`.
        agent_name: The resolved string name for the agent.
    """
    def __init__(self, logger: logging.Logger, agent: Any, agent_name: str):
        self.agent = agent
        super().__init__(logger, {'agent': agent_name})
    def process(self, msg: Any, kwargs: dict[str, Any]) -> tuple[Any, dict[str, Any]]:
        extra = dict(self.extra, context=getattr(self.agent, 'log_context', None))
        if 'extra' in kwargs:
            extra.update(kwargs['extra'])
        kwargs['extra'] = extra
        return msg, kwargs

class LoggingManager:
    """Logging manager.

    Keeps agent name mappings and the logger name format.
    """
    def __init__(self):
        self._agent_map: dict[str, str] = {}
        self.__logger_fmt: list[str | FormatElement] = [AGENT]
        self._logger_factory: Callable = logging.getLogger
    def set_logger_factory(self, factory: Callable) -> None:
        """Set a callable which is used to create a Logger.

        The factory has the following signature: `factory(name)`
        """
        self._logger_factory = factory
    def reset(self) -> None:
        """Resets manager to defaults: no agent mappings, `logger_fmt` is `[AGENT]`
        and `logging.getLogger` is the logger factory.
        """
        self._agent_map.clear()
        self.__logger_fmt = [AGENT]
        self._logger_factory = logging.getLogger
    @property
    def logger_fmt(self) -> list[str | FormatElement]:
        """Logger name format.

        List of strings and at most one `AGENT` sentinel. Empty strings are removed.
        The `logging.Logger` name is constructed by joining elements of this list with
        dots, with `AGENT` replaced by the agent name.

        Raises:
            ValueError: When assigned list contains more than one `AGENT` sentinel,
                        or items of other types.
        """
        return self.__logger_fmt
    @logger_fmt.setter
    def logger_fmt(self, value: list[str | FormatElement]) -> None:
        result = []
        for item in value:
            match item:
                case str():
                    if item:
                        result.append(item)
                case FormatElement.AGENT:
                    if AGENT in result:
                        raise ValueError("Only one occurence of sentinel AGENT allowed")
                    result.append(item)
                case _:
                    raise ValueError(f"Unsupported item type {type(item)}")
        self.__logger_fmt = result
    def _get_logger_name(self, agent_name: str) -> str:
        return '.'.join(agent_name if item is AGENT else item for item in self.logger_fmt)
    def get_agent_name(self, agent: Any) -> str:
        """Returns the string name for a given agent.

        Strings are used directly. Objects use their `_agent_name_` attribute if
        defined, otherwise `module.ClassQualname`. Agent mapping defined via
        `set_agent_mapping` is applied to the result.
        """
        agent_name: Any = agent
        if not isinstance(agent, str):
            if not (agent_name := getattr(agent, '_agent_name_', None)):
                agent_name = f'{agent.__class__.__module__}.{agent.__class__.__qualname__}'
        agent_name = str(agent_name)
        return self._agent_map.get(agent_name, agent_name)
    def set_agent_mapping(self, agent: str, new_agent: str | None) -> None:
        """Sets or removes (with `None` or empty string) the mapping of an agent name
        to another name.
        """
        if new_agent:
            self._agent_map[agent] = str(new_agent)
        else:
            self._agent_map.pop(agent, None)
    def get_agent_mapping(self, agent: str) -> str | None:
        "Returns current name mapping for agent, or `None`."
        return self._agent_map.get(agent)
    def get_logger(self, agent: Any) -> ContextLoggerAdapter:
        """Returns `ContextLoggerAdapter` for specified agent.

        Arguments:
            agent: Agent object or agent name.
        """
        agent_name = self.get_agent_name(agent)
        logger = self._logger_factory(self._get_logger_name(agent_name))
        return ContextLoggerAdapter(logger, agent, agent_name)

#: Context logging manager.
logging_manager: LoggingManager = LoggingManager()
#: Shortcut to global `.LoggingManager.get_logger` function.
get_logger = logging_manager.get_logger
#: Shortcut to global `.LoggingManager.get_agent_name` function.
get_agent_name = logging_manager.get_agent_name
#: Shortcut to global `.LoggingManager.set_agent_mapping` function.
set_agent_mapping = logging_manager.set_agent_mapping
