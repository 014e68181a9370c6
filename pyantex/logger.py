# Copyright 2024 inuex35
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


"""Logging configuration for the ANTEX reader.

Every module logs through ``logging.getLogger(__name__)``, so all records end
up below the ``pyantex`` logger. The helpers here attach handlers to that
logger (or to any of its children) and add a TRACE level used for
line-by-line parser tracing.
"""

import logging
import sys
from enum import Enum
from typing import Optional

ROOT_LOGGER_NAME = "pyantex"


class LogLevel(Enum):
    """Log levels understood by :func:`setup_logger`"""
    TRACE = 5
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


logging.addLevelName(LogLevel.TRACE.value, "TRACE")


def trace(self, message, *args, **kwargs):
    """Log ``message`` at TRACE level"""
    if self.isEnabledFor(LogLevel.TRACE.value):
        self._log(LogLevel.TRACE.value, message, args, **kwargs)


logging.Logger.trace = trace


def _level_value(level: str) -> int:
    try:
        return LogLevel[level.upper()].value
    except KeyError:
        raise ValueError(f"Unknown log level: {level!r}") from None


class ColoredFormatter(logging.Formatter):
    """Formatter colouring the level name for terminal output"""

    COLORS = {
        'TRACE': '\033[36m',     # Cyan
        'DEBUG': '\033[34m',     # Blue
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        # work on a copy so file handlers sharing the record stay uncoloured
        record = logging.makeLogRecord(record.__dict__)
        log_color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{log_color}{record.levelname}{self.RESET}"
        return super().format(record)


def setup_logger(name: str = ROOT_LOGGER_NAME,
                 level: str = "WARNING",
                 log_file: Optional[str] = None,
                 console: bool = True) -> logging.Logger:
    """
    Attach handlers to a pyantex logger

    Parameters:
    -----------
    name : str
        Logger name, ``pyantex`` or one of its module loggers
        (e.g. ``pyantex.io.antex``)
    level : str
        Log level (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_file : Optional[str]
        Log file path (if None, no file logging)
    console : bool
        Enable console output on stderr

    Returns:
    --------
    logging.Logger
        Configured logger
    """
    value = _level_value(level)
    logger = logging.getLogger(name)
    logger.setLevel(value)
    logger.handlers = []

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(value)
        console_handler.setFormatter(ColoredFormatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%H:%M:%S'
        ))
        logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(value)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)

    # module loggers with their own handlers must not print twice
    if name != ROOT_LOGGER_NAME:
        logger.propagate = not (console or log_file)

    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Get logger by name"""
    return logging.getLogger(name)


class LogContext:
    """Context manager for a temporary log level change

    Handy to silence the diagnostics of a file known to contain malformed
    antennas::

        with LogContext(get_logger(), "CRITICAL"):
            atx = read_antex("igs20.atx")
    """

    def __init__(self, logger: logging.Logger, level: str):
        self.logger = logger
        self.new_level = _level_value(level)
        self.old_level = None

    def __enter__(self):
        self.old_level = self.logger.level
        self.logger.setLevel(self.new_level)
        return self.logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.logger.setLevel(self.old_level)


class LoggerConfig:
    """Logger configuration with per-module levels"""

    def __init__(self):
        self.module_levels = {}
        self.default_level = "WARNING"
        self.log_file = None
        self.console = True

    def set_module_level(self, module_name: str, level: str):
        """Set log level for one module, e.g. ``pyantex.io.antex``"""
        _level_value(level)
        self.module_levels[module_name] = level
        logger = logging.getLogger(module_name)
        if logger.handlers:
            logger.setLevel(_level_value(level))
            for handler in logger.handlers:
                handler.setLevel(_level_value(level))

    def set_default_level(self, level: str):
        """Set the level of the ``pyantex`` logger"""
        _level_value(level)
        self.default_level = level

    def get_level_for_module(self, module_name: str) -> str:
        """Get log level for specific module"""
        return self.module_levels.get(module_name, self.default_level)

    def configure_from_dict(self, config: dict):
        """Configure from dictionary"""
        if 'default_level' in config:
            self.set_default_level(config['default_level'])
        if 'log_file' in config:
            self.log_file = config['log_file']
        if 'console' in config:
            self.console = config['console']
        if 'module_levels' in config:
            for module, level in config['module_levels'].items():
                self.set_module_level(module, level)

    def setup_all_loggers(self):
        """Setup the package logger and every configured module logger"""
        setup_logger(ROOT_LOGGER_NAME, self.default_level, self.log_file, self.console)
        for module, level in self.module_levels.items():
            setup_logger(module, level, self.log_file, self.console)


logger_config = LoggerConfig()


def setup_logger_from_config(config: dict):
    """Setup loggers from configuration dictionary

    Example config:
    {
        'default_level': 'INFO',
        'log_file': 'antex.log',
        'console': True,
        'module_levels': {
            'pyantex.io.antex': 'TRACE',
            'pyantex.io.fields': 'ERROR'
        }
    }
    """
    logger_config.configure_from_dict(config)
    logger_config.setup_all_loggers()
