r"""
 Copyright 2023 GSI Technology, Inc.

 Permission is hereby granted, free of charge, to any person obtaining a copy of
 this software and associated documentation files (the “Software”), to deal in
 the Software without restriction, including without limitation the rights to
 use, copy, modify, merge, publish, distribute, sublicense, and/or sell copies of
 the Software, and to permit persons to whom the Software is furnished to do so,
 subject to the following conditions:

 The above copyright notice and this permission notice shall be included in all
 copies or substantial portions of the Software.

 THE SOFTWARE IS PROVIDED “AS IS”, WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
 IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY, FITNESS
 FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR
 COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER
 IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
 CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE SOFTWARE.
"""

import logging
from enum import IntEnum
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Sequence, Type

from grammar_scaffold.utils.path_utils import user_tmp


class LogLevel(IntEnum):
    DEFAULT = logging.WARNING
    VERBOSE = logging.INFO
    DEBUG = logging.DEBUG

    @classmethod
    def names(cls: Type["LogLevel"]) -> Sequence[str]:
        names = []
        for log_level in cls:
            names.append(log_level.name)
        return names


def log_file_for(script_name: str) -> Path:
    log_dir = user_tmp() / "grammar-scaffold" / script_name
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / f"{script_name}.log"


def init_logger(logger: logging.Logger,
                script_name: str,
                log_level: int = LogLevel.DEFAULT.value) -> None:
    """Sends everything to a per-run log file under the user's data directory
    and records at log_level or above to the console. The previous run's log
    is rotated out, keeping the last 50."""

    logging.captureWarnings(True)
    logger.setLevel(logging.DEBUG)

    # Handlers from an earlier invocation in the same process.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    log_file = log_file_for(script_name)
    rollover = log_file.exists()

    log_formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
    handlers = [
        (RotatingFileHandler(log_file, backupCount=50), logging.DEBUG),
        (logging.StreamHandler(), log_level),
    ]
    for handler, level in handlers:
        handler.setFormatter(log_formatter)
        handler.setLevel(level)
        logger.addHandler(handler)

    if rollover:
        handlers[0][0].doRollover()
