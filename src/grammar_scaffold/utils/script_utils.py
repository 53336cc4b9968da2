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
import re
from functools import wraps
from typing import Any, Callable, Dict

import click

from grammar_scaffold.common.errors import ConfigError, ScaffoldError
from grammar_scaffold.utils.config_utils import load_config
from grammar_scaffold.utils.log_utils import LogLevel

LOGGER = logging.getLogger(__name__)

USAGE_EXIT_CODE = 1

RE_GO_IDENTIFIER: re.Pattern = re.compile("[A-Za-z_][A-Za-z0-9_]*")


def collect_log_level(ctx: click.Context,
                      option: click.Option,
                      log_level: str) -> int:
    log_level = LogLevel[log_level]
    return log_level.value


def collect_config(ctx: click.Context,
                   option: click.Option,
                   config_path: str) -> Dict[str, Any]:
    try:
        return load_config(config_path)
    except ConfigError as error:
        raise click.BadParameter(str(error), ctx=ctx, param=option) from error


def collect_package_name(ctx: click.Context,
                         argument: click.Argument,
                         package_name: str) -> str:
    if RE_GO_IDENTIFIER.fullmatch(package_name) is None:
        raise click.BadParameter(
            f"{package_name!r} is not a valid Go package name",
            ctx=ctx, param=argument)
    return package_name


def report_failures(fn: Callable) -> Callable:
    """Reports ScaffoldErrors raised by a command as click errors, so that the
    invocation ends with a message on stderr and a non-zero exit status."""

    @wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except ScaffoldError as error:
            LOGGER.debug("Command failed", exc_info=True)
            raise click.ClickException(str(error)) from error

    return wrapper


class ScaffoldGroup(click.Group):
    """Command group whose usage errors (missing or unknown commands, missing
    or malformed arguments) end the process with status 1."""

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("no_args_is_help", False)
        super().__init__(*args, **kwargs)

    def make_context(self, *args, **kwargs):
        try:
            return super().make_context(*args, **kwargs)
        except click.UsageError as error:
            error.exit_code = USAGE_EXIT_CODE
            raise

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except click.UsageError as error:
            error.exit_code = USAGE_EXIT_CODE
            raise
