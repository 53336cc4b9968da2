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
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from cerberus import Validator

from grammar_scaffold.common.errors import ConfigError

LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "import_path": "bramp.net/antlr4",
    "max_tokens": 1000000,
    "formatter": ["gofmt", "-w"],
}

CONFIG_SCHEMA = {
    "import_path": {
        "type": "string",
        "empty": False,
    },
    "max_tokens": {
        "type": "integer",
        "min": 1,
    },
    "formatter": {
        "type": "list",
        "minlength": 1,
        "schema": {
            "type": "string",
            "empty": False,
        },
    },
}


def validate_config(config: Dict[str, Any]) -> None:
    config_validator = Validator(CONFIG_SCHEMA)
    if not config_validator.validate(config):
        error_message = \
            f"Validation failed for config: {config_validator.errors}"
        raise ConfigError(error_message)


def load_config(config_path: Optional[Union[str, Path]]) -> Dict[str, Any]:
    """Returns the default configuration overlaid with the YAML file at
    config_path, if one is given."""

    config = dict(DEFAULT_CONFIG)

    if config_path is None:
        return config

    if not isinstance(config_path, Path):
        config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"File not found: {config_path}")

    try:
        with open(config_path, "rt") as f:
            overrides = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as error:
        raise ConfigError(
            f"Failed to read config {config_path}: {error}") from error

    if overrides is None:
        overrides = {}
    elif not isinstance(overrides, dict):
        raise ConfigError(
            f"Expected a mapping in {config_path}, "
            f"got {overrides.__class__.__name__}")

    try:
        validate_config(overrides)
    except ConfigError as error:
        error_message = \
            f"Validation failed for {config_path}: {error}"
        raise ConfigError(error_message) from error

    LOGGER.debug("Loaded config from %s: %s", config_path, overrides)
    config.update(overrides)
    return config
