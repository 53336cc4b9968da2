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

from pathlib import Path
from typing import Optional, Union


class ScaffoldError(Exception):
    """Base class of every failure raised while generating scaffolding."""


class ConfigError(ScaffoldError):
    """Raised when the YAML configuration cannot be read or is invalid."""


class DescriptorParseError(ScaffoldError):
    """Raised when a project descriptor is unreadable or malformed. Callers
    must treat this as fatal; no partially populated Project is returned."""

    def __init__(self: "DescriptorParseError",
                 descriptor_path: Union[str, Path],
                 reason: str) -> None:
        self.descriptor_path = Path(descriptor_path)
        self.reason = reason
        super().__init__(
            f"Failed to read descriptor {str(self.descriptor_path)!r}: {reason}")


class TemplateExecutionError(ScaffoldError):
    """Raised when a template references unavailable data or cannot be
    evaluated."""

    def __init__(self: "TemplateExecutionError",
                 template_name: str,
                 reason: str) -> None:
        self.template_name = template_name
        self.reason = reason
        super().__init__(
            f"Failed to render template {template_name!r}: {reason}")


class EmissionError(ScaffoldError):
    """Raised when writing or formatting a generated file fails.

    Parameters:
        stage: which step failed, one of create, write, close, format or
               replace.
        path: the target file being emitted."""

    def __init__(self: "EmissionError",
                 stage: str,
                 path: Union[str, Path],
                 reason: Optional[str] = None) -> None:
        self.stage = stage
        self.path = Path(path)
        self.reason = reason
        message = f"Failed to {stage} {str(self.path)!r}"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(message)
