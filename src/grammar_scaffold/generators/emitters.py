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
import os
import subprocess
import tempfile
from contextlib import suppress
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from grammar_scaffold.common.errors import EmissionError
from grammar_scaffold.utils.config_utils import DEFAULT_CONFIG

LOGGER = logging.getLogger(__name__)


def default_file_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


@dataclass
class SourceFormatter:
    """Runs an external formatter that rewrites the file at the given path in
    place, e.g. gofmt -w."""

    command: List[str] = field(
        default_factory=lambda: list(DEFAULT_CONFIG["formatter"]))

    def __call__(self: "SourceFormatter", path: Path) -> None:
        args = [*self.command, str(path)]
        LOGGER.debug("Running: %s", " ".join(args))
        subprocess.run(args, check=True, capture_output=True, text=True)


@dataclass
class FileEmitter:
    """Writes generated sources to disk. The body is written to a temporary
    sibling file which is formatted and then moved over the target, so the
    target is only ever replaced by a completely written and formatted
    file."""

    formatter: Optional[SourceFormatter] = None

    def emit(self: "FileEmitter", output_path: Path, file_body: str) -> bool:
        """Returns whether output_path was (re)written.

        Raises:
            EmissionError: naming the failed stage, one of create, write,
                           close, format or replace."""

        output_path = Path(output_path)

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_name = tempfile.mkstemp(
                dir=output_path.parent,
                prefix=f".{output_path.name}.",
                suffix=output_path.suffix)
        except OSError as error:
            raise EmissionError("create", output_path, str(error)) from error

        temp_path = Path(temp_name)
        try:
            self.write(fd, output_path, file_body)
            self.format(temp_path, output_path)
            return self.replace(temp_path, output_path)
        finally:
            if temp_path.exists():
                temp_path.unlink()

    def write(self: "FileEmitter",
              fd: int,
              output_path: Path,
              file_body: str) -> None:
        f = open(fd, "wt", encoding="utf-8", newline="\n")

        try:
            f.write(file_body)
        except OSError as error:
            with suppress(OSError):
                f.close()
            raise EmissionError("write", output_path, str(error)) from error

        try:
            f.close()
        except OSError as error:
            raise EmissionError("close", output_path, str(error)) from error

    def format(self: "FileEmitter",
               temp_path: Path,
               output_path: Path) -> None:
        if self.formatter is None:
            return

        LOGGER.info("Formatting: %s ...", output_path)
        try:
            self.formatter(temp_path)
        except FileNotFoundError as error:
            raise EmissionError(
                "format", output_path,
                f"formatter not found: {self.formatter.command[0]}") from error
        except subprocess.CalledProcessError as error:
            reason = (error.stderr or "").strip() \
                or f"formatter exited with status {error.returncode}"
            raise EmissionError("format", output_path, reason) from error
        except OSError as error:
            raise EmissionError("format", output_path, str(error)) from error

    def replace(self: "FileEmitter",
                temp_path: Path,
                output_path: Path) -> bool:
        try:
            if output_path.exists():
                if temp_path.read_bytes() == output_path.read_bytes():
                    LOGGER.info("No changes, skipping file: %s ...", output_path)
                    return False
                mode = output_path.stat().st_mode & 0o777
            else:
                mode = default_file_mode()

            LOGGER.info("Writing to file: %s ...", output_path)
            os.chmod(temp_path, mode)
            os.replace(temp_path, output_path)
        except OSError as error:
            raise EmissionError("replace", output_path, str(error)) from error

        return True
