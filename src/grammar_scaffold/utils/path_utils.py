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

import sys
from pathlib import Path
from typing import Union

PACKAGE_ROOT = Path(__file__).resolve().parent.parent


def path_wrt_package(file_path: Union[str, Path]) -> Path:
    """Resolves a path relative to the installed grammar_scaffold package,
    e.g. the directory holding its templates."""
    return PACKAGE_ROOT / file_path


def user_tmp() -> Path:
    if sys.platform == "linux":
        return Path(Path.home(), ".local", "share")
    elif sys.platform == "win32" or sys.platform == "cygwin":
        return Path(Path.home(), "AppData", "Roaming")
    elif sys.platform == "darwin":
        return Path(Path.home(), "Library", "Application Support")
    else:
        raise RuntimeError("Unsupported platform: " + sys.platform)
