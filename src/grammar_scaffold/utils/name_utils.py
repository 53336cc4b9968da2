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

import json
import re

RE_WORD_START: re.Pattern = re.compile(r"(^|\W)(\w)")


def go_title(name: str) -> str:
    """Upper-cases the first letter of every word and leaves the remaining
    letters alone, so that JSONLexer stays JSONLexer and json becomes Json."""
    return RE_WORD_START.sub(
        lambda match: match.group(1) + match.group(2).upper(),
        name)


def go_quote(value: str) -> str:
    """Renders value as a double-quoted Go string literal.

    File names that are not valid UTF-8 reach Python as surrogate escapes
    (PEP 383). Go has no \\u escape for those, so their literal spells out
    the original bytes as \\xNN instead."""

    value = str(value)
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return go_quote_bytes(value.encode("utf-8", "surrogateescape"))
    return json.dumps(value, ensure_ascii=False)


def go_quote_bytes(value: bytes) -> str:
    quoted = []
    for byte in value:
        char = chr(byte)
        if char in "\"\\":
            quoted.append("\\" + char)
        elif 0x20 <= byte < 0x7f:
            quoted.append(char)
        else:
            quoted.append(f"\\x{byte:02x}")
    return "\"" + "".join(quoted) + "\""
