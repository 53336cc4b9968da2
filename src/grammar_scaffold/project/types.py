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
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence, Type

LOGGER = logging.getLogger(__name__)

LEXER_GRAMMAR_SUFFIX = "Lexer.g4"


class CaseFolding(Enum):
    """Case transformation applied to input text before it is lexed."""
    NONE: str = ""
    UPPER: str = "UPPER"
    LOWER: str = "lower"

    @classmethod
    def of(cls: Type["CaseFolding"], value: Optional[str]) -> "CaseFolding":
        """Maps a descriptor's caseInsensitiveType to a CaseFolding.
        Unrecognized values mean no case transformation."""

        if value is None:
            return cls.NONE

        for case_folding in cls:
            if case_folding.value == value:
                return case_folding

        LOGGER.warning("Unrecognized caseInsensitiveType %r, input will not "
                       "be case-folded", value)
        return cls.NONE


def lexer_name_for(grammar_name: str) -> str:
    return f"{grammar_name}Lexer"


def parser_name_for(grammar_name: str) -> str:
    return f"{grammar_name}Parser"


def listener_name_for(grammar_name: str,
                      grammar_files: Sequence[str] = ()) -> str:
    """ANTLR names the listener after the parser grammar. A combined grammar
    G yields GListener, while a split GParser.g4 yields GParserListener."""

    parser_grammar = f"{parser_name_for(grammar_name)}.g4"
    for grammar_file in grammar_files:
        if Path(grammar_file).name == parser_grammar:
            return f"{parser_name_for(grammar_name)}Listener"
    return f"{grammar_name}Listener"


def is_lexer_grammar(grammar_file: str) -> bool:
    return Path(grammar_file).name.endswith(LEXER_GRAMMAR_SUFFIX)


@dataclass
class Project:
    """Generation metadata of one grammar-derived Go package.

    Parameters:
        package_name: Go package the grammar is generated into.
        long_name: display name used in generated comments.
        lexer_name: type name of the generated lexer.
        parser_name: type name of the generated parser.
        listener_name: type name of the generated listener interface.
        entry_point: top-level rule invoked by the generated smoke test.
        case_insensitive_type: one of "", "UPPER" or "lower".
        has_parser: whether a parser exists in addition to the lexer.
        examples: example input files, relative to the grammar directory.
        includes: grammar files inherited from the descriptor.
        grammars: the package's own top-level grammar files.
        grammar_name: name of the grammar as declared by the descriptor.
        artifact_id: Maven artifactId of the descriptor, if any.
        descriptor_path: path of the descriptor the Project was loaded from."""

    package_name: str = ""
    long_name: str = ""
    lexer_name: str = ""
    parser_name: str = ""
    listener_name: str = ""
    entry_point: str = ""
    case_insensitive_type: str = ""
    has_parser: bool = False
    examples: List[str] = field(default_factory=list)
    includes: List[str] = field(default_factory=list)
    grammars: List[str] = field(default_factory=list)
    grammar_name: str = ""
    artifact_id: str = ""
    descriptor_path: Optional[Path] = None

    @property
    def case_folding(self: "Project") -> CaseFolding:
        return CaseFolding.of(self.case_insensitive_type)

    @property
    def grammar_files(self: "Project") -> List[str]:
        return self.includes + self.grammars

    def add_grammar(self: "Project", grammar_path: str) -> None:
        self.grammars.append(str(grammar_path))

    def clear_grammars(self: "Project") -> None:
        """Discards every inherited include and grammar file. Examples and
        scalar metadata are left as they are."""
        self.includes = []
        self.grammars = []

    def merge(self: "Project", other: "Project") -> "Project":
        """Returns a new Project in which the non-empty scalar fields of other
        take precedence and the file lists of both are concatenated."""

        overrides = {}
        for name in ("package_name", "long_name", "lexer_name", "parser_name",
                     "listener_name", "entry_point", "case_insensitive_type",
                     "grammar_name", "artifact_id"):
            value = getattr(other, name)
            if value:
                overrides[name] = value

        if other.descriptor_path is not None:
            overrides["descriptor_path"] = other.descriptor_path

        return replace(
            self,
            has_parser=self.has_parser or other.has_parser,
            examples=self.examples + other.examples,
            includes=self.includes + other.includes,
            grammars=self.grammars + other.grammars,
            **overrides)


@dataclass(frozen=True)
class TestFeatures:
    """Flags that select which parts of the smoke-test template are emitted.
    Every variant of the output can be rendered by constructing these
    directly."""

    __test__ = False

    has_parser: bool = True
    case_folding: CaseFolding = CaseFolding.NONE

    @classmethod
    def of(cls: Type["TestFeatures"], project: Project) -> "TestFeatures":
        return cls(has_parser=project.has_parser,
                   case_folding=project.case_folding)


@dataclass(frozen=True)
class TemplateData:
    """Binds the output package name to the Project being rendered. The output
    package is chosen at generation time and need not equal
    project.package_name."""

    package_name: str
    project: Optional[Project] = None


@dataclass(frozen=True)
class ListenerData:
    """Rules of a grammar whose listener interface is generated into the
    given package. Rules are kept in declaration order."""

    package_name: str
    grammar_name: str
    rules: Sequence[str] = ()
