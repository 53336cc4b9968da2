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
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Tuple

from grammar_scaffold.generators.emitters import FileEmitter
from grammar_scaffold.generators.template_accessors import GoTemplateAccessor
from grammar_scaffold.project.types import (ListenerData, TemplateData,
                                            TestFeatures, listener_name_for,
                                            parser_name_for)
from grammar_scaffold.utils.name_utils import go_title

LOGGER = logging.getLogger(__name__)

RE_TRAILING_WHITESPACE: re.Pattern = re.compile(r"[ \t]+$", re.MULTILINE)

RE_BLANK_LINES: re.Pattern = re.compile(r"\n{3,}")


def normalize_source(source: str) -> str:
    """Strips trailing whitespace, collapses runs of blank lines into a single
    blank line and terminates the source with exactly one newline."""
    source = RE_TRAILING_WHITESPACE.sub("", source)
    source = RE_BLANK_LINES.sub("\n\n", source)
    return source.strip("\n") + "\n"


def render_doc(template_accessor: GoTemplateAccessor,
               data: TemplateData) -> str:
    return normalize_source(template_accessor.emit_doc(data))


def render_test(template_accessor: GoTemplateAccessor,
                data: TemplateData,
                features: TestFeatures) -> str:
    return normalize_source(template_accessor.emit_test(data, features))


def render_listener(template_accessor: GoTemplateAccessor,
                    data: ListenerData) -> str:
    listener_generator = ListenerGenerator(template_accessor)
    return normalize_source(listener_generator.visit_listener_data(data))


@dataclass
class ListenerGenerator:
    """Generates the Go listener interface of a grammar: one Enter and one
    Exit method per rule, all Enter methods before all Exit methods, in the
    order the rules were declared."""

    template_accessor: GoTemplateAccessor
    definitions: Dict[str, Tuple[str, str]] = field(default_factory=dict)

    def visit_listener_data(self: "ListenerGenerator",
                            data: ListenerData) -> str:
        for rule in data.rules:
            self.visit_rule(rule)

        return self.template_accessor.emit_listener(
            package_name=data.package_name,
            grammar_name=data.grammar_name,
            listener_name=listener_name_for(data.grammar_name),
            parser_name=parser_name_for(data.grammar_name),
            definitions=list(self.definitions.values()))

    def visit_rule(self: "ListenerGenerator", rule: str) -> None:
        if rule in self.definitions:
            return

        rule_id = go_title(rule)

        enter_fn = self.template_accessor.emit_enter_fn_definition(
            rule=rule,
            rule_id=rule_id)

        exit_fn = self.template_accessor.emit_exit_fn_definition(
            rule=rule,
            rule_id=rule_id)

        self.definitions[rule] = (enter_fn, exit_fn)


@dataclass
class FileWriter(ABC):
    output_dir: Path
    template_accessor: GoTemplateAccessor
    file_emitter: FileEmitter

    @abstractmethod
    def file_name_for(self: "FileWriter", data: Any) -> str:
        raise NotImplementedError

    @abstractmethod
    def file_body_for(self: "FileWriter", data: Any) -> str:
        raise NotImplementedError

    def write_to_file(self: "FileWriter", data: Any) -> Path:
        file_body = self.file_body_for(data)
        output_path = self.output_dir / self.file_name_for(data)
        self.file_emitter.emit(output_path, file_body)
        return output_path


@dataclass
class DocFileWriter(FileWriter):

    def file_name_for(self: "DocFileWriter", data: TemplateData) -> str:
        return "doc.go"

    def file_body_for(self: "DocFileWriter", data: TemplateData) -> str:
        return render_doc(self.template_accessor, data)


@dataclass
class TestFileWriter(FileWriter):
    __test__ = False

    def file_name_for(self: "TestFileWriter", data: TemplateData) -> str:
        return f"{data.package_name}_test.go"

    def file_body_for(self: "TestFileWriter", data: TemplateData) -> str:
        features = TestFeatures.of(data.project)
        LOGGER.debug("Rendering %s with %s",
                     self.file_name_for(data), features)
        return render_test(self.template_accessor, data, features)


@dataclass
class ListenerFileWriter(FileWriter):

    def file_name_for(self: "ListenerFileWriter", data: ListenerData) -> str:
        return f"{data.grammar_name.lower()}_listener.go"

    def file_body_for(self: "ListenerFileWriter", data: ListenerData) -> str:
        return render_listener(self.template_accessor, data)
