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
import re
import xml.etree.ElementTree as ET
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

from cerberus import Validator

from grammar_scaffold.common.errors import DescriptorParseError
from grammar_scaffold.project.types import (Project, is_lexer_grammar,
                                            lexer_name_for, listener_name_for,
                                            parser_name_for)

LOGGER = logging.getLogger(__name__)

ANTLR4_PLUGIN = "antlr4-maven-plugin"
ANTLR4_TEST_PLUGIN = "antlr4test-maven-plugin"

DEFAULT_EXAMPLE_FILES = "examples/"

# Expected outputs stored beside the examples, not inputs themselves.
SIDECAR_SUFFIXES = (".tree", ".errors")

RE_NON_IDENTIFIER: re.Pattern = re.compile("[^a-z0-9_]")

RE_GRAMMAR_SUFFIX: re.Pattern = re.compile(r"\s+grammar$", re.IGNORECASE)

GO_IDENTIFIER = "^[A-Za-z_][A-Za-z0-9_]*$"

DESCRIPTOR_SCHEMA = {
    "artifact_id": {
        "type": "string",
        "empty": False,
        "required": True,
    },
    "long_name": {
        "type": "string",
    },
    "grammar_name": {
        "type": "string",
        "empty": False,
        "regex": GO_IDENTIFIER,
    },
    "package_name": {
        "type": "string",
        "empty": False,
        "regex": GO_IDENTIFIER,
    },
    "entry_point": {
        "type": "string",
    },
    # Any value is accepted; unrecognized ones disable case folding.
    "case_insensitive_type": {
        "type": "string",
    },
    "example_files": {
        "type": "string",
        "empty": False,
    },
    "includes": {
        "type": "list",
        "schema": {
            "type": "string",
            "empty": False,
        },
    },
    "grammars": {
        "type": "list",
        "schema": {
            "type": "string",
            "empty": False,
        },
    },
}


def local_name(tag: str) -> str:
    """Drops the XML namespace, e.g. {http://maven.apache.org/POM/4.0.0}name
    becomes name."""
    return tag.rsplit("}", 1)[-1]


def child(element: Optional[ET.Element], name: str) -> Optional[ET.Element]:
    if element is None:
        return None
    for candidate in element:
        if local_name(candidate.tag) == name:
            return candidate
    return None


def children(element: Optional[ET.Element], name: str) -> Iterator[ET.Element]:
    if element is None:
        return
    for candidate in element:
        if local_name(candidate.tag) == name:
            yield candidate


def child_text(element: Optional[ET.Element],
               name: str,
               default_value: Optional[str] = None) -> Optional[str]:
    node = child(element, name)
    if node is None or node.text is None:
        return default_value
    return node.text.strip()


def find_plugin_configuration(root: ET.Element,
                              artifact_id: str) -> Optional[ET.Element]:
    plugins = child(child(root, "build"), "plugins")
    for plugin in children(plugins, "plugin"):
        if child_text(plugin, "artifactId") == artifact_id:
            return child(plugin, "configuration")
    return None


def collect_grammar_files(configuration: Optional[ET.Element],
                          container: str,
                          item: str) -> List[str]:
    node = child(configuration, container)
    if node is None:
        return []

    grammar_files = [item_node.text.strip()
                     for item_node in children(node, item)
                     if item_node.text is not None and item_node.text.strip()]

    # <grammars>A.g4,B.g4</grammars>
    if len(grammar_files) == 0 and node.text is not None:
        grammar_files = [grammar_file.strip()
                         for grammar_file in node.text.split(",")
                         if grammar_file.strip()]

    return grammar_files


def package_name_for(artifact_id: str) -> str:
    return RE_NON_IDENTIFIER.sub("", artifact_id.lower())


def collect_examples(grammar_dir: Path,
                     example_files: str,
                     relative_to: Optional[Path] = None) -> List[str]:
    """Lists the example inputs under example_files in sorted order. Paths
    are relative to relative_to, which defaults to grammar_dir, and may climb
    out of it with "..". The files themselves are not validated."""

    if relative_to is None:
        relative_to = grammar_dir

    examples_dir = grammar_dir / example_files
    if not examples_dir.is_dir():
        LOGGER.warning("Examples directory does not exist: %s", examples_dir)
        return []

    examples = []
    for example_path in sorted(examples_dir.rglob("*")):
        if not example_path.is_file():
            continue
        if example_path.name.startswith("."):
            continue
        if example_path.suffix in SIDECAR_SUFFIXES:
            continue
        examples.append(
            Path(os.path.relpath(example_path, relative_to)).as_posix())
    return examples


def validate_descriptor(descriptor_path: Path,
                        document: Dict[str, Any]) -> None:
    descriptor_validator = Validator(DESCRIPTOR_SCHEMA)
    if not descriptor_validator.validate(document):
        raise DescriptorParseError(
            descriptor_path,
            f"Validation failed: {descriptor_validator.errors}")


def parse_descriptor(descriptor_path: Path) -> Dict[str, Any]:
    """Extracts the generation metadata declared by a pom.xml."""

    try:
        body = descriptor_path.read_bytes()
    except OSError as error:
        raise DescriptorParseError(descriptor_path, str(error)) from error

    try:
        root = ET.fromstring(body)
    except ET.ParseError as error:
        raise DescriptorParseError(descriptor_path, str(error)) from error

    if local_name(root.tag) != "project":
        raise DescriptorParseError(
            descriptor_path,
            f"Expected a <project> root element, got <{local_name(root.tag)}>")

    test_configuration = find_plugin_configuration(root, ANTLR4_TEST_PLUGIN)
    antlr4_configuration = find_plugin_configuration(root, ANTLR4_PLUGIN)

    document = {
        "artifact_id": child_text(root, "artifactId", default_value=""),
        "long_name": RE_GRAMMAR_SUFFIX.sub(
            "", child_text(root, "name", default_value="")),
        "entry_point": child_text(test_configuration, "entryPoint",
                                  default_value=""),
        "case_insensitive_type": child_text(test_configuration,
                                            "caseInsensitiveType",
                                            default_value=""),
        "example_files": child_text(test_configuration, "exampleFiles",
                                    default_value="") or DEFAULT_EXAMPLE_FILES,
        "includes": collect_grammar_files(antlr4_configuration,
                                          "includes", "include"),
        "grammars": collect_grammar_files(antlr4_configuration,
                                          "grammars", "grammar"),
    }

    grammar_name = child_text(test_configuration, "grammarName")
    if not grammar_name:
        grammar_files = document["includes"] + document["grammars"]
        if len(grammar_files) > 0:
            grammar_name = Path(grammar_files[0]).stem
            for suffix in ("Lexer", "Parser"):
                if grammar_name.endswith(suffix) and grammar_name != suffix:
                    grammar_name = grammar_name[:-len(suffix)]
                    break
        else:
            grammar_name = document["artifact_id"]
    document["grammar_name"] = grammar_name

    package_name = child_text(test_configuration, "packageName")
    if not package_name:
        package_name = package_name_for(document["artifact_id"])
    document["package_name"] = package_name

    return document


def has_parser_for(entry_point: str, grammar_files: Sequence[str]) -> bool:
    """Lexer-only grammars declare no entry rule, or only lexer grammars."""
    if not entry_point:
        return False
    if len(grammar_files) == 0:
        return True
    return not all(map(is_lexer_grammar, grammar_files))


def load_descriptor(
        descriptor_path: Union[str, Path],
        examples_root: Optional[Union[str, Path]] = None) -> Project:
    """Loads the base metadata of a Project from a Maven pom.xml descriptor.

    Examples are recorded relative to examples_root, the directory the
    generated tests open them from, which defaults to the directory of the
    descriptor.

    The inherited includes and grammars are kept as declared; callers that
    want a different set apply override_grammars afterwards.

    Raises:
        DescriptorParseError: if the descriptor is unreadable, not well-formed
                              or missing required metadata."""

    descriptor_path = Path(descriptor_path)
    LOGGER.info("Loading descriptor: %s ...", descriptor_path)

    document = parse_descriptor(descriptor_path)
    validate_descriptor(descriptor_path, document)

    grammar_name = document["grammar_name"]
    grammar_files = document["includes"] + document["grammars"]
    if examples_root is not None:
        examples_root = Path(examples_root)
    examples = collect_examples(descriptor_path.parent,
                                document["example_files"],
                                relative_to=examples_root)

    project = Project(
        package_name=document["package_name"],
        long_name=document["long_name"] or grammar_name,
        lexer_name=lexer_name_for(grammar_name),
        parser_name=parser_name_for(grammar_name),
        listener_name=listener_name_for(grammar_name, grammar_files),
        entry_point=document["entry_point"],
        case_insensitive_type=document["case_insensitive_type"],
        has_parser=has_parser_for(document["entry_point"], grammar_files),
        examples=examples,
        includes=list(document["includes"]),
        grammars=list(document["grammars"]),
        grammar_name=grammar_name,
        artifact_id=document["artifact_id"],
        descriptor_path=descriptor_path)

    LOGGER.debug("Loaded project: %s", project)
    return project


def override_grammars(project: Project, grammars: Sequence[str]) -> Project:
    """Returns a copy of project in which the inherited includes are dropped
    and the grammars are exactly the given ones. A single descriptor may span
    several grammars, so callers name the ones that apply explicitly."""

    selected = Project()
    for grammar_path in grammars:
        selected.add_grammar(grammar_path)
    return replace(project, includes=[], grammars=[]).merge(selected)
