import pytest

from grammar_scaffold.common.errors import TemplateExecutionError
from grammar_scaffold.generators.generators import (ListenerGenerator,
                                                    normalize_source,
                                                    render_doc,
                                                    render_listener,
                                                    render_test)
from grammar_scaffold.generators.template_accessors import GoTemplateAccessor
from grammar_scaffold.project.types import (CaseFolding, ListenerData,
                                            Project, TemplateData,
                                            TestFeatures)

COPYRIGHT_FIRST_LINE = "// Copyright 2017 Google Inc."
COPYRIGHT_LAST_LINE = "// limitations under the License."

CASE_FOLDING_CALLS = ["strings.ToUpper", "strings.ToLower",
                      "NewCaseChangingStream", '"strings"']


def json_data(**kwargs) -> TemplateData:
    opts = {
        "package_name": "json",
        "long_name": "JSON",
        "lexer_name": "JSONLexer",
        "parser_name": "JSONParser",
        "listener_name": "JSONListener",
        "entry_point": "json",
        "has_parser": True,
        "examples": ["examples/example1.json", "examples/example2.json"],
        "grammars": ["JSON.g4"],
    }
    opts.update(kwargs)
    return TemplateData(package_name="json", project=Project(**opts))


def test_render_doc(template_accessor):
    source = render_doc(template_accessor, TemplateData(package_name="mylang"))
    lines = source.splitlines()

    assert lines[0] == COPYRIGHT_FIRST_LINE
    index = lines.index(COPYRIGHT_LAST_LINE)
    assert lines[index + 1] == ""
    assert lines[index + 2] == \
        'package mylang // import "bramp.net/antlr4/mylang"'
    assert source.endswith('"bramp.net/antlr4/mylang"\n')


def test_render_doc_with_import_path():
    template_accessor = GoTemplateAccessor(import_path="example.com/grammars")
    source = render_doc(template_accessor, TemplateData(package_name="sql"))
    assert 'package sql // import "example.com/grammars/sql"' in source


def test_render_test_with_parser(template_accessor):
    source = render_test(template_accessor, json_data(), TestFeatures())

    assert source.startswith(COPYRIGHT_FIRST_LINE)
    assert "package json_test" in source
    assert "tests for the JSON grammar" in source
    assert '\t"fmt"\n' in source
    assert '\t"bramp.net/antlr4/json"\n' in source
    assert '\t"bramp.net/antlr4/internal"\n' in source
    assert "const MAX_TOKENS = 1000000" in source
    assert ('var examples = []string{\n'
            '\t"examples/example1.json",\n'
            '\t"examples/example2.json",\n'
            '}\n') in source
    assert "*json.BaseJSONListener" in source
    assert "p := json.NewJSONParser(stream)" in source
    assert "tree := p.Json()" in source
    assert "antlr.ParseTreeWalkerDefault.Walk(&exampleListener{}, tree)" \
        in source
    assert "func TestJSONLexer(t *testing.T) {" in source
    assert "func TestJSONParser(t *testing.T) {" in source
    assert "internal.NewTestingErrorListener(t, file)" in source
    for call in CASE_FOLDING_CALLS:
        assert call not in source


def test_render_test_without_parser(template_accessor):
    features = TestFeatures(has_parser=False)
    source = render_test(template_accessor, json_data(has_parser=False),
                         features)

    assert "func TestJSONLexer(t *testing.T) {" in source
    assert "TestJSONParser" not in source
    assert "exampleListener" not in source
    assert "ParseTreeWalkerDefault" not in source
    assert "NewJSONParser" not in source
    assert '"fmt"' not in source
    assert '"bramp.net/antlr4/internal"' not in source
    assert "There is no json Parser so instead use the Lexer" in source
    assert "for t.GetTokenType() != antlr.TokenEOF {" in source


@pytest.mark.parametrize("case_folding, to_upper", [
    (CaseFolding.UPPER, "true"),
    (CaseFolding.LOWER, "false"),
])
def test_render_test_with_case_folding(template_accessor, case_folding,
                                       to_upper):
    features = TestFeatures(has_parser=False, case_folding=case_folding)
    source = render_test(template_accessor, json_data(), features)

    assert '\t"strings"\n' in source
    # Lexer-only grammars still need the case changing stream
    assert '\t"bramp.net/antlr4/internal"\n' in source
    assert f"input = internal.NewCaseChangingStream(input, {to_upper})" \
        in source
    if case_folding is CaseFolding.UPPER:
        assert 'strings.ToUpper("...some text to parse...")' in source
        assert "strings.ToLower" not in source
    else:
        assert 'strings.ToLower("...some text to parse...")' in source
        assert "strings.ToUpper" not in source


@pytest.mark.parametrize("case_insensitive_type",
                         ["", "upper", "LOWER", "Upper", "sideways"])
def test_render_test_without_case_folding(template_accessor,
                                          case_insensitive_type):
    data = json_data(case_insensitive_type=case_insensitive_type)
    source = render_test(template_accessor, data,
                         TestFeatures.of(data.project))
    for call in CASE_FOLDING_CALLS:
        assert call not in source


def test_render_test_is_deterministic(template_accessor):
    data = json_data(case_insensitive_type="UPPER")
    features = TestFeatures.of(data.project)
    first = render_test(template_accessor, data, features)
    second = render_test(GoTemplateAccessor(), data, features)
    assert first == second


def test_render_test_uses_output_package_name(template_accessor):
    data = TemplateData(package_name="json5",
                        project=json_data().project)
    source = render_test(template_accessor, data, TestFeatures())
    assert "package json5_test" in source
    assert "lexer := json5.NewJSONLexer(is)" in source
    assert "package json_test" not in source


def test_render_test_with_max_tokens():
    template_accessor = GoTemplateAccessor(max_tokens=500)
    source = render_test(template_accessor, json_data(), TestFeatures())
    assert "const MAX_TOKENS = 500\n" in source


def test_render_test_quotes_examples(template_accessor):
    data = json_data(examples=['examples/with "quotes".json',
                               "examples/back\\slash.json"])
    source = render_test(template_accessor, data, TestFeatures())
    assert '\t"examples/with \\"quotes\\".json",\n' in source
    assert '\t"examples/back\\\\slash.json",\n' in source


def test_render_test_without_project(template_accessor):
    with pytest.raises(TemplateExecutionError) as error:
        render_test(template_accessor, TemplateData(package_name="json"),
                    TestFeatures())
    assert error.value.template_name == "test.jinja"


def test_render_test_with_malformed_features(template_accessor):
    with pytest.raises(TemplateExecutionError):
        render_test(template_accessor, json_data(), object())


def test_rendered_sources_are_normalized(template_accessor):
    source = render_test(template_accessor, json_data(), TestFeatures())
    assert source.endswith("}\n")
    assert not source.endswith("\n\n")
    assert "\n\n\n" not in source
    for line in source.splitlines():
        assert line == line.rstrip()


def test_normalize_source():
    assert normalize_source("\n\na  \nb\t\n\n\n\nc\n\n") == "a\nb\n\nc\n"
    assert normalize_source("x") == "x\n"


def test_render_listener(template_accessor):
    data = ListenerData(package_name="brainfuck",
                        grammar_name="brainfuck",
                        rules=("file", "statement", "opcode"))
    source = render_listener(template_accessor, data)

    assert source == """\
// Code generated from brainfuck.g4 by grammar-scaffold. DO NOT EDIT.

package brainfuck // brainfuck
import "github.com/antlr/antlr4/runtime/Go/antlr"

// brainfuckListener is a complete listener for a parse tree produced by brainfuckParser.
type brainfuckListener interface {
\tantlr.ParseTreeListener

\t// EnterFile is called when entering the file production.
\tEnterFile(c *FileContext)

\t// EnterStatement is called when entering the statement production.
\tEnterStatement(c *StatementContext)

\t// EnterOpcode is called when entering the opcode production.
\tEnterOpcode(c *OpcodeContext)

\t// ExitFile is called when exiting the file production.
\tExitFile(c *FileContext)

\t// ExitStatement is called when exiting the statement production.
\tExitStatement(c *StatementContext)

\t// ExitOpcode is called when exiting the opcode production.
\tExitOpcode(c *OpcodeContext)
}
"""


def test_listener_generator_skips_repeated_rules(template_accessor):
    listener_generator = ListenerGenerator(template_accessor)
    data = ListenerData(package_name="json",
                        grammar_name="JSON",
                        rules=("json", "value", "json", "compilation_unit"))
    source = listener_generator.visit_listener_data(data)

    assert list(listener_generator.definitions) == \
        ["json", "value", "compilation_unit"]
    assert source.count("EnterJson(c *JsonContext)") == 1
    assert "ExitCompilation_unit(c *Compilation_unitContext)" in source
    assert "type JSONListener interface {" in source
