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
import sys
from pathlib import Path

import click

from grammar_scaffold.generators.emitters import FileEmitter, SourceFormatter
from grammar_scaffold.generators.generators import (DocFileWriter,
                                                    ListenerFileWriter,
                                                    TestFileWriter)
from grammar_scaffold.generators.template_accessors import GoTemplateAccessor
from grammar_scaffold.project.descriptors import (load_descriptor,
                                                  override_grammars)
from grammar_scaffold.project.types import ListenerData, TemplateData
from grammar_scaffold.utils.log_utils import LogLevel, init_logger
from grammar_scaffold.utils.script_utils import (ScaffoldGroup,
                                                 collect_config,
                                                 collect_log_level,
                                                 collect_package_name,
                                                 report_failures)

SCRIPT_NAME = "grammar-scaffold"

LOGGER = logging.getLogger("grammar_scaffold")


@click.group(cls=ScaffoldGroup)
@click.option("--config", "config",
              help="Specifies path to the grammar-scaffold config YAML file.",
              callback=collect_config,
              required=False)
@click.option("--log-level", "log_level",
              help="Specifies the verbosity of output from the generator.",
              type=click.Choice(LogLevel.names()),
              default=LogLevel.DEFAULT.name,
              callback=collect_log_level,
              required=False)
@click.option("--output-root", "output_root",
              help="Directory in which the output package directories live.",
              type=click.Path(file_okay=False, path_type=Path),
              default=Path("."),
              show_default=True)
@click.option("--format/--no-format", "format_output",
              help="Whether to run the configured formatter over generated "
                   "files.",
              default=True,
              show_default=True)
@click.pass_context
def main(ctx: click.Context, **kwargs) -> None:
    """Generates Go documentation stubs, smoke tests and listener interfaces
    for ANTLR grammars.

    Example Usage:

        grammar-scaffold doc json

        grammar-scaffold test json json/pom.xml JSON.g4

        grammar-scaffold listener brainfuck brainfuck file statement opcode"""

    global LOGGER, SCRIPT_NAME
    init_logger(LOGGER, SCRIPT_NAME, log_level=kwargs["log_level"])

    for arg, val in kwargs.items():
        LOGGER.debug("%s = %s", arg, val)

    config = kwargs["config"]

    formatter = None
    if kwargs["format_output"]:
        formatter = SourceFormatter(command=list(config["formatter"]))

    ctx.obj = {
        "output_root": kwargs["output_root"],
        "template_accessor": GoTemplateAccessor(
            import_path=config["import_path"],
            max_tokens=config["max_tokens"]),
        "file_emitter": FileEmitter(formatter=formatter),
    }


@main.command("doc")
@click.argument("output", callback=collect_package_name)
@click.pass_obj
@report_failures
def doc(obj, output: str) -> None:
    """Generates OUTPUT/doc.go, the package documentation stub."""

    file_writer = DocFileWriter(output_dir=obj["output_root"] / output,
                                template_accessor=obj["template_accessor"],
                                file_emitter=obj["file_emitter"])
    output_path = file_writer.write_to_file(TemplateData(package_name=output))
    LOGGER.info("Generated: %s", output_path)


@main.command("test")
@click.argument("output", callback=collect_package_name)
@click.argument("descriptor", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("grammars", nargs=-1)
@click.pass_obj
@report_failures
def test(obj, output: str, descriptor: Path, grammars) -> None:
    """Generates OUTPUT/OUTPUT_test.go from the DESCRIPTOR (pom.xml).

    The grammar files declared by the descriptor are ignored, since a single
    descriptor may span several grammars; the GRAMMARS given here are used
    instead. Examples are recorded relative to the output root, which is
    where the generated tests open them from."""

    project = load_descriptor(descriptor, examples_root=obj["output_root"])
    project = override_grammars(project, grammars)

    file_writer = TestFileWriter(output_dir=obj["output_root"] / output,
                                 template_accessor=obj["template_accessor"],
                                 file_emitter=obj["file_emitter"])
    data = TemplateData(package_name=output, project=project)
    output_path = file_writer.write_to_file(data)
    LOGGER.info("Generated: %s", output_path)


@main.command("listener")
@click.argument("output", callback=collect_package_name)
@click.argument("grammar_name")
@click.argument("rules", nargs=-1, required=True)
@click.pass_obj
@report_failures
def listener(obj, output: str, grammar_name: str, rules) -> None:
    """Generates the listener interface of GRAMMAR_NAME with an Enter and Exit
    method for each of the RULES."""

    file_writer = ListenerFileWriter(output_dir=obj["output_root"] / output,
                                     template_accessor=obj["template_accessor"],
                                     file_emitter=obj["file_emitter"])
    data = ListenerData(package_name=output,
                        grammar_name=grammar_name,
                        rules=tuple(rules))
    output_path = file_writer.write_to_file(data)
    LOGGER.info("Generated: %s", output_path)


if __name__ == "__main__":
    try:
        main()
    except Exception:
        LOGGER.exception("Failed to generate grammar scaffolding")
        sys.exit(1)
