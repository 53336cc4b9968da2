import logging
from pathlib import Path
from typing import Callable, Optional, Sequence

import pytest

from grammar_scaffold.generators.template_accessors import GoTemplateAccessor

POM_TEMPLATE = """\
<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0"
         xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">
  <modelVersion>4.0.0</modelVersion>
  <artifactId>{artifact_id}</artifactId>
  <packaging>jar</packaging>
  <name>{name}</name>
  <build>
    <plugins>
      <plugin>
        <groupId>org.antlr</groupId>
        <artifactId>antlr4-maven-plugin</artifactId>
        <configuration>
          <sourceDirectory>${{basedir}}</sourceDirectory>
          <includes>
{includes}
          </includes>
        </configuration>
      </plugin>
      <plugin>
        <groupId>com.khubla.antlr</groupId>
        <artifactId>antlr4test-maven-plugin</artifactId>
        <configuration>
          <verbose>false</verbose>
          <showTree>false</showTree>
{entry_point}
          <grammarName>{grammar_name}</grammarName>
          <packageName></packageName>
          <caseInsensitiveType>{case_insensitive_type}</caseInsensitiveType>
          <exampleFiles>examples/</exampleFiles>
        </configuration>
      </plugin>
    </plugins>
  </build>
</project>
"""


def pom_xml(artifact_id: str = "json",
            name: str = "JSON grammar",
            grammar_name: str = "JSON",
            entry_point: Optional[str] = "json",
            case_insensitive_type: str = "",
            includes: Sequence[str] = ("JSON.g4",)) -> str:
    return POM_TEMPLATE.format(
        artifact_id=artifact_id,
        name=name,
        grammar_name=grammar_name,
        entry_point=("" if entry_point is None
                     else f"          <entryPoint>{entry_point}</entryPoint>"),
        case_insensitive_type=case_insensitive_type,
        includes="\n".join(f"            <include>{include}</include>"
                           for include in includes))


@pytest.fixture(autouse=True)
def isolated_home(tmp_path_factory, monkeypatch) -> Path:
    """Keeps log files written by init_logger out of the real home."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def make_grammar(tmp_path) -> Callable[..., Path]:
    """Creates a grammar directory with a pom.xml and example inputs, and
    returns the path to its pom.xml."""

    def make(directory: str = "grammar",
             examples: Sequence[str] = ("example1.json",),
             **kwargs) -> Path:
        grammar_dir = tmp_path / directory
        examples_dir = grammar_dir / "examples"
        examples_dir.mkdir(parents=True)
        for example in examples:
            (examples_dir / example).write_text("{}\n")
        pom_path = grammar_dir / "pom.xml"
        pom_path.write_text(pom_xml(**kwargs))
        return pom_path

    return make


@pytest.fixture
def template_accessor() -> GoTemplateAccessor:
    return GoTemplateAccessor()


@pytest.fixture(autouse=True)
def reset_script_logger():
    """init_logger attaches handlers bound to the streams of a single CLI
    invocation."""
    yield
    logger = logging.getLogger("grammar_scaffold")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
