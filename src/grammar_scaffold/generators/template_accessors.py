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
from typing import Any, Dict, Sequence

from jinja2 import (Environment, FileSystemLoader, StrictUndefined,
                    TemplateError)

from grammar_scaffold.common.errors import TemplateExecutionError
from grammar_scaffold.generators.template_extensions import \
    TemplateExtensions
from grammar_scaffold.project.types import TemplateData, TestFeatures
from grammar_scaffold.utils.config_utils import DEFAULT_CONFIG
from grammar_scaffold.utils.path_utils import path_wrt_package


class TemplateAccessor(Environment):

    def __init__(self: "TemplateAccessor",
                 templates_path: Path,
                 *args: Sequence[Any],
                 **kwargs: Dict[str, Any]) -> None:
        opts = {
            "loader": FileSystemLoader(templates_path),
            "keep_trailing_newline": False,
            "trim_blocks": True,
            "lstrip_blocks": True,
            "undefined": StrictUndefined,
            "extensions": [TemplateExtensions],
        }
        opts.update(kwargs)
        super().__init__(*args, **opts)

    def emit(self: "TemplateAccessor", template_path: str, **kwargs) -> str:
        try:
            template = self.get_template(template_path)
            return template.render(**kwargs)
        except (TemplateError, AttributeError, TypeError) as error:
            raise TemplateExecutionError(template_path, str(error)) from error


class GoTemplateAccessor(TemplateAccessor):

    def __init__(self: "GoTemplateAccessor",
                 *args: Sequence[Any],
                 templates_path: Path = path_wrt_package("templates/go"),
                 import_path: str = DEFAULT_CONFIG["import_path"],
                 max_tokens: int = DEFAULT_CONFIG["max_tokens"],
                 **kwargs: Dict[str, Any]) -> None:
        super().__init__(templates_path, *args, **kwargs)
        self.globals.update({
            "import_path": import_path,
            "max_tokens": max_tokens,
        })

    def emit_doc(self: "GoTemplateAccessor", data: TemplateData) -> str:
        return self.emit("doc.jinja", data=data)

    def emit_test(self: "GoTemplateAccessor",
                  data: TemplateData,
                  features: TestFeatures) -> str:
        return self.emit("test.jinja",
                         data=data,
                         features=features)

    def emit_listener(self: "GoTemplateAccessor",
                      package_name: str,
                      grammar_name: str,
                      listener_name: str,
                      parser_name: str,
                      definitions: Sequence[Sequence[str]]) -> str:
        return self.emit("listener.jinja",
                         package_name=package_name,
                         grammar_name=grammar_name,
                         listener_name=listener_name,
                         parser_name=parser_name,
                         definitions=definitions)

    def emit_enter_fn_definition(self: "GoTemplateAccessor",
                                 rule: str,
                                 rule_id: str) -> str:
        return self.emit("partials/enter_fn_definition.jinja",
                         rule=rule,
                         rule_id=rule_id)

    def emit_exit_fn_definition(self: "GoTemplateAccessor",
                                rule: str,
                                rule_id: str) -> str:
        return self.emit("partials/exit_fn_definition.jinja",
                         rule=rule,
                         rule_id=rule_id)
