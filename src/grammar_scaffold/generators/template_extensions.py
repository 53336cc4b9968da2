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

from typing import Any

from jinja2 import Environment
from jinja2.ext import Extension

from grammar_scaffold.project.types import CaseFolding
from grammar_scaffold.utils.name_utils import go_quote, go_title


class TemplateExtensions(Extension):

    def __init__(self: "TemplateExtensions", environment: Environment) -> None:
        super().__init__(environment)

        # Predicates
        environment.tests.update({
            "case_folded": self.is_case_folded,
            "upper_folded": self.is_upper_folded,
            "lower_folded": self.is_lower_folded,
        })

        # Filters
        environment.filters.update({
            "go_quote": go_quote,
            "go_title": go_title,
        })

    ## ========== ##
    ## Predicates ##
    ## ========== ##

    def is_case_folded(self: "TemplateExtensions", features: Any) -> bool:
        return features.case_folding is not CaseFolding.NONE

    def is_upper_folded(self: "TemplateExtensions", features: Any) -> bool:
        return features.case_folding is CaseFolding.UPPER

    def is_lower_folded(self: "TemplateExtensions", features: Any) -> bool:
        return features.case_folding is CaseFolding.LOWER
