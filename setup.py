import re
from pathlib import Path
from re import Pattern
from typing import Sequence, Union

from setuptools import find_namespace_packages, setup


def recursively_collect_data_files(
        directory: Union[str, Path],
        pattern: Union[str, Pattern],
        relative_to: Union[str, Path]) -> Sequence[str]:

    if isinstance(directory, str):
        directory = Path(directory)

    if isinstance(relative_to, str):
        relative_to = Path(relative_to)

    if isinstance(pattern, str):
        pattern = re.compile(pattern)

    data_files = []
    for candidate in sorted(directory.iterdir()):
        if candidate.is_dir():
            data_files += recursively_collect_data_files(
                candidate, pattern, relative_to)
        elif pattern.fullmatch(candidate.name):
            data_files.append(candidate.relative_to(relative_to).as_posix())

    return data_files


setup(
    name="grammar-scaffold",
    version="0.1.0",
    description="Generates Go documentation stubs, smoke tests and listener "
                "interfaces for ANTLR grammars",
    license="MIT",
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src",
                                     include=["grammar_scaffold*"]),
    package_data={
        "grammar_scaffold": recursively_collect_data_files(
            "src/grammar_scaffold/templates", r".*\.jinja",
            "src/grammar_scaffold"),
    },
    install_requires=[
        "cerberus",
        "click>=8.0",
        "jinja2>=3.0",
        "pyyaml",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "grammar-scaffold=grammar_scaffold.scripts.grammar_scaffold:main",
        ],
    },
)
