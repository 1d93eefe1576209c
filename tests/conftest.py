import textwrap

import esprima
import pytest

from routelens.context import AnalysisContext


@pytest.fixture
def ctx():
    return AnalysisContext()


@pytest.fixture
def write_project(tmp_path):
    """Write {relative path: source} into tmp_path and return the project root."""
    def write(files: dict):
        for rel, content in files.items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content).lstrip(), encoding='utf-8')
        return tmp_path
    return write


@pytest.fixture
def parse_js():
    def parse(source: str):
        return esprima.parseScript(textwrap.dedent(source), tolerant=True, range=True)
    return parse


@pytest.fixture
def parse_expr(parse_js):
    """AST of a single JS expression."""
    def parse(source: str):
        return parse_js(f'({source});').body[0].expression
    return parse
