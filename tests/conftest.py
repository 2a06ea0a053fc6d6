from __future__ import annotations

from pathlib import Path
import ast
import dis
import sys
import types
import pytest

EXECUTED: dict[str, set[int]] = {}

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def _tracer(frame, event, arg):  # pragma: no cover - exercised indirectly
    if event != "line":
        return _tracer
    filename = frame.f_code.co_filename
    if filename.startswith(str(SRC)):
        EXECUTED.setdefault(filename, set()).add(frame.f_lineno)
    return _tracer


sys.settrace(_tracer)


@pytest.fixture()
def recipes():
    from tests.utils import sample_recipes

    return sample_recipes()


@pytest.fixture()
def store(recipes):
    from petitsplats.store import RecipeStore

    return RecipeStore(recipes)


@pytest.fixture()
def controller(store):
    from petitsplats.controller import FilterController

    return FilterController(store)


@pytest.fixture()
def data_file(tmp_path: Path) -> Path:
    from tests.utils import write_recipe_data

    return write_recipe_data(tmp_path / "recipes.yaml")


@pytest.fixture()
def temp_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


def pytest_sessionfinish(session, exitstatus):  # pragma: no cover - test helper
    sys.settrace(None)
    unexecuted = {
        path.relative_to(ROOT).as_posix(): lines
        for path in sorted(SRC.rglob("*.py"))
        if (lines := sorted(_statement_lines(path) - EXECUTED.get(str(path), set())))
    }
    if unexecuted:
        report = "\n".join(f"  {name}: {lines}" for name, lines in unexecuted.items())
        raise AssertionError(f"Unexecuted lines under src/:\n{report}")


def _statement_lines(path: Path) -> set[int]:
    text = path.read_text(encoding="utf-8")
    source = text.splitlines()
    candidates = _line_starts(compile(text, str(path), "exec")) - _wrapped_signature_lines(ast.parse(text))
    statements: set[int] = set()
    for line_no in candidates:
        if not 0 < line_no <= len(source):
            continue
        line = source[line_no - 1].strip()
        if line and not line.startswith("#") and "# pragma: no cover" not in line:
            statements.add(line_no)
    return statements


def _line_starts(code: types.CodeType) -> set[int]:
    lines = {line_no for _, line_no in dis.findlinestarts(code) if line_no is not None}
    for const in code.co_consts:
        if isinstance(const, types.CodeType):
            lines |= _line_starts(const)
    return lines


# Continuation lines of a multi-line def report as executed only on some versions.
def _wrapped_signature_lines(tree: ast.AST) -> set[int]:
    lines: set[int] = set()
    for node in ast.walk(tree):
        if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)) and node.body:
            lines.update(range(node.lineno + 1, node.body[0].lineno))
    return lines
