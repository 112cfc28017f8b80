"""Run every example script and compare stdout with its ``# =>`` annotations."""

from __future__ import annotations

import ast
import os
import subprocess
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]
EXAMPLES_ROOT = REPO_ROOT / "examples"
SRC_ROOT = REPO_ROOT / "src"


def _example_paths() -> list[Path]:
    return sorted(EXAMPLES_ROOT.glob("ex_*/[0-9][0-9]_*.py"))


def _expected_output(path: Path) -> list[str]:
    source = path.read_text(encoding="utf-8")
    lines = source.splitlines()
    prints = sorted(
        (
            node
            for node in ast.walk(ast.parse(source, filename=str(path)))
            if isinstance(node, ast.Call)
            and isinstance(node.func, ast.Name)
            and node.func.id == "print"
        ),
        key=lambda node: (node.lineno, node.col_offset),
    )

    expected: list[str] = []
    for node in prints:
        closing_line = lines[(node.end_lineno or node.lineno) - 1]
        if "# =>" not in closing_line:
            msg = f"{path}:{node.end_lineno}: print() must end with '# =>' and its output."
            raise AssertionError(msg)
        expected.append(closing_line.split("# =>", maxsplit=1)[1].strip())
    return expected


def test_examples_are_present() -> None:
    assert _example_paths()


@pytest.mark.parametrize(
    "path",
    _example_paths(),
    ids=lambda path: str(path.relative_to(EXAMPLES_ROOT)),
)
def test_example_stdout_matches_annotations(path: Path) -> None:
    pythonpath = filter(None, (str(SRC_ROOT), os.environ.get("PYTHONPATH")))
    env = {**os.environ, "PYTHONPATH": os.pathsep.join(pythonpath)}

    completed = subprocess.run(  # noqa: S603
        [sys.executable, str(path)],
        cwd=path.parent,
        env=env,
        capture_output=True,
        text=True,
        check=False,
    )

    assert completed.returncode == 0, completed.stderr
    assert completed.stderr == ""
    assert completed.stdout.splitlines() == _expected_output(path)
