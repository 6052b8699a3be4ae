import io
from pathlib import Path

import pytest

from minigo.interpreter import Interpreter
from minigo.reader import FileSet, parse_file

TESTDATA = Path(__file__).parent / "testdata"


def normalize(s: str) -> str:
    return s.strip()


def read_output_comment(path: Path) -> list[str]:
    """Collect the comment lines following '// Output:' in a source file."""
    lines = iter(path.read_text(encoding="utf-8").splitlines())
    for line in lines:
        if "// Output:" in line:
            break
    output = []
    for line in lines:
        line = line.strip()
        if not line.startswith("//"):
            break
        output.append(line.lstrip("/ "))
    return output


@pytest.fixture
def fset():
    return FileSet()


@pytest.fixture
def stdout():
    return io.StringIO()


@pytest.fixture
def interp(fset, stdout):
    return Interpreter(fset, stdout=stdout, stderr=stdout)


@pytest.fixture
def run_source(fset, interp, stdout):
    """Parse `source` as a file and run one entry point; returns the output."""
    counter = iter(range(1_000_000))

    def run(source: str, entry_point: str = "main", filename: str | None = None) -> str:
        name = filename or f"snippet_{next(counter)}.go"
        tree = parse_file(fset, name, source)
        interp.run_file(tree, entry_point)
        return stdout.getvalue()

    return run


@pytest.fixture
def run_body(run_source):
    """Wrap statements in `package main` + imports + func main and run them."""

    def run(body: str, imports: str = 'import (\n\t"fmt"\n\t"strings"\n)\n') -> str:
        return run_source(f"package main\n\n{imports}\nfunc main() {{\n{body}\n}}\n")

    return run
