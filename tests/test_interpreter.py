import io
import threading

import pytest

from minigo import errors
from minigo.interpreter import Interpreter
from minigo.package_registry import Package, PackageRegistry
from minigo.reader import FileSet, parse_file
from minigo.types.function import HostFunction

from conftest import TESTDATA

FUNCS = """package main

func main() {
	x := "caller"
	println(Greet("go"))
	Peek()
}

func Greet(name string) string {
	return "hi " + name
}

func Peek() {
	println(x)
}

func Pair() {
	return 1, 2
}
"""


# -----------------------------------------------------
# Entry points
# -----------------------------------------------------


def test_missing_entrypoint_produces_no_output(fset, interp, stdout):
    tree = parse_file(fset, str(TESTDATA / "another-entrypoint.go"))
    with pytest.raises(errors.EntryPointNotFound) as exc:
        interp.run_file(tree, "main")
    assert str(exc.value) == "entrypoint func main() is not found"
    assert exc.value.line is None
    assert stdout.getvalue() == ""


def test_entrypoint_selects_one_function(run_source):
    source = (TESTDATA / "another-entrypoint.go").read_text(encoding="utf-8")
    assert run_source(source, "Bar") == "Bar\n"


def test_default_output_is_sys_stdout(capsys):
    fset = FileSet()
    app = Interpreter(fset)
    app.run_file(parse_file(fset, str(TESTDATA / "hello.go")))
    assert capsys.readouterr().out.splitlines()[0] == "Hello, World!"


def test_reruns_are_independent(fset, interp, stdout):
    tree = parse_file(fset, str(TESTDATA / "assign.go"))
    interp.run_file(tree)
    first = stdout.getvalue()
    interp.run_file(tree)
    assert stdout.getvalue() == first * 2
    assert interp.evaluator.scope.depth == 1
    assert interp.evaluator.history == []
    assert len(interp.registry.get("main").files) == 1


def test_main_locals_do_not_leak_between_runs(run_source):
    run_source("package main\n\nfunc main() {\n\tleak := 1\n}\n", filename="a.go")
    with pytest.raises(errors.UndefinedReference):
        run_source("package main\n\nfunc main() {\n\tprintln(leak)\n}\n", filename="b.go")


def test_supplied_registry_is_used_as_is():
    registry = PackageRegistry()
    pkg = Package(path="fmt")
    pkg.export(HostFunction("Println", lambda args: None, variadic=True))
    registry.register(pkg)
    fset = FileSet()
    app = Interpreter(fset, stdout=io.StringIO(), registry=registry)
    assert app.registry is registry
    assert registry.get("strings") is None
    app.run_file(parse_file(fset, str(TESTDATA / "hello.go")))
    assert app.stdout.getvalue() == "Hello World!\n"


# -----------------------------------------------------
# Errors
# -----------------------------------------------------


def test_error_line_numbers(fset, interp):
    source = 'package main\n\nfunc main() {\n\tprintln("a")\n\n\tprintln(1 + "a")\n}\n'
    tree = parse_file(fset, "line.go", source)
    with pytest.raises(errors.TypeMismatch) as exc:
        interp.run_file(tree)
    assert exc.value.line == 6
    assert str(exc.value).startswith("line:6 failed to eval stmt: ")


def test_line_numbers_in_second_file(fset, interp):
    parse_file(fset, "first.go", "package main\n\nfunc main() {\n}\n")
    tree = parse_file(fset, "second.go", "package main\nfunc main() {\n\tnope()\n}\n")
    with pytest.raises(errors.UndefinedReference) as exc:
        interp.run_file(tree)
    assert exc.value.line == 3


# -----------------------------------------------------
# Script functions
# -----------------------------------------------------


def test_script_functions_see_only_root_bindings(run_source, stdout):
    with pytest.raises(errors.UndefinedReference) as exc:
        run_source(FUNCS)
    assert stdout.getvalue() == "hi go\n"
    assert str(exc.value) == (
        "line:6 failed to eval stmt: failed to eval expr: in Peek(): "
        "failed to eval expr: failed to eval argument[0]: undefined variable: x"
    )


def test_script_function_arity(run_source):
    with pytest.raises(errors.TypeMismatch) as exc:
        run_source(FUNCS.replace('println(Greet("go"))', "Greet()"))
    assert str(exc.value).endswith("Greet expects 1 argument(s), got 0")


def test_multiple_return_values_are_unsupported(run_source):
    with pytest.raises(errors.UnsupportedConstruct) as exc:
        run_source(FUNCS.replace("Peek()\n}", "Pair()\n}", 1))
    assert str(exc.value).endswith("in Pair(): unsupported return of 2 values")


def test_script_call_restores_caller_scope(run_source):
    source = (
        "package main\n\nfunc main() {\n\tx := 1\n\tId(2)\n\tprintln(x)\n}\n\n"
        "func Id(x int) int {\n\treturn x\n}\n"
    )
    assert run_source(source) == "1\n"


# -----------------------------------------------------
# Cancellation
# -----------------------------------------------------


def test_cancelled_before_start(fset, interp, stdout):
    tree = parse_file(fset, str(TESTDATA / "hello.go"))
    cancel = threading.Event()
    cancel.set()
    with pytest.raises(errors.Cancelled) as exc:
        interp.run_file(tree, cancel=cancel)
    assert exc.value.line == 6
    assert stdout.getvalue() == ""
    assert interp.evaluator.cancel is None


def test_cancelled_mid_run(fset, interp, stdout):
    cancel = threading.Event()
    ctl = Package(path="ctl")
    ctl.export(HostFunction("Stop", lambda args: cancel.set(), variadic=True))
    interp.registry.register(ctl)
    source = 'package main\n\nimport "ctl"\n\nfunc main() {\n\tprintln("a")\n\tctl.Stop()\n\tprintln("b")\n}\n'
    with pytest.raises(errors.Cancelled):
        interp.run_file(parse_file(fset, "cancel.go", source), cancel=cancel)
    assert stdout.getvalue() == "a\n"


def test_cancel_token_is_not_kept_between_runs(fset, interp, stdout):
    tree = parse_file(fset, str(TESTDATA / "hello.go"))
    cancel = threading.Event()
    interp.run_file(tree, cancel=cancel)
    cancel.set()
    interp.run_file(tree)
    assert stdout.getvalue().count("Hello, World!") == 2


def test_declared_function_shadows_builtin(run_source):
    source = (
        'package main\n\nimport "fmt"\n\nfunc main() {\n\tprintln("x")\n}\n\n'
        'func println(s string) {\n\tfmt.Println("custom", s)\n}\n'
    )
    assert run_source(source) == "custom x\n"


def test_local_binding_shadows_declared_function(run_source):
    source = (
        "package main\n\nfunc main() {\n\tGreet := 1\n\tGreet()\n}\n\n"
        'func Greet() {\n\tprintln("hi")\n}\n'
    )
    with pytest.raises(errors.UnsupportedConstruct) as exc:
        run_source(source)
    assert str(exc.value).endswith("unsupported function: Greet")


# -----------------------------------------------------
# Call depth
# -----------------------------------------------------

LOOP = "package main\n\nfunc main() {\n\tprintln(\"start\")\n\tF()\n}\n\nfunc F() {\n\tF()\n}\n"


def test_unbounded_recursion_is_a_typed_error(run_source, interp, stdout):
    with pytest.raises(errors.CallDepthExceeded) as exc:
        run_source(LOOP)
    assert exc.value.line == 5
    assert str(exc.value).startswith("line:5 failed to eval stmt: failed to eval expr: in F(): ")
    assert str(exc.value).endswith("call to F() exceeds the maximum call depth of 64")
    assert stdout.getvalue() == "start\n"
    assert interp.evaluator.depth == 0
    assert interp.evaluator.scope.depth == 1


def test_call_depth_from_env(monkeypatch):
    monkeypatch.setenv("MINIGO_MAX_CALL_DEPTH", "3")
    fset = FileSet()
    app = Interpreter(fset, stdout=io.StringIO())
    with pytest.raises(errors.CallDepthExceeded) as exc:
        app.run_file(parse_file(fset, "loop.go", LOOP))
    assert str(exc.value).count("in F()") == 3
