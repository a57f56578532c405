# tests/test_compiler_server.py
import pytest
from fastapi.testclient import TestClient

import CompilerServer
from compiler import CompilationResult
from parsing.error_listener import SyntaxDiagnostic
from semantic.diagnostics import Diagnostic
from semantic.semantic_visitor import analyze
from helpers import program, lit, ident, var, func, ret, while_, main_fn, assign


def fake_result(_code):
    table = analyze(program(
        var("int", "g", lit(1), const=True),
        func("int", "inc", [("int", "n")], [ret(ident("n"))]),
        main_fn(var("bool", "b"), while_(lit(True), [assign("b", lit(False))], line=4)),
    )).table
    return CompilationResult(
        program=None,
        table=table,
        diagnostics=[Diagnostic(3, "Variable 'z' is not declared."), Diagnostic(None, "Function 'main' is missing.")],
        syntax_errors=[SyntaxDiagnostic(2, 1, ";", "extraneous input ';'")],
    )


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(CompilerServer, "compile_source", fake_result)
    return TestClient(CompilerServer.app)


def test_root(client):
    r = client.get("/")
    assert r.status_code == 200
    assert "MiniLang" in r.json()["message"]

def test_diagnostics(client):
    r = client.post("/diagnostics", json={"source": "whatever"})
    assert r.status_code == 200
    assert r.json() == {"diagnostics": [
        {"line": 2, "message": "extraneous input ';'", "severity": "error"},
        {"line": 3, "message": "Variable 'z' is not declared.", "severity": "error"},
        {"line": 0, "message": "Function 'main' is missing.", "severity": "error"},
    ]}

def test_symbols(client):
    body = client.post("/symbols", json={"source": "whatever"}).json()
    assert body["global_variables"] == [{"name": "g", "type": "Int", "init": "1", "const": True}]
    inc, main = body["functions"]
    assert inc == {
        "name": "inc",
        "return_type": "Int",
        "is_main": False,
        "is_recursive": False,
        "parameters": [{"name": "n", "type": "Int"}],
        "local_variables": [],
        "control_structures": [],
    }
    assert main["is_main"] is True
    assert main["local_variables"] == [{"name": "b", "type": "Bool", "init": None, "const": False}]
    assert main["control_structures"] == ["while, line 4"]

def test_missing_source_is_rejected(client):
    assert client.post("/diagnostics", json={}).status_code == 422

def test_compiler_failure_is_500(monkeypatch):
    def boom(_code):
        raise RuntimeError("parser exploded")
    monkeypatch.setattr(CompilerServer, "compile_source", boom)
    r = TestClient(CompilerServer.app).post("/symbols", json={"source": "x"})
    assert r.status_code == 500
    assert r.json()["detail"] == "parser exploded"
