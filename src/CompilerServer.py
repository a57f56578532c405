# src/CompilerServer.py
import logging
from typing import List, Literal, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from compiler import compile_source, CompilationResult

log = logging.getLogger(__name__)

app = FastAPI()


class InputCode(BaseModel):
    source: str

class Errors(BaseModel):
    line: int
    message: str
    severity: Literal["error", "warning"]

class Diagnostics(BaseModel):
    diagnostics: List[Errors]

class VariableOut(BaseModel):
    name: str
    type: str
    init: Optional[str] = None
    const: bool = False

class ParameterOut(BaseModel):
    name: str
    type: str

class FunctionOut(BaseModel):
    name: str
    return_type: str
    is_main: bool
    is_recursive: bool
    parameters: List[ParameterOut]
    local_variables: List[VariableOut]
    control_structures: List[str]

class Symbols(BaseModel):
    global_variables: List[VariableOut]
    functions: List[FunctionOut]


def _compile(code: str) -> CompilationResult:
    try:
        return compile_source(code)
    except Exception as e:
        log.exception("compilation failed")
        raise HTTPException(status_code=500, detail=str(e))


def diagnostics_driver(result: CompilationResult) -> Diagnostics:
    diags = [Errors(line=e.line, message=e.msg, severity="error") for e in result.syntax_errors]
    for d in result.diagnostics:
        # whole-program diagnostics (missing main) have no line
        diags.append(Errors(line=d.line or 0, message=d.message, severity="error"))
    return Diagnostics(diagnostics=diags)


def _var_out(v) -> VariableOut:
    return VariableOut(name=v.name, type=str(v.type), init=v.init_text, const=v.is_const)


def symbols_driver(result: CompilationResult) -> Symbols:
    table = result.table
    funcs = [
        FunctionOut(
            name=f.name,
            return_type=str(f.type),
            is_main=f.is_main,
            is_recursive=f.is_recursive,
            parameters=[ParameterOut(name=p.name, type=str(p.type)) for p in f.parameters],
            local_variables=[_var_out(v) for v in f.local_variables],
            control_structures=list(f.control_structures),
        )
        for f in table.functions.values()
    ]
    return Symbols(global_variables=[_var_out(v) for v in table.global_variables], functions=funcs)


@app.get("/")
def root():
    return {"message": "Hello from the MiniLang semantic analyzer service!"}


## Diagnostic endpoints
@app.post("/diagnostics", response_model=Diagnostics)
def diagnostics(payload: InputCode):
    return diagnostics_driver(_compile(payload.source))


## Symbol table endpoints
@app.post("/symbols", response_model=Symbols)
def symbols(payload: InputCode):
    return symbols_driver(_compile(payload.source))
