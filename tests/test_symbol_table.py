# tests/test_symbol_table.py

import pytest
from semantic.type_system import MiniType
from symbol_table.symbol_table import SymbolTable, VariableSymbol, FunctionSymbol

def test_define_and_resolve_global():
    st = SymbolTable()
    sym = VariableSymbol(name="x", type=MiniType.INT)
    assert st.define(sym)
    looked = st.resolve("x")
    assert looked is sym
    assert looked.type is MiniType.INT

def test_nested_scope_resolve_and_hide():
    st = SymbolTable()
    st.define(VariableSymbol("a", MiniType.BOOL))
    st.enter_scope()
    # 'a' heredada del scope externo
    assert st.resolve("a").type is MiniType.BOOL
    assert st.resolve_current_scope_only("a") is None
    # redefinimos 'a' en el scope interno
    inner = VariableSymbol("a", MiniType.STRING)
    assert st.define(inner)
    assert st.resolve("a") is inner
    st.exit_scope()
    # volvemos al scope global
    assert st.resolve("a").type is MiniType.BOOL

def test_define_duplicate_keeps_first():
    st = SymbolTable()
    first = VariableSymbol("y", MiniType.INT, init_text="5")
    assert st.define(first)
    assert not st.define(VariableSymbol("y", MiniType.FLOAT, init_text="6"))
    assert st.resolve("y") is first
    assert [v.init_text for v in st.global_variables] == ["5"]

def test_resolve_missing_returns_none():
    st = SymbolTable()
    st.enter_scope()
    assert st.resolve("nope") is None
    assert st.resolve_current_scope_only("nope") is None

def test_exit_global_scope_raises():
    st = SymbolTable()
    with pytest.raises(RuntimeError):
        st.exit_scope()
    assert st.depth == 1

def test_functions_go_to_registry_and_global_scope():
    st = SymbolTable()
    f = FunctionSymbol("f", MiniType.VOID)
    assert st.define(f)
    assert st.functions == {"f": f}
    assert st.resolve("f") is f
    # variables and functions share one namespace at global scope
    assert not st.define(VariableSymbol("f", MiniType.INT))
    assert st.global_variables == []

def test_function_conflicting_with_variable_is_not_registered():
    st = SymbolTable()
    st.define(VariableSymbol("g", MiniType.INT))
    assert not st.define(FunctionSymbol("g", MiniType.INT))
    assert "g" not in st.functions

def test_views_keep_declaration_order():
    st = SymbolTable()
    for name in ("c", "a", "b"):
        st.define(VariableSymbol(name, MiniType.INT))
    for name in ("zeta", "alpha"):
        st.define(FunctionSymbol(name, MiniType.VOID))
    st.enter_scope()
    st.define(VariableSymbol("local", MiniType.INT))
    assert [v.name for v in st.global_variables] == ["c", "a", "b"]
    assert list(st.functions) == ["zeta", "alpha"]

def test_is_main():
    assert FunctionSymbol("main", MiniType.INT).is_main
    assert not FunctionSymbol("mainly", MiniType.INT).is_main

def test_register_function_leaves_scopes_alone():
    st = SymbolTable()
    g = VariableSymbol("g", MiniType.INT)
    st.define(g)
    fn = FunctionSymbol("g", MiniType.VOID)
    assert not st.define(fn)
    st.register_function(fn)
    assert st.functions == {"g": fn}
    assert st.resolve("g") is g
    assert st.global_variables == [g]
