from dataclasses import dataclass, field
from typing import Dict, List, Optional

from semantic.type_system import MiniType
from semantic.diagnostics import MAIN


@dataclass
class Symbol:
    name: str
    type: MiniType
    line: int = 0


@dataclass
class VariableSymbol(Symbol):
    is_const: bool = False
    # raw text of the initializer, only used for reporting
    init_text: Optional[str] = None


@dataclass
class FunctionSymbol(Symbol):
    parameters: List[VariableSymbol] = field(default_factory=list)
    local_variables: List[VariableSymbol] = field(default_factory=list)
    control_structures: List[str] = field(default_factory=list)
    has_return: bool = False
    is_recursive: bool = False

    @property
    def is_main(self) -> bool:
        return self.name == MAIN


class SymbolTable:
    def __init__(self):
        # scope stack; the global scope sits at index 0 and is never popped
        self.scopes: List[Dict[str, Symbol]] = [{}]
        self._functions: Dict[str, FunctionSymbol] = {}

    # Scope management
    def enter_scope(self) -> None:
        """Push a new nested scope."""
        self.scopes.append({})

    def exit_scope(self) -> None:
        """Pop the current scope."""
        if len(self.scopes) <= 1:
            raise RuntimeError("Cannot exit global scope")
        self.scopes.pop()

    @property
    def depth(self) -> int:
        return len(self.scopes)

    def define(self, symbol: Symbol) -> bool:
        """
        Insert `symbol` into the current scope.

        Returns False, leaving every table untouched, when the name is already
        taken in that exact scope; the first definition is kept. Functions are
        also recorded in the global function registry. Callers check the
        registry for function redefinitions before calling this.
        """
        current = self.scopes[-1]
        if symbol.name in current:
            return False
        current[symbol.name] = symbol
        if isinstance(symbol, FunctionSymbol):
            self._functions[symbol.name] = symbol
        return True

    def register_function(self, fn: FunctionSymbol) -> None:
        """Record `fn` in the function registry only, without touching any scope."""
        self._functions[fn.name] = fn

    def resolve_current_scope_only(self, name: str) -> Optional[Symbol]:
        return self.scopes[-1].get(name)

    def resolve(self, name: str) -> Optional[Symbol]:
        """Look a name up from the innermost scope outwards."""
        for scope in reversed(self.scopes):
            if name in scope:
                return scope[name]
        return None

    # Read views for reporting
    @property
    def global_variables(self) -> List[VariableSymbol]:
        return [s for s in self.scopes[0].values() if isinstance(s, VariableSymbol)]

    @property
    def functions(self) -> Dict[str, FunctionSymbol]:
        return self._functions
