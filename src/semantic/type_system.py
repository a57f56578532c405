from enum import Enum
from typing import Optional


class MiniType(Enum):
    INT = "Int"
    FLOAT = "Float"
    DOUBLE = "Double"
    STRING = "String"
    BOOL = "Bool"
    VOID = "Void"
    UNKNOWN = "Unknown"
    ERROR = "Error"

    def __str__(self):
        return self.value


# Already reported or unresolvable; never the cause of a second diagnostic
SENTINELS = {MiniType.UNKNOWN, MiniType.ERROR}

_KEYWORDS = {
    "int": MiniType.INT,
    "float": MiniType.FLOAT,
    "double": MiniType.DOUBLE,
    "string": MiniType.STRING,
    "void": MiniType.VOID,
    "bool": MiniType.BOOL,
}

# target -> sources that widen into it
_WIDENING = {
    MiniType.DOUBLE: {MiniType.FLOAT, MiniType.INT},
    MiniType.FLOAT: {MiniType.INT},
}


def parse_type(text: Optional[str]) -> MiniType:
    """Map a type keyword to its MiniType. Anything else is Unknown."""
    if not text:
        return MiniType.UNKNOWN
    return _KEYWORDS.get(text.strip(), MiniType.UNKNOWN)


def is_sentinel(t: MiniType) -> bool:
    return t in SENTINELS


def are_compatible(target: MiniType, source: MiniType) -> bool:
    """
    True when a value of type `source` may be stored into `target`
    (initialization, assignment, return, argument passing).
    Directional: Double <- Int is fine, Int <- Double is not.
    """
    if is_sentinel(target) or is_sentinel(source):
        return True
    if target == source:
        return True
    return source in _WIDENING.get(target, ())


def common_type(a: MiniType, b: MiniType) -> MiniType:
    """Result type of binary arithmetic. Never reports anything itself."""
    if is_sentinel(a) or is_sentinel(b):
        return MiniType.UNKNOWN
    if MiniType.STRING in (a, b):
        return MiniType.STRING
    if MiniType.DOUBLE in (a, b):
        return MiniType.DOUBLE
    if MiniType.FLOAT in (a, b):
        return MiniType.FLOAT
    return MiniType.INT
