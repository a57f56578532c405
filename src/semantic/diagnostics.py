from dataclasses import dataclass
from typing import Optional

MAIN = "main"


@dataclass(frozen=True)
class Diagnostic:
    line: Optional[int]
    message: str

    def __str__(self):
        if self.line is None:
            return self.message
        return f"[line {self.line}] {self.message}"


def check_main(table) -> Optional[Diagnostic]:
    """Whole-program check run after the semantic pass."""
    if MAIN in table.functions:
        return None
    return Diagnostic(None, f"Function '{MAIN}' is missing.")
