# tests/conftest.py
# Agrega src/ y server/ al sys.path para que "import semantic.xxx" y "import handlers" funcionen en pytest.
import sys
import os

# calculamos la ruta a la raíz del repositorio (un nivel arriba de tests/)
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

for sub in ("src", "server"):
    path = os.path.join(ROOT, sub)
    if path not in sys.path:
        sys.path.insert(0, path)
