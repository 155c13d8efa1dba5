# tests/conftest.py
from pathlib import Path
import sys

# Make the src/ layout importable when running pytest without installing.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))
