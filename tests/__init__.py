"""Test package initialisation for the ballistics service."""

from pathlib import Path
import sys

# Make top-level packages (``ballistics``, ``api``) importable when pytest runs
# from a directory other than the repository root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
