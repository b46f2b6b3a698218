"""
Shared test infrastructure for Sauce.

Modules:
- file_utils: Writing template, data and config files into tmp_path
- cli_utils: Running the sauce CLI in a subprocess
"""

from .cli_utils import run_cli
from .file_utils import write

__all__ = [
    "write",
    "run_cli",
]
