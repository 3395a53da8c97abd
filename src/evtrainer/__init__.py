from __future__ import annotations

import sys as _sys

if _sys.version_info < (3, 11):
    raise RuntimeError(f"evtrainer requires Python 3.11 or newer; detected {_sys.version.split()[0]}")

__version__ = "0.1.0"

__all__: list[str] = ["__version__"]
