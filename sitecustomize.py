"""Workspace-local Python startup customization.

Auto-imported by Python's site module when running from this repository root,
so the `src` layout package is importable without installing it:

    python -m liftsim
"""

from __future__ import annotations

import os
import sys


def _ensure_src_on_path() -> None:
    src_path = os.path.join(os.path.dirname(__file__), "src")
    if os.path.isdir(src_path) and src_path not in sys.path:
        sys.path.insert(0, src_path)


_ensure_src_on_path()
