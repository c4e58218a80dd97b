"""Repository layer: store access helpers (SQLite).

Keep functions thin and focused, so services avoid SQL strings.
"""
from __future__ import annotations
