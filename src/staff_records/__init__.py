"""Staff records identity core: NIC codec, date helpers and record preparation."""
from __future__ import annotations

__version__ = "1.0.0"

__all__ = ["__version__"]
