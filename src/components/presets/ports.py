"""
Presets component port definitions.
"""

from __future__ import annotations

from src.core.ports.events import NotifierPort

__all__ = ["NotifierPort"]
