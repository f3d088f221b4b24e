"""
History component port definitions.
"""

from __future__ import annotations

from src.core.ports.events import NotifierPort
from src.core.ports.surface import SurfacePort

__all__ = ["NotifierPort", "SurfacePort"]
