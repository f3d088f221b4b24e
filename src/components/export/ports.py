"""
Export component port definitions.
"""

from __future__ import annotations

from src.core.ports.events import NotifierPort
from src.core.ports.surface import SurfacePort
from src.core.ports.time import TimePort

__all__ = ["NotifierPort", "SurfacePort", "TimePort"]
