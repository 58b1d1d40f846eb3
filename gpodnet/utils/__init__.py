"""
Utility modules.
"""

from .ui import Icons, UIHelper, console, ui

__all__ = [
    "console",
    "ui",
    "Icons",
    "UIHelper",
]
