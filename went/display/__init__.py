"""Terminal rendering: colour roles and the display router.

The router module is imported directly (``went.display.router``) since it
depends on the configuration models, which in turn use the colour roles.
"""

from .colors import ColorRole, Colorizer, hashed_entry  # noqa: F401

__all__ = ["ColorRole", "Colorizer", "hashed_entry"]
