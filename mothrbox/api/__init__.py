"""HTTP endpoints for Mothrbox.

The auth blueprint carries every route except /health, which lives on the
app in main.py.
"""

from .auth import auth_bp

__all__ = ["auth_bp"]
