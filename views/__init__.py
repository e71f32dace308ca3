"""
Views layer - UI presentation components.
"""

from views.home_view import HomeView
from views.cooking_view import CookingView

__all__ = ["HomeView", "CookingView"]
