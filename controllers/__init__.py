"""
Controllers layer - orchestration of a cooking session.
"""

from controllers.cooking_controller import CookingController

__all__ = ["CookingController"]
