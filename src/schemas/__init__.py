"""Schemas for the application."""

from .view import ActionToken, ActionType, Button, ViewDescriptor

__all__ = [
    "ActionToken",
    "ActionType",
    "Button",
    "ViewDescriptor",
]
