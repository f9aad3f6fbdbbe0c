"""Toolpath generation package."""

from .base import Directive, Dwell, MoveCommand, MoveType, ToolPath, ToolPathSegment

__all__ = ["Directive", "Dwell", "MoveCommand", "MoveType", "ToolPath", "ToolPathSegment"]
