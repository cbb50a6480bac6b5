"""Configuration types for assignables."""

from assignables.config.assignment_config import AssignmentConfig

__all__ = ["AssignmentConfig"]
