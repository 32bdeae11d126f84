"""CLI command handlers."""

from .generate import generate_project

__all__ = ['generate_project']
