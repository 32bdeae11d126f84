"""Interactive mode: prompts for variable values before generation."""

from .prompt import Prompter, run_interactive

__all__ = ['Prompter', 'run_interactive']
