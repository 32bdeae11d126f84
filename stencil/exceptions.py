"""Stencil exceptions."""

from typing import List, Optional
from dataclasses import dataclass


@dataclass
class ValidationError:
    """Single configuration validation error."""
    message: str
    path: str = ""


class StencilError(Exception):
    """Base class for errors surfaced to the CLI.

    Every subclass carries the process exit code the CLI should return.
    """

    exit_code = 1


class ConfigValidationError(StencilError):
    """Raised when a configuration file fails validation.

    The loader collects every problem it finds before raising, so the
    user can fix them all in one pass.
    """

    def __init__(self, errors: List[ValidationError]):
        self.errors = errors

        messages = []
        for error in errors:
            if error.path:
                messages.append(f"Validation error at '{error.path}': {error.message}")
            else:
                messages.append(f"Validation error: {error.message}")

        super().__init__("\n".join(messages))


class TemplateNotFoundError(StencilError):
    """Raised when the template directory is missing or not a directory."""

    def __init__(self, template_dir):
        self.template_dir = template_dir
        super().__init__(f"Template directory does not exist: {template_dir}")


class GenerationError(StencilError):
    """Raised when an I/O operation fails while walking the template."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)


class PromptError(StencilError):
    """Raised when interactive input cannot be read or is invalid."""
