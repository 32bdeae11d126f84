"""Stencil: project scaffolding from template directories."""

__version__ = "1.0.0"
