"""
Variable substitution module.
Implements placeholder extraction, substitution and binary detection.
"""

from .substitution import FormatOptions, VariableSubstitutor, extract_variables
from .binary import is_binary_content, is_binary_file

__all__ = [
    'FormatOptions',
    'VariableSubstitutor',
    'extract_variables',
    'is_binary_content',
    'is_binary_file',
]
