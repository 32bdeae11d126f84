"""
Variable substitution implementation.
Handles the four placeholder syntaxes: {{name}}, <<name>>, __name__, %name%.
"""

import re
from dataclasses import dataclass, fields
from typing import AnyStr, Dict, List, Optional, Tuple, Union


@dataclass(frozen=True)
class FormatOptions:
    """Which placeholder syntaxes are active. All are enabled by default."""
    braces: bool = True          # {{name}}
    angle_brackets: bool = True  # <<name>>
    underscores: bool = True     # __name__
    percent: bool = True         # %name%

    def enabled(self) -> List[str]:
        """Names of the enabled formats, in scan order."""
        return [f.name for f in fields(self) if getattr(self, f.name)]


# format name -> (opening delimiter, closing delimiter)
DELIMITERS: Dict[str, Tuple[str, str]] = {
    'braces': ('{{', '}}'),
    'angle_brackets': ('<<', '>>'),
    'underscores': ('__', '__'),
    'percent': ('%', '%'),
}


class VariableSubstitutor:
    """
    Substitutes and extracts placeholders in file contents and paths.

    An instance is configured once with a variable set and a format
    selection, then reused read-only for a whole template walk.

    Substitution is literal: for each variable and each enabled format the
    delimited name is replaced everywhere it occurs. Placeholders whose name
    is not in the variable set are left untouched, and replacement values
    are inserted as-is: a value that looks like a placeholder is not
    expanded again, whatever the order of the variable set.
    """

    TEXT_PATTERNS: Dict[str, re.Pattern] = {
        'braces': re.compile(r'\{\{([^}]+)\}\}'),
        'angle_brackets': re.compile(r'<<([^>]+)>>'),
        'underscores': re.compile(r'__([A-Za-z0-9_]+)__'),
        'percent': re.compile(r'%([A-Za-z0-9_]+)%'),
    }

    BYTE_PATTERNS: Dict[str, re.Pattern] = {
        name: re.compile(pattern.pattern.encode('ascii'))
        for name, pattern in TEXT_PATTERNS.items()
    }

    def __init__(
        self,
        variables: Optional[Dict[str, str]] = None,
        formats: Optional[FormatOptions] = None
    ):
        """
        Initialize the substitutor.

        Args:
            variables: Mapping of variable name to replacement value
            formats: Enabled placeholder syntaxes (all enabled when omitted)
        """
        self.variables: Dict[str, str] = dict(variables or {})
        self.formats = formats or FormatOptions()
        self._enabled = self.formats.enabled()

        # placeholder -> value, for every variable in every enabled format
        self._text_values: Dict[str, str] = {}
        for key, value in self.variables.items():
            for fmt in self._enabled:
                opening, closing = DELIMITERS[fmt]
                self._text_values.setdefault(f"{opening}{key}{closing}", value)
        self._byte_values: Dict[bytes, bytes] = {
            placeholder.encode('utf-8', 'surrogateescape'): value.encode('utf-8', 'surrogateescape')
            for placeholder, value in self._text_values.items()
        }

        # One alternation, longest placeholder first, so the whole input is
        # rewritten in a single scan and inserted values are never rescanned.
        self._text_pattern = self._compile_alternation(list(self._text_values))
        self._byte_pattern = self._compile_alternation(list(self._byte_values))

    @staticmethod
    def _compile_alternation(placeholders: List[AnyStr]) -> Optional[re.Pattern]:
        if not placeholders:
            return None
        ordered = sorted(placeholders, key=len, reverse=True)
        separator = b'|' if isinstance(ordered[0], bytes) else '|'
        return re.compile(separator.join(re.escape(p) for p in ordered))

    def substitute_content(self, content: bytes) -> bytes:
        """
        Replace placeholders in file content.

        Args:
            content: Raw file bytes

        Returns:
            Content with every known placeholder replaced
        """
        if self._byte_pattern is None:
            return content
        return self._byte_pattern.sub(lambda m: self._byte_values[m.group(0)], content)

    def substitute_path(self, path: str) -> str:
        """
        Replace placeholders in a file or directory path.

        Args:
            path: Path relative to the template root

        Returns:
            Path with every known placeholder replaced
        """
        if self._text_pattern is None:
            return path
        return self._text_pattern.sub(lambda m: self._text_values[m.group(0)], path)

    def extract(self, text: Union[str, bytes]) -> List[str]:
        """
        Find the variable names referenced by the enabled formats.

        Each format is scanned independently over the whole input. Names are
        deduplicated and returned in first-seen order.

        Args:
            text: File content (bytes) or path (str)

        Returns:
            Distinct variable names
        """
        found: Dict[str, None] = {}

        if isinstance(text, bytes):
            for fmt in self._enabled:
                for match in self.BYTE_PATTERNS[fmt].finditer(text):
                    found[match.group(1).decode('utf-8', 'surrogateescape')] = None
        else:
            for fmt in self._enabled:
                for match in self.TEXT_PATTERNS[fmt].finditer(text):
                    found[match.group(1)] = None

        return list(found)


def extract_variables(
    text: Union[str, bytes],
    formats: Optional[FormatOptions] = None
) -> List[str]:
    """Extract referenced variable names without needing a variable set."""
    return VariableSubstitutor(formats=formats).extract(text)
