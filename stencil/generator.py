"""Template generation: walks a template tree and writes the generated project.

Entries are visited depth-first in lexicographic order. Every relative path
goes through path substitution; text files go through content substitution;
binary files are copied verbatim. Permission bits follow the template.
"""

import logging
import os
import shutil
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Literal, Optional, Tuple

from stencil.config import StencilConfig
from stencil.exceptions import GenerationError, TemplateNotFoundError
from stencil.variables import VariableSubstitutor, is_binary_file


logger = logging.getLogger(__name__)

PREVIEW_CHARS = 200
DEFAULT_DIR_MODE = 0o755

ActionKind = Literal["mkdir", "copy", "write"]


@dataclass
class GenerationAction:
    """One filesystem operation performed (or, in a dry run, planned)."""
    kind: ActionKind
    destination: Path
    source: Optional[Path] = None
    mode: Optional[int] = None
    preview: Optional[str] = None


def truncate(text: str, max_len: int = PREVIEW_CHARS) -> str:
    """Cut ``text`` to ``max_len`` characters, marking the cut with '...'."""
    if len(text) <= max_len:
        return text
    return text[:max_len] + "..."


class ProjectGenerator:
    """Generates a project from a template directory."""

    def __init__(self, config: StencilConfig):
        """
        Initialize the generator.

        Args:
            config: Template/output locations, variables, formats, dry-run flag
        """
        self.config = config
        self.substitutor = VariableSubstitutor(config.variables, config.formats)

    @property
    def template_dir(self) -> Path:
        return Path(self.config.template_dir)

    @property
    def output_dir(self) -> Path:
        return Path(self.config.output_dir)

    @property
    def dry_run(self) -> bool:
        return self.config.dry_run

    @property
    def skip_confirm(self) -> bool:
        return self.config.skip_confirm

    def set_variables(self, variables: Dict[str, str]) -> None:
        """Replace the variable set used for substitution."""
        self.config.variables = dict(variables)
        self.substitutor = VariableSubstitutor(self.config.variables, self.config.formats)

    def generate(self) -> List[GenerationAction]:
        """
        Generate the project.

        Returns:
            The actions performed, or that would be performed in a dry run

        Raises:
            TemplateNotFoundError: Template directory missing; nothing is written
            GenerationError: An entry could not be read or written; the walk
                stops and earlier output is left in place
        """
        self._check_template_dir()
        actions: List[GenerationAction] = []

        if not self.dry_run:
            try:
                self.output_dir.mkdir(mode=DEFAULT_DIR_MODE, parents=True, exist_ok=True)
            except OSError as e:
                raise GenerationError(
                    f"Failed to create output directory {self.output_dir}: {e}",
                    path=str(self.output_dir)
                ) from e

        # Directory modes are applied after their contents are written so that
        # read-only template directories can still be populated.
        pending_modes: List[Tuple[Path, int]] = []

        for source, relative, is_dir in self._walk():
            target = self.destination_for(relative)
            if target is None:
                logger.warning(f"Skipping {source}: path is empty after substitution")
                continue
            try:
                if is_dir:
                    actions.append(self._process_directory(source, target, pending_modes))
                else:
                    actions.append(self._process_file(source, target))
            except OSError as e:
                raise GenerationError(f"Failed to generate {target} from {source}: {e}", path=str(source)) from e

        for directory, mode in reversed(pending_modes):
            try:
                os.chmod(directory, mode)
            except OSError as e:
                raise GenerationError(f"Failed to set permissions on {directory}: {e}", path=str(directory)) from e

        return actions

    def destination_for(self, relative: Path) -> Optional[Path]:
        """
        Map a template-relative path to its place under the output directory.

        The substituted path is always kept under the output directory:
        leading separators left by empty or absolute values are dropped and
        empty segments collapse, as with a path join.

        Returns:
            The destination, or None when the path substitutes to nothing

        Raises:
            GenerationError: The substituted path climbs out with '..'
        """
        substituted = self.substitutor.substitute_path(str(relative))
        stripped = substituted.lstrip(os.sep + (os.altsep or ''))
        normalized = os.path.normpath(stripped) if stripped else os.curdir

        if normalized == os.curdir:
            return None
        if normalized == os.pardir or normalized.startswith(os.pardir + os.sep):
            raise GenerationError(
                f"Path {relative} resolves outside the output directory: {substituted}",
                path=str(relative)
            )
        return self.output_dir / normalized

    def extract_variables(self) -> Dict[str, str]:
        """
        Collect every variable name referenced by the template.

        Names come from every relative path and from the content of every
        non-binary file. Each name maps to an empty default value.
        """
        self._check_template_dir()
        found: Dict[str, str] = {}

        for source, relative, is_dir in self._walk():
            for name in self.substitutor.extract(str(relative)):
                found.setdefault(name, "")

            if is_dir or is_binary_file(source):
                continue

            try:
                content = source.read_bytes()
            except OSError as e:
                raise GenerationError(f"Failed to read {source}: {e}", path=str(source)) from e
            for name in self.substitutor.extract(content):
                found.setdefault(name, "")

        logger.debug(f"Found {len(found)} variables in {self.template_dir}")
        return found

    def _check_template_dir(self) -> None:
        if not self.template_dir.is_dir():
            raise TemplateNotFoundError(self.template_dir)

    def _walk(self, directory: Optional[Path] = None) -> Iterator[Tuple[Path, Path, bool]]:
        """Yield (source, path relative to template root, is_dir), depth-first."""
        directory = directory or self.template_dir
        try:
            entries = sorted(os.scandir(directory), key=lambda entry: entry.name)
        except OSError as e:
            raise GenerationError(f"Failed to list {directory}: {e}", path=str(directory)) from e

        for entry in entries:
            path = Path(entry.path)
            is_dir = entry.is_dir(follow_symlinks=False)
            yield path, path.relative_to(self.template_dir), is_dir
            if is_dir:
                yield from self._walk(path)

    def _process_directory(
        self,
        source: Path,
        target: Path,
        pending_modes: List[Tuple[Path, int]]
    ) -> GenerationAction:
        mode = stat.S_IMODE(source.stat().st_mode)

        if self.dry_run:
            logger.info(f"[DRY RUN] Would create directory: {target}")
            return GenerationAction(kind="mkdir", destination=target, mode=mode)

        logger.debug(f"Creating directory: {target}")
        target.mkdir(mode=DEFAULT_DIR_MODE, parents=True, exist_ok=True)
        pending_modes.append((target, mode))
        return GenerationAction(kind="mkdir", destination=target, mode=mode)

    def _process_file(self, source: Path, target: Path) -> GenerationAction:
        mode = stat.S_IMODE(source.stat().st_mode)

        if is_binary_file(source):
            if self.dry_run:
                logger.info(f"[DRY RUN] Would copy binary file: {source} -> {target}")
                return GenerationAction(kind="copy", destination=target, source=source, mode=mode)

            logger.debug(f"Copying binary file: {source} -> {target}")
            target.parent.mkdir(mode=DEFAULT_DIR_MODE, parents=True, exist_ok=True)
            shutil.copyfile(source, target)
            os.chmod(target, mode)
            return GenerationAction(kind="copy", destination=target, source=source, mode=mode)

        content = self.substitutor.substitute_content(source.read_bytes())

        if self.dry_run:
            preview = truncate(content.decode('utf-8', errors='replace'))
            logger.info(f"[DRY RUN] Would create file: {target}")
            logger.info(f"[DRY RUN] Content preview (first {PREVIEW_CHARS} chars): {preview}")
            return GenerationAction(kind="write", destination=target, source=source, mode=mode, preview=preview)

        logger.debug(f"Writing file: {target}")
        target.parent.mkdir(mode=DEFAULT_DIR_MODE, parents=True, exist_ok=True)
        target.write_bytes(content)
        os.chmod(target, mode)
        return GenerationAction(kind="write", destination=target, source=source, mode=mode)
