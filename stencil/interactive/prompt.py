"""Interactive prompts for collecting variable values."""

import logging
import sys
from typing import Dict, List, Optional, TextIO

from stencil.exceptions import PromptError
from stencil.generator import GenerationAction, ProjectGenerator


logger = logging.getLogger(__name__)


class Prompter:
    """Line-based terminal prompts.

    Streams are injectable so the prompt loop can be driven from tests.
    """

    def __init__(self, input_stream: Optional[TextIO] = None, output_stream: Optional[TextIO] = None):
        self.input = input_stream or sys.stdin
        self.output = output_stream or sys.stdout

    def prompt_for_values(self, variables: Dict[str, str]) -> Dict[str, str]:
        """
        Ask for a value for every variable, in lexicographic order.

        An empty answer keeps the current value as default.

        Args:
            variables: Variable names mapped to their default values

        Returns:
            Same names mapped to the collected values
        """
        result: Dict[str, str] = {}
        names = sorted(variables)

        self._write("\n=== Interactive Variable Prompt ===\n")
        self._write("Please provide values for the following variables:\n\n")

        for i, name in enumerate(names, start=1):
            default = variables[name]
            prompt = f"[{i}/{len(names)}] {name}"
            if default:
                prompt += f" (default: {default})"
            prompt += ": "

            answer = self._read(prompt)
            result[name] = answer if answer else default

        return result

    def prompt_for_confirmation(self, message: str) -> bool:
        """Ask a yes/no question; anything but 'y' or 'yes' means no."""
        answer = self._read(f"\n{message} [y/N]: ").lower()
        return answer in ('y', 'yes')

    def prompt_for_string(self, message: str, default: str = "") -> str:
        """Ask for a single string, falling back to ``default`` on empty input."""
        prompt = message
        if default:
            prompt += f" (default: {default})"
        answer = self._read(prompt + ": ")
        return answer or default

    def prompt_for_choice(self, message: str, choices: List[str], default_index: int = -1) -> int:
        """
        Ask the user to pick one entry from a numbered list.

        Args:
            message: Question shown above the list
            choices: Options to display
            default_index: Zero-based index chosen on empty input, or -1 for none

        Returns:
            Zero-based index of the chosen entry

        Raises:
            PromptError: Input is not a number or is out of range
        """
        self._write(f"\n{message}\n")
        for i, choice in enumerate(choices):
            marker = "*" if i == default_index else " "
            self._write(f"  {marker} [{i + 1}] {choice}\n")

        prompt = f"\nSelect choice [1-{len(choices)}]"
        if default_index >= 0:
            prompt += f" (default: {default_index + 1})"
        answer = self._read(prompt + ": ")

        if not answer and default_index >= 0:
            return default_index

        try:
            choice = int(answer)
        except ValueError:
            raise PromptError(f"Invalid input: {answer}")

        if choice < 1 or choice > len(choices):
            raise PromptError(f"Choice out of range: {choice}")

        return choice - 1

    def _write(self, text: str) -> None:
        self.output.write(text)
        self.output.flush()

    def _read(self, prompt: str) -> str:
        self._write(prompt)
        line = self.input.readline()
        if not line:
            raise PromptError("Failed to read input: input stream closed")
        return line.strip()


def run_interactive(generator: ProjectGenerator, prompter: Optional[Prompter] = None) -> Optional[List[GenerationAction]]:
    """
    Scan the template, prompt for values, confirm, then generate.

    Values already configured (config file or --vars) are offered as defaults.

    Returns:
        The generation actions, or None if the user cancelled
    """
    prompter = prompter or Prompter()
    out = prompter.output

    out.write("=== Stencil - Interactive Mode ===\n")
    out.write("Scanning template for variables...\n")

    discovered = generator.extract_variables()
    if not discovered:
        out.write("No variables found in template.\n")
        out.write("Generating project...\n")
        return generator.generate()

    out.write(f"Found {len(discovered)} variables in template.\n")

    defaults = {name: generator.config.variables.get(name, "") for name in discovered}
    values = prompter.prompt_for_values(defaults)

    out.write("\n=== Summary ===\n")
    out.write(f"Template: {generator.template_dir}\n")
    out.write(f"Output: {generator.output_dir}\n")
    out.write("\nVariables:\n")
    for name in sorted(values):
        out.write(f"  {name} = {values[name]}\n")

    if not generator.skip_confirm:
        if not prompter.prompt_for_confirmation("Proceed with generation?"):
            out.write("Generation cancelled.\n")
            logger.info("Generation cancelled by user")
            return None

    generator.set_variables(values)

    out.write("\nGenerating project...\n")
    return generator.generate()
