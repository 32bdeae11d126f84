"""Tests for the interactive prompt flow."""

import io
import shutil
import tempfile
from pathlib import Path

import pytest

from stencil.config import StencilConfig
from stencil.exceptions import PromptError
from stencil.generator import ProjectGenerator
from stencil.interactive import Prompter, run_interactive


def make_prompter(answers: str) -> Prompter:
    return Prompter(input_stream=io.StringIO(answers), output_stream=io.StringIO())


class TestPrompter:
    """Individual prompt primitives."""

    def test_values_prompted_in_sorted_order(self):
        prompter = make_prompter("first\nsecond\n")
        values = prompter.prompt_for_values({"zeta": "", "alpha": ""})

        assert values == {"alpha": "first", "zeta": "second"}
        transcript = prompter.output.getvalue()
        assert transcript.index("[1/2] alpha") < transcript.index("[2/2] zeta")

    def test_empty_answer_keeps_default(self):
        prompter = make_prompter("\n\n")
        values = prompter.prompt_for_values({"version": "1.0", "name": ""})

        assert values == {"version": "1.0", "name": ""}
        assert "version (default: 1.0)" in prompter.output.getvalue()

    def test_answers_are_stripped(self):
        prompter = make_prompter("  World  \n")
        assert prompter.prompt_for_values({"name": "x"}) == {"name": "World"}

    def test_closed_input_raises(self):
        prompter = make_prompter("")
        with pytest.raises(PromptError):
            prompter.prompt_for_values({"name": ""})

    @pytest.mark.parametrize("answer,expected", [
        ("y\n", True),
        ("YES\n", True),
        ("n\n", False),
        ("\n", False),
        ("maybe\n", False),
    ])
    def test_confirmation(self, answer, expected):
        assert make_prompter(answer).prompt_for_confirmation("Proceed?") is expected

    def test_string_prompt(self):
        assert make_prompter("custom\n").prompt_for_string("Name", "default") == "custom"
        assert make_prompter("\n").prompt_for_string("Name", "default") == "default"

    def test_choice_by_number(self):
        prompter = make_prompter("2\n")
        assert prompter.prompt_for_choice("Pick", ["go", "python", "rust"], 0) == 1
        assert "* [1] go" in prompter.output.getvalue()

    def test_choice_default_on_empty(self):
        assert make_prompter("\n").prompt_for_choice("Pick", ["a", "b"], 1) == 1

    @pytest.mark.parametrize("answer", ["abc\n", "0\n", "3\n", "\n"])
    def test_choice_invalid(self, answer):
        with pytest.raises(PromptError):
            make_prompter(answer).prompt_for_choice("Pick", ["a", "b"])


class TestRunInteractive:
    """The full interactive flow against a real template."""

    def setup_method(self):
        self.test_dir = Path(tempfile.mkdtemp())
        self.template = self.test_dir / "template"
        self.template.mkdir()
        self.output = self.test_dir / "output"
        (self.template / "README.md").write_text("Hello {{name}}!")
        (self.template / "__name__.txt").write_text("v%version%")

    def teardown_method(self):
        shutil.rmtree(self.test_dir)

    def make_generator(self, **overrides) -> ProjectGenerator:
        config = StencilConfig(template_dir=str(self.template), output_dir=str(self.output))
        for key, value in overrides.items():
            setattr(config, key, value)
        return ProjectGenerator(config)

    def test_prompts_confirms_and_generates(self):
        prompter = make_prompter("World\n1.0\ny\n")
        actions = run_interactive(self.make_generator(), prompter)

        assert actions is not None
        assert (self.output / "README.md").read_text() == "Hello World!"
        assert (self.output / "World.txt").read_text() == "v1.0"
        transcript = prompter.output.getvalue()
        assert "Found 2 variables" in transcript
        assert "name = World" in transcript

    def test_declined_confirmation_cancels(self):
        prompter = make_prompter("World\n1.0\nn\n")
        assert run_interactive(self.make_generator(), prompter) is None
        assert not self.output.exists()
        assert "Generation cancelled." in prompter.output.getvalue()

    def test_skip_confirm(self):
        prompter = make_prompter("World\n1.0\n")
        run_interactive(self.make_generator(skip_confirm=True), prompter)
        assert (self.output / "World.txt").exists()

    def test_configured_values_become_defaults(self):
        generator = self.make_generator(variables={"version": "2.0"}, skip_confirm=True)
        run_interactive(generator, make_prompter("World\n\n"))
        assert (self.output / "World.txt").read_text() == "v2.0"

    def test_template_without_variables_generates_directly(self):
        shutil.rmtree(self.template)
        self.template.mkdir()
        (self.template / "plain.txt").write_text("no placeholders")

        prompter = make_prompter("")
        run_interactive(self.make_generator(), prompter)

        assert (self.output / "plain.txt").read_text() == "no placeholders"
        assert "No variables found" in prompter.output.getvalue()
