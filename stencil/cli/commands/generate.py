"""Generate command implementation."""

import dataclasses
import logging
import sys
from argparse import Namespace
from pathlib import Path
from typing import Dict, Optional

from stencil.config import StencilConfig, default_config, find_config_file, save_config
from stencil.exceptions import ConfigValidationError, StencilError, TemplateNotFoundError
from stencil.generator import ProjectGenerator
from stencil.interactive import Prompter, run_interactive
from stencil.loader import ConfigLoader


logger = logging.getLogger(__name__)


GETTING_STARTED = """\
GETTING STARTED:

  Option 1: Use a config file (recommended)
    Create a stencil.json file in the current directory:
      {
        "templateDir": "./path/to/your/template",
        "outputDir": "./output",
        "variables": {
          "project_name": "myproject"
        }
      }
    then run: stencil

  Option 2: Use command-line flags
    stencil -t ./path/to/template -o ./output

  Option 3: Try the example template
    stencil -t ./examples/template-python-basic -o ./myproject -i

  For more information, run: stencil --help
"""


def parse_vars(text: Optional[str]) -> Dict[str, str]:
    """
    Parse a 'key1=value1,key2=value2' list.

    Keys and values are whitespace-trimmed; entries without '=' are skipped.
    """
    variables: Dict[str, str] = {}
    if not text:
        return variables

    for item in text.split(','):
        if '=' not in item:
            if item.strip():
                logger.warning(f"Ignoring variable without '=': {item.strip()}")
            continue
        key, value = item.split('=', 1)
        key = key.strip()
        if not key:
            logger.warning(f"Ignoring variable with empty name: {item.strip()}")
            continue
        variables[key] = value.strip()

    return variables


def build_config(args: Namespace, workspace: Optional[Path] = None) -> StencilConfig:
    """
    Build the effective configuration.

    Precedence: defaults < config file (explicit or auto-detected) < flags.
    """
    config_path = Path(args.config) if args.config else find_config_file(workspace)

    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        config = ConfigLoader().load(config_path)
        logger.info(f"Using config file: {config_path}")
    else:
        config = default_config()

    if args.template:
        config.template_dir = args.template
    if args.output:
        config.output_dir = args.output
    if args.interactive:
        config.interactive = True
    if args.dry_run:
        config.dry_run = True
    if args.yes:
        config.skip_confirm = True

    config.variables.update(parse_vars(args.vars))

    disabled = {}
    if args.no_braces:
        disabled['braces'] = False
    if args.no_angle:
        disabled['angle_brackets'] = False
    if args.no_underscores:
        disabled['underscores'] = False
    if args.no_percent:
        disabled['percent'] = False
    if disabled:
        config.formats = dataclasses.replace(config.formats, **disabled)

    return config


def setup_logging(args: Namespace) -> None:
    """Configure root logging from the CLI flags."""
    log_level = getattr(logging, args.log_level.upper())
    if args.debug:
        log_level = logging.DEBUG
    elif args.quiet:
        log_level = logging.ERROR
    elif args.verbose:
        log_level = logging.DEBUG

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def generate_project(args: Namespace) -> int:
    """
    Load configuration and run generation (interactive or not).

    Returns:
        0 on success or user cancellation, 1 on any error
    """
    setup_logging(args)

    try:
        config = build_config(args)

        if args.save_config:
            path = save_config(args.save_config, config)
            print(f"Configuration written to {path}")
            return 0

        generator = ProjectGenerator(config)

        if config.interactive:
            actions = run_interactive(generator, Prompter())
            if actions is None:
                return 0
        else:
            actions = generator.generate()

        logger.debug(f"Completed {len(actions)} actions")
        print("\n✓ Project generated successfully!")
        if config.dry_run:
            print("  (This was a dry run - no files were actually created)")
        return 0

    except ConfigValidationError as e:
        for error in e.errors:
            location = f" at '{error.path}'" if error.path else ""
            logger.error(f"Config validation error{location}: {error.message}")
        return e.exit_code
    except TemplateNotFoundError as e:
        logger.error(str(e))
        print(GETTING_STARTED, file=sys.stderr)
        return e.exit_code
    except StencilError as e:
        logger.error(str(e))
        return e.exit_code
    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return 1
