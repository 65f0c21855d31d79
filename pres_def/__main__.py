"""Command line for projecting and reconciling presentation definitions.

    python -m pres_def project model.json
    python -m pres_def reconcile definition.json --previous model.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from marshmallow import ValidationError

from .config import Config, ConfigError
from .error import ProfileCodecError
from .models.field_model import FieldModel
from .synchronizer import Synchronizer

LOGGER = logging.getLogger(__name__)


def _read(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text()


def _load_model(source: Optional[str], config: Config) -> FieldModel:
    if source is None:
        return FieldModel.initial(config)
    return FieldModel.deserialize(json.loads(_read(source)))


def project_command(args: argparse.Namespace, config: Config) -> int:
    """Print the definition for a model snapshot."""
    model = _load_model(args.model, config)
    if args.profile:
        model = model.with_profile(args.profile)
    sys.stdout.write(Synchronizer(indent=config.indent).project_text(model))
    sys.stdout.write("\n")
    return 0


def reconcile_command(args: argparse.Namespace, config: Config) -> int:
    """Print the model snapshot reconciled from definition text."""
    previous = _load_model(args.previous, config)
    result = Synchronizer(indent=config.indent).reconcile(
        _read(args.definition), previous, args.profile
    )
    if not result.ok:
        sys.stderr.write(f"{result.reason}\n")
        return 1
    sys.stdout.write(json.dumps(result.model.serialize(), indent=config.indent))
    sys.stdout.write("\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pres_def",
        description="Convert between field models and presentation definitions.",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    parser.add_argument("--indent", type=int, help="JSON indentation")
    subparsers = parser.add_subparsers(dest="command", required=True)

    project = subparsers.add_parser("project", help="Model snapshot to definition")
    project.add_argument("model", nargs="?", help="Model snapshot file, or - for stdin")
    project.add_argument("--profile", help="Override the credential profile")
    project.set_defaults(handler=project_command)

    reconcile = subparsers.add_parser(
        "reconcile", help="Edited definition back to a model snapshot"
    )
    reconcile.add_argument("definition", help="Definition file, or - for stdin")
    reconcile.add_argument("--previous", help="Previous model snapshot file")
    reconcile.add_argument("--profile", help="Credential profile of the definition")
    reconcile.set_defaults(handler=reconcile_command)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command line."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())

    try:
        config = Config.from_settings({"indent": args.indent})
        return args.handler(args, config)
    except (ConfigError, ProfileCodecError, ValidationError) as err:
        sys.stderr.write(f"{err}\n")
        return 2
    except (OSError, json.JSONDecodeError) as err:
        LOGGER.debug("Failed to read input", exc_info=True)
        sys.stderr.write(f"Unable to read input: {err}\n")
        return 2


if __name__ == "__main__":
    sys.exit(main())
