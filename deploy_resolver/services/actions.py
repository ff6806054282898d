"""GitHub Actions workflow outputs and failure reporting."""

import os
import sys
import uuid
from pathlib import Path
from typing import Mapping, TextIO

from deploy_resolver.utils.logging import get_logger

logger = get_logger("actions")


def set_outputs(
    outputs: Mapping[str, str],
    output_file: str | os.PathLike[str] | None = None,
) -> None:
    """Append step outputs to the ``GITHUB_OUTPUT`` file.

    Without an output file the values are only logged.
    """
    target = output_file if output_file is not None else os.environ.get("GITHUB_OUTPUT")

    for key, value in outputs.items():
        logger.info("actions.output", name=key, value=value)

    if not target:
        logger.warning("actions.no_output_file", names=list(outputs))
        return

    with open(Path(target), "a", encoding="utf-8") as f:
        for key, value in outputs.items():
            f.write(_format_output(key, value))


def _format_output(key: str, value: str) -> str:
    if "\n" not in value:
        return f"{key}={value}\n"
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    return f"{key}<<{delimiter}\n{value}\n{delimiter}\n"


def set_failed(message: str, stream: TextIO | None = None) -> None:
    """Report a failure through the ``::error::`` workflow command."""
    out = stream or sys.stdout
    escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
    out.write(f"::error::{escaped}\n")
    out.flush()
