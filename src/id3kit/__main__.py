"""Command-line entry point: `python -m id3kit --data_path data.csv`."""

from __future__ import annotations

import contextlib
import sys

from id3kit.config import ID3Settings
from id3kit.exceptions import ID3Error
from id3kit.logging import enable_logging
from id3kit.pipeline import run_pipeline


def main() -> int:
    """Fit a tree on the configured file and print accuracy and precision.

    Returns:
        int: Process exit code; 1 when the pipeline fails with an id3kit error.
    """
    settings = ID3Settings(_cli_parse_args=True)  # type: ignore[call-arg]
    log_context = enable_logging(level=settings.log_level) if settings.log_level else contextlib.nullcontext()
    with log_context:
        try:
            result = run_pipeline(settings)
        except ID3Error as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1

    print(f"Accuracy: {result.evaluation.accuracy}")
    print(f"Precision: {result.evaluation.precision}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
