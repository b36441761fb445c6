"""Settings for the train/evaluate pipeline."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

from id3kit.dataset import DEFAULT_TRAIN_FRACTION
from id3kit.evaluation import DEFAULT_POSITIVE_LABEL
from id3kit.logging import LogLevel


class ID3Settings(BaseSettings, env_prefix="ID3KIT_", env_file=".env", env_file_encoding="utf-8", extra="ignore"):
    """Pipeline settings, read from `ID3KIT_*` environment variables, a `.env` file, or CLI arguments.

    Attributes:
        data_path (Path): Delimited file with a header line; column 0 is the label.
        separator (str): Field delimiter.
        train_fraction (float): Share of records used for training.
        shuffle (bool): Permute records before the train/test split.
        seed (int | None): Seed for the permutation.
        positive_label (str): Label treated as the positive class for precision.
        log_level (LogLevel | None): Enable id3kit logging at this level; `None` keeps it off.
    """

    data_path: Path = Field(description="Delimited file with a header line; column 0 is the label.")
    separator: str = Field(default=",", min_length=1, max_length=1, description="Field delimiter.")
    train_fraction: float = Field(
        default=DEFAULT_TRAIN_FRACTION,
        gt=0.0,
        lt=1.0,
        description="Share of records used for training; the rest are used for testing.",
    )
    shuffle: bool = Field(default=False, description="Permute records before the train/test split.")
    seed: int | None = Field(default=None, description="Seed for the permutation when shuffle is enabled.")
    positive_label: str = Field(
        default=DEFAULT_POSITIVE_LABEL,
        description="Label treated as the positive class for precision.",
    )
    log_level: LogLevel | None = Field(
        default=None,
        description="Enable id3kit logging at this level; unset keeps logging off.",
    )
