"""Custom exceptions for id3kit.

This module defines the exceptions raised by the tree-induction core and the
data loading glue around it:

- ID3Error: Base class for every id3kit error. Catch this to handle any
  failure raised by the package.
- InvalidInputError: Raised when an operation receives input it cannot work
  with, such as an empty dataset (subclass of ValueError).
- MalformedRecordError: Raised when a record does not have the field count
  the operation requires (subclass of ValueError).
- DatasetLoadError: Raised when a delimited file cannot be read into a
  dataset.

An attribute value that was never seen during training is not an error; the
predictor falls back to the majority label recorded at the node instead.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class ID3Error(Exception):
    """Base exception for all id3kit errors."""


class InvalidInputError(ID3Error, ValueError):
    """Raised when an operation receives input it cannot work with.

    Attributes:
        reason (str): Short description of what was wrong with the input.

    Examples:
        >>> err = InvalidInputError("dataset is empty")
        >>> err.reason
        'dataset is empty'
    """

    reason: str

    def __init__(self, reason: str) -> None:
        """Initialize InvalidInputError.

        Args:
            reason (str): Short description of what was wrong with the input.
        """
        super().__init__(reason)
        self.reason = reason


class MalformedRecordError(ID3Error, ValueError):
    """Raised when a record does not have the field count an operation requires.

    Attributes:
        record (tuple[str, ...]): The offending record.
        expected_width (int | None): Field count shared by the rest of the
            dataset, when the error comes from a width mismatch.
        attribute_index (int | None): The attribute index that could not be
            read from the record, when the error comes from an index lookup.

    Examples:
        >>> err = MalformedRecordError(("1", "A"), attribute_index=3)
        >>> str(err)
        'Record has 2 field(s); attribute index 3 is out of range'
    """

    record: tuple[str, ...]
    expected_width: int | None
    attribute_index: int | None

    def __init__(
        self,
        record: Sequence[str],
        *,
        expected_width: int | None = None,
        attribute_index: int | None = None,
    ) -> None:
        """Initialize MalformedRecordError.

        Args:
            record (Sequence[str]): The offending record.
            expected_width (int | None): Field count the record should have had.
            attribute_index (int | None): Attribute index that was out of range.
        """
        self.record = tuple(record)
        self.expected_width = expected_width
        self.attribute_index = attribute_index
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        width = len(self.record)
        if self.attribute_index is not None:
            return f"Record has {width} field(s); attribute index {self.attribute_index} is out of range"
        if self.expected_width is not None:
            return f"Record has {width} field(s), expected {self.expected_width}"
        return f"Record has {width} field(s); at least one field (the label) is required"

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Detailed string representation including the record and the
                width or index that failed.
        """
        return (
            f"{self.__class__.__name__}("
            f"message={str(self)!r}, record={self.record!r}, "
            f"expected_width={self.expected_width!r}, attribute_index={self.attribute_index!r})"
        )


class DatasetLoadError(ID3Error):
    """Raised when a delimited file cannot be read into a dataset.

    Attributes:
        path (Path): The file that failed to load.
    """

    path: Path

    def __init__(self, message: str, *, path: Path | str) -> None:
        """Initialize DatasetLoadError.

        Args:
            message (str): Description of the load failure.
            path (Path | str): The file that failed to load.
        """
        super().__init__(message)
        self.path = Path(path)

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Detailed string representation including message and path.
        """
        return f"{self.__class__.__name__}(message={str(self)!r}, path={str(self.path)!r})"
