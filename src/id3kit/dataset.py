"""In-memory labeled dataset, partitioning, and the loading/splitting glue around it."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path
from typing import overload

import numpy as np
import polars as pl
from loguru import logger

from id3kit.exceptions import DatasetLoadError, InvalidInputError, MalformedRecordError

# ---------------------------------------------------------------------------
# Public type aliases
# ---------------------------------------------------------------------------

type Record = tuple[str, ...]

LABEL_INDEX: int = 0  # Field 0 of every record holds the class label.
DEFAULT_TRAIN_FRACTION: float = 0.8


# ---------------------------------------------------------------------------
# Public interface -- Dataset
# ---------------------------------------------------------------------------


class Dataset(Sequence[Record]):
    """An immutable, ordered collection of records sharing one field count.

    Field 0 of every record is the class label; fields `1..width-1` are
    categorical attribute values compared for equality. Datasets are never
    mutated: partitioning and splitting return new `Dataset` objects that
    share the underlying record tuples.

    Attributes:
        width (int): Number of fields in every record, label included.
        column_names (tuple[str, ...] | None): Optional header names, one per
            field, used when rendering predicates and rules.

    Examples:
        >>> ds = Dataset([("1", "A", "X"), ("0", "B", "X")], column_names=("y", "a", "b"))
        >>> len(ds), ds.width
        (2, 3)
        >>> ds.labels
        ('1', '0')
        >>> sorted(ds.partition(1))
        ['A', 'B']
    """

    __slots__ = ("_column_names", "_records", "_width")

    def __init__(
        self,
        records: Iterable[Sequence[str]] = (),
        *,
        column_names: Sequence[str] | None = None,
    ) -> None:
        """Validate and store the records.

        Args:
            records (Iterable[Sequence[str]]): Rows whose field 0 is the label.
            column_names (Sequence[str] | None): Optional header, one name per field.

        Raises:
            MalformedRecordError: If a record has no fields, or if record
                widths (or the header width) disagree.
        """
        names = tuple(str(name) for name in column_names) if column_names is not None else None
        rows = tuple(tuple(str(value) for value in record) for record in records)
        expected_width = len(names) if names is not None else (len(rows[0]) if rows else 0)

        for row in rows:
            if not row:
                raise MalformedRecordError(row)
            if len(row) != expected_width:
                raise MalformedRecordError(row, expected_width=expected_width)

        self._records: tuple[Record, ...] = rows
        self._width: int = expected_width
        self._column_names: tuple[str, ...] | None = names

    @classmethod
    def _from_validated(
        cls,
        records: tuple[Record, ...],
        *,
        width: int,
        column_names: tuple[str, ...] | None,
    ) -> Dataset:
        """Build a dataset from records already known to share `width`."""
        dataset = cls.__new__(cls)
        dataset._records = records
        dataset._width = width
        dataset._column_names = column_names
        return dataset

    # -- Sequence protocol ---------------------------------------------------

    def __len__(self) -> int:
        return len(self._records)

    @overload
    def __getitem__(self, index: int) -> Record: ...

    @overload
    def __getitem__(self, index: slice) -> Dataset: ...

    def __getitem__(self, index: int | slice) -> Record | Dataset:
        if isinstance(index, slice):
            return self._derive(self._records[index])
        return self._records[index]

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dataset):
            return NotImplemented
        return self._records == other._records and self._width == other._width

    def __hash__(self) -> int:
        return hash((self._records, self._width))

    def __repr__(self) -> str:
        return f"Dataset(records={len(self._records)}, width={self._width})"

    # -- Properties ----------------------------------------------------------

    @property
    def width(self) -> int:
        """Number of fields per record, label included."""
        return self._width

    @property
    def column_names(self) -> tuple[str, ...] | None:
        """Header names, one per field, or `None` when the dataset has no header."""
        return self._column_names

    @property
    def labels(self) -> tuple[str, ...]:
        """Class label of every record, in record order."""
        return tuple(record[LABEL_INDEX] for record in self._records)

    @property
    def attribute_indices(self) -> range:
        """Field indices that hold attributes (every field except the label)."""
        return range(LABEL_INDEX + 1, self._width)

    # -- Label statistics ----------------------------------------------------

    def class_counts(self) -> Counter[str]:
        """Count the records carrying each label.

        Returns:
            Counter[str]: Label counts, keyed in order of first appearance.
        """
        return Counter(self.labels)

    def majority_label(self) -> str:
        """Return the most frequent label.

        Ties go to the label that appears first in record order, so the
        result is deterministic for a given dataset.

        Returns:
            str: The majority label.

        Raises:
            InvalidInputError: If the dataset is empty.
        """
        self.require_non_empty("majority_label")
        # most_common keeps first-encountered order among equal counts.
        return self.class_counts().most_common(1)[0][0]

    def is_pure(self) -> bool:
        """Return `True` when every record shares one label (or the dataset is empty)."""
        return len(set(self.labels)) <= 1

    # -- Attribute access and partitioning -----------------------------------

    def attribute_name(self, attribute_index: int) -> str:
        """Return the header name of a field, or a positional fallback name.

        Args:
            attribute_index (int): Field index to name.

        Returns:
            str: The header name, or `"attr_<index>"` when there is no header.
        """
        if self._column_names is not None and 0 <= attribute_index < len(self._column_names):
            return self._column_names[attribute_index]
        return f"attr_{attribute_index}"

    def values(self, attribute_index: int) -> tuple[str, ...]:
        """Return the value of one attribute for every record, in record order.

        Args:
            attribute_index (int): Attribute field index (`1..width-1`).

        Returns:
            tuple[str, ...]: One value per record.
        """
        self.check_attribute_index(attribute_index)
        return tuple(record[attribute_index] for record in self._records)

    def partition(self, attribute_index: int) -> dict[str, Dataset]:
        """Split the dataset into one group per distinct value of an attribute.

        Groups are keyed in order of the value's first appearance and keep
        the original record order. Every record keeps all of its fields.

        Args:
            attribute_index (int): Attribute field index (`1..width-1`).

        Returns:
            dict[str, Dataset]: Mapping of attribute value to the records
                holding that value. Concatenating the groups yields the
                original records as a multiset.
        """
        groups: dict[str, list[Record]] = {}
        for value, record in zip(self.values(attribute_index), self._records, strict=True):
            groups.setdefault(value, []).append(record)
        return {value: self._derive(tuple(rows)) for value, rows in groups.items()}

    def check_attribute_index(self, attribute_index: int) -> None:
        """Raise if `attribute_index` does not address an attribute field.

        Args:
            attribute_index (int): Index to validate.

        Raises:
            InvalidInputError: If the index points at the label or is negative.
            MalformedRecordError: If the index is beyond the record width.
        """
        if attribute_index <= LABEL_INDEX:
            raise InvalidInputError(
                f"attribute index must be >= {LABEL_INDEX + 1}; index {LABEL_INDEX} holds the label"
            )
        if attribute_index >= self._width:
            sample = self._records[0] if self._records else ()
            raise MalformedRecordError(sample, attribute_index=attribute_index)

    def require_non_empty(self, operation: str) -> None:
        """Raise `InvalidInputError` if the dataset has no records.

        Args:
            operation (str): Name of the caller, used in the error message.
        """
        if not self._records:
            raise InvalidInputError(f"{operation} requires a non-empty dataset")

    # -- Polars bridge -------------------------------------------------------

    @classmethod
    def from_frame(cls, df: pl.DataFrame) -> Dataset:
        """Build a dataset from a Polars DataFrame whose first column is the label.

        Every column is cast to string; nulls become empty strings.

        Args:
            df (pl.DataFrame): Source frame.

        Returns:
            Dataset: One record per row, with the frame's column names as header.
        """
        string_frame = df.select(pl.all().cast(pl.String).fill_null(""))
        return cls(string_frame.rows(), column_names=string_frame.columns)

    def to_frame(self) -> pl.DataFrame:
        """Return the records as an all-string Polars DataFrame.

        Returns:
            pl.DataFrame: One row per record; columns are named by the header,
                or `label, attr_1, ...` when there is none.
        """
        names = self._column_names or tuple(
            "label" if index == LABEL_INDEX else f"attr_{index}" for index in range(self._width)
        )
        schema = dict.fromkeys(names, pl.String)
        return pl.DataFrame(list(self._records), schema=schema, orient="row")

    def _derive(self, records: tuple[Record, ...]) -> Dataset:
        return Dataset._from_validated(records, width=self._width, column_names=self._column_names)


# ---------------------------------------------------------------------------
# Public interface -- Loading and splitting
# ---------------------------------------------------------------------------


def load_dataset(path: Path | str, *, separator: str = ",") -> Dataset:
    """Read a delimited file with a header line into a `Dataset`.

    The header line is kept as column names only; every field is read as a
    string. The first column must hold the class label.

    Args:
        path (Path | str): File to read.
        separator (str): Single-character field delimiter.

    Returns:
        Dataset: One record per data line.

    Raises:
        DatasetLoadError: If the file is missing or cannot be parsed.
        MalformedRecordError: If a data line has a different field count
            than the header line.
    """
    source = Path(path)
    if not source.is_file():
        raise DatasetLoadError(f"Dataset file not found: {source}", path=source)

    _check_field_counts(source, separator)

    try:
        df = pl.read_csv(source, separator=separator, has_header=True, infer_schema=False)
    except (pl.exceptions.PolarsError, OSError) as exc:
        raise DatasetLoadError(f"Could not parse dataset file {source}: {exc}", path=source) from exc

    if df.width == 0:
        raise DatasetLoadError(f"Dataset file has no columns: {source}", path=source)

    dataset = Dataset.from_frame(df)
    logger.info("Dataset loaded", path=str(source), rows=len(dataset), width=dataset.width)
    return dataset


def train_test_split(
    dataset: Dataset,
    *,
    train_fraction: float = DEFAULT_TRAIN_FRACTION,
    shuffle: bool = False,
    seed: int | None = None,
) -> tuple[Dataset, Dataset]:
    """Split a dataset into a training prefix and a test suffix.

    The first `int(train_fraction * len(dataset))` records form the training
    set and the remainder the test set. With `shuffle=True` the records are
    permuted first using a NumPy generator seeded with `seed`.

    Args:
        dataset (Dataset): Records to split.
        train_fraction (float): Share of records used for training, strictly
            between 0 and 1.
        shuffle (bool): Permute the records before splitting.
        seed (int | None): Seed for the permutation; ignored when `shuffle`
            is False.

    Returns:
        tuple[Dataset, Dataset]: `(train, test)`.

    Raises:
        InvalidInputError: If `train_fraction` is not strictly between 0 and 1.
    """
    if not 0.0 < train_fraction < 1.0:
        raise InvalidInputError(f"train_fraction must be between 0 and 1 (exclusive), got {train_fraction}")

    records = tuple(dataset)
    if shuffle:
        order = np.random.default_rng(seed).permutation(len(records))
        records = tuple(records[int(position)] for position in order)

    split_index = int(train_fraction * len(records))
    train = Dataset._from_validated(records[:split_index], width=dataset.width, column_names=dataset.column_names)
    test = Dataset._from_validated(records[split_index:], width=dataset.width, column_names=dataset.column_names)
    logger.debug("Dataset split", train_rows=len(train), test_rows=len(test), shuffled=shuffle)
    return train, test


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _check_field_counts(source: Path, separator: str) -> None:
    """Raise if any non-blank line has a different field count than the header.

    Polars pads short lines with nulls, which would otherwise load as empty
    category values. Quoted fields may contain the separator.

    Args:
        source (Path): File to check.
        separator (str): Single-character field delimiter.

    Raises:
        DatasetLoadError: If the file cannot be read as UTF-8 text.
        MalformedRecordError: On the first line whose field count differs.
    """
    try:
        text = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DatasetLoadError(f"Could not read dataset file {source}: {exc}", path=source) from exc

    lines = pl.Series("line", text.splitlines(), dtype=pl.String)
    lines = lines.filter(lines != "")
    if lines.is_empty():
        return

    field_counts = lines.str.replace_all(r'"[^"]*"', "").str.count_matches(separator, literal=True) + 1
    expected_width = int(field_counts[0])
    mismatched = (field_counts != expected_width).arg_true()
    if not mismatched.is_empty():
        line = lines[int(mismatched[0])]
        raise MalformedRecordError(tuple(line.split(separator)), expected_width=expected_width)
