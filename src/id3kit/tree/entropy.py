"""Label entropy and information gain over categorical attributes."""

from __future__ import annotations

import numpy as np

from id3kit.dataset import Dataset


def entropy(dataset: Dataset) -> float:
    """Compute the Shannon entropy of the dataset's labels, in bits.

    Args:
        dataset (Dataset): Non-empty records; field 0 is the label.

    Returns:
        float: `-sum(p * log2(p))` over the empirical label probabilities.
            0.0 when every record shares one label, and `log2(k)` when `k`
            labels are uniformly distributed.

    Raises:
        InvalidInputError: If the dataset is empty.

    Examples:
        >>> entropy(Dataset([("1",), ("1",), ("0",), ("0",)]))
        1.0
    """
    dataset.require_non_empty("entropy")
    counts = np.fromiter(dataset.class_counts().values(), dtype=np.float64)
    probabilities = counts / counts.sum()
    value = float(-np.sum(probabilities * np.log2(probabilities)))
    # A single label yields -0.0.
    return value + 0.0


def information_gain(dataset: Dataset, attribute_index: int) -> float:
    """Compute the entropy reduction achieved by partitioning on one attribute.

    The dataset is split into one group per distinct value of the attribute
    and the group entropies are weighted by group size.

    Args:
        dataset (Dataset): Non-empty records to partition.
        attribute_index (int): Attribute field index (`1..width-1`).

    Returns:
        float: `entropy(dataset) - sum(|D_v| / |D| * entropy(D_v))`, never
            negative.

    Raises:
        InvalidInputError: If the dataset is empty or `attribute_index`
            addresses the label.
        MalformedRecordError: If `attribute_index` is beyond the record width.
    """
    dataset.require_non_empty("information_gain")
    total = len(dataset)
    weighted_child_entropy = sum(
        len(group) / total * entropy(group) for group in dataset.partition(attribute_index).values()
    )
    # Rounding can push an exactly-zero gain slightly below zero.
    return max(entropy(dataset) - weighted_child_entropy, 0.0)
