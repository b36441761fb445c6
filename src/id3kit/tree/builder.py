"""Recursive ID3 tree induction with n-ary equality splits."""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from id3kit.dataset import Dataset
from id3kit.tree.entropy import information_gain
from id3kit.tree.models import InternalNode, LeafNode, TreeNode

# ---------------------------------------------------------------------------
# Public interface -- Tree building
# ---------------------------------------------------------------------------


def build_tree(dataset: Dataset) -> TreeNode:
    """Build a categorical decision tree by recursive information-gain splitting.

    At every node the builder stops with a leaf when the records are pure,
    when no attribute remains that has not been split on along the current
    path, or when no remaining attribute has positive information gain.
    Otherwise it splits on the attribute with the greatest gain (the lowest
    index wins a tie), creating one child per observed value.

    Leaves created without a pure partition predict the majority label; ties
    go to the label encountered first in record order.

    Args:
        dataset (Dataset): Non-empty training records; field 0 is the label.

    Returns:
        TreeNode: The root of the fitted tree.

    Raises:
        InvalidInputError: If the dataset is empty.

    Examples:
        >>> ds = Dataset([("1", "A", "X"), ("1", "A", "Y"), ("0", "B", "X"), ("0", "B", "Y")])
        >>> root = build_tree(ds)
        >>> root.attribute_index, {value: child.label for value, child in root.children.items()}
        (1, {'A': '1', 'B': '0'})
    """
    dataset.require_non_empty("build_tree")
    root = _build_node(dataset, used_attributes=frozenset(), depth=0)
    logger.debug("Tree built", samples=len(dataset), depth=root.depth(), leaves=root.leaf_count())
    return root


def select_best_attribute(dataset: Dataset, candidates: Iterable[int]) -> tuple[int, float] | None:
    """Pick the candidate attribute with the strictly greatest information gain.

    Candidates are scored in ascending index order, so the lowest index wins
    a tie.

    Args:
        dataset (Dataset): Non-empty records to score against.
        candidates (Iterable[int]): Attribute indices eligible for the split.

    Returns:
        tuple[int, float] | None: `(attribute_index, gain)` of the winner, or
            `None` when no candidate has a gain above zero.
    """
    best: tuple[int, float] | None = None
    for attribute_index in sorted(candidates):
        gain = information_gain(dataset, attribute_index)
        logger.trace("Scored attribute", attribute_index=attribute_index, gain=gain)
        if gain > 0.0 and (best is None or gain > best[1]):
            best = (attribute_index, gain)
    return best


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _build_node(dataset: Dataset, *, used_attributes: frozenset[int], depth: int) -> TreeNode:
    """Build the subtree for one non-empty partition.

    Args:
        dataset (Dataset): Records that reached this node.
        used_attributes (frozenset[int]): Attributes already split on along
            the path from the root.
        depth (int): Distance from the root, for logging.

    Returns:
        TreeNode: A leaf, or an internal node with one child per value.
    """
    samples = len(dataset)
    if dataset.is_pure():
        return LeafNode(label=dataset[0][0], samples=samples)

    majority_label = dataset.majority_label()
    candidates = [index for index in dataset.attribute_indices if index not in used_attributes]
    if not candidates:
        logger.debug("No attributes left; majority leaf", depth=depth, samples=samples, label=majority_label)
        return LeafNode(label=majority_label, samples=samples)

    best = select_best_attribute(dataset, candidates)
    if best is None:
        logger.debug("No attribute improves purity; majority leaf", depth=depth, samples=samples, label=majority_label)
        return LeafNode(label=majority_label, samples=samples)

    attribute_index, gain = best
    logger.debug(
        "Splitting node",
        depth=depth,
        samples=samples,
        attribute_index=attribute_index,
        attribute=dataset.attribute_name(attribute_index),
        gain=round(gain, 6),
    )
    child_used = used_attributes | {attribute_index}
    children = {
        value: _build_node(group, used_attributes=child_used, depth=depth + 1)
        for value, group in dataset.partition(attribute_index).items()
    }
    return InternalNode(
        attribute_index=attribute_index,
        children=children,
        majority_label=majority_label,
        samples=samples,
    )
