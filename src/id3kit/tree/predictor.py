"""Tree traversal: prediction, decision paths, and rule extraction."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from id3kit.exceptions import MalformedRecordError
from id3kit.tree.models import DecisionRule, InternalNode, LeafNode, Predicate, TreeNode

# ---------------------------------------------------------------------------
# Public interface -- Prediction
# ---------------------------------------------------------------------------


def predict(node: TreeNode, record: Sequence[str]) -> str:
    """Classify one record by walking the tree with attribute-equality tests.

    An attribute value with no matching child (one never seen in the
    training records that reached that node) yields the node's majority
    label instead of an error.

    Args:
        node (TreeNode): Root of a fitted tree.
        record (Sequence[str]): Record to classify. Field 0 (the label) is
            ignored and may hold anything. Attribute values are compared
            as strings.

    Returns:
        str: The predicted label.

    Raises:
        MalformedRecordError: If the record is too short for an attribute
            tested along its path.
    """
    current = node
    while isinstance(current, InternalNode):
        child = current.children.get(_read_attribute(record, current.attribute_index))
        if child is None:
            return current.majority_label
        current = child
    return current.label


def predict_all(node: TreeNode, records: Iterable[Sequence[str]]) -> list[str]:
    """Classify every record in order.

    Args:
        node (TreeNode): Root of a fitted tree.
        records (Iterable[Sequence[str]]): Records to classify, e.g. a `Dataset`.

    Returns:
        list[str]: One predicted label per record.
    """
    return [predict(node, record) for record in records]


# ---------------------------------------------------------------------------
# Public interface -- Explanation
# ---------------------------------------------------------------------------


def decision_path(
    node: TreeNode,
    record: Sequence[str],
    *,
    column_names: Sequence[str] | None = None,
) -> list[Predicate]:
    """Return the equality tests a record satisfies on its way to a prediction.

    The path ends at a leaf, or at the internal node whose majority label was
    used because the record's value had no child.

    Args:
        node (TreeNode): Root of a fitted tree.
        record (Sequence[str]): Record to trace.
        column_names (Sequence[str] | None): Optional header used to name the
            attributes in the returned predicates.

    Returns:
        list[Predicate]: Tests followed, root first.

    Raises:
        MalformedRecordError: If the record is too short for an attribute
            tested along its path.
    """
    path: list[Predicate] = []
    current = node
    while isinstance(current, InternalNode):
        value = _read_attribute(record, current.attribute_index)
        child = current.children.get(value)
        if child is None:
            break
        path.append(_make_predicate(current.attribute_index, value, column_names))
        current = child
    return path


def extract_rules(node: TreeNode, *, column_names: Sequence[str] | None = None) -> list[DecisionRule]:
    """Flatten a tree into one rule per leaf.

    Rules are emitted depth-first in child insertion order, which matches the
    order values were first seen during training.

    Args:
        node (TreeNode): Root of a fitted tree.
        column_names (Sequence[str] | None): Optional header used to name the
            attributes in the rule predicates.

    Returns:
        list[DecisionRule]: One rule per leaf; a single-leaf tree yields one
            rule with no predicates.
    """
    rules: list[DecisionRule] = []
    _walk_tree(node, path_predicates=[], column_names=column_names, rules=rules)
    return rules


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _read_attribute(record: Sequence[str], attribute_index: int) -> str:
    if attribute_index >= len(record):
        raise MalformedRecordError(record, attribute_index=attribute_index)
    return str(record[attribute_index])


def _make_predicate(attribute_index: int, value: str, column_names: Sequence[str] | None) -> Predicate:
    name = column_names[attribute_index] if column_names is not None and attribute_index < len(column_names) else None
    return Predicate(attribute_index=attribute_index, attribute_name=name, value=value)


def _walk_tree(
    node: TreeNode,
    *,
    path_predicates: list[Predicate],
    column_names: Sequence[str] | None,
    rules: list[DecisionRule],
) -> None:
    """Recursively walk a node and append one rule per leaf to `rules`.

    Args:
        node (TreeNode): Current node.
        path_predicates (list[Predicate]): Predicates from the root to `node`.
        column_names (Sequence[str] | None): Optional attribute names.
        rules (list[DecisionRule]): Accumulator; leaf rules are appended in place.
    """
    if isinstance(node, LeafNode):
        rules.append(DecisionRule(predicates=path_predicates, prediction=node.label, samples=node.samples))
        return

    for value, child in node.children.items():
        predicate = _make_predicate(node.attribute_index, value, column_names)
        _walk_tree(child, path_predicates=[*path_predicates, predicate], column_names=column_names, rules=rules)
