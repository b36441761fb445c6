"""Pydantic node, predicate, and rule models for categorical decision trees."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from id3kit.exceptions import MalformedRecordError

# ---------------------------------------------------------------------------
# Public models -- Tree nodes
# ---------------------------------------------------------------------------


class LeafNode(BaseModel):
    """Terminal node holding a predicted class label.

    Attributes:
        kind (Literal["leaf"]): Discriminator field; always `"leaf"`.
        label (str): Class label predicted for every record reaching this leaf.
        samples (int): Number of training records that reached this leaf.

    Examples:
        >>> leaf = LeafNode(label="1", samples=4)
        >>> leaf.depth(), leaf.leaf_count()
        (0, 1)
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["leaf"] = Field(default="leaf", description='Discriminator field. Always "leaf".')
    label: str = Field(description="Class label predicted for records reaching this leaf.")
    samples: int = Field(ge=1, description="Number of training records that reached this leaf.")

    def depth(self) -> int:
        """Return the depth of the subtree rooted here (0 for a leaf)."""
        return 0

    def leaf_count(self) -> int:
        """Return the number of leaves in the subtree rooted here."""
        return 1


class InternalNode(BaseModel):
    """Split node testing one attribute for equality against each observed value.

    Attributes:
        kind (Literal["internal"]): Discriminator field; always `"internal"`.
        attribute_index (int): Record field tested at this node. Index 0 holds
            the label and is never split on.
        children (dict[str, TreeNode]): One child per attribute value observed
            in the training records that reached this node, in order of first
            appearance.
        majority_label (str): Most frequent label among the training records
            that reached this node; predicted for attribute values that have
            no child.
        samples (int): Number of training records that reached this node.

    Examples:
        >>> node = InternalNode(
        ...     attribute_index=1,
        ...     children={"A": LeafNode(label="1", samples=2), "B": LeafNode(label="0", samples=2)},
        ...     majority_label="1",
        ...     samples=4,
        ... )
        >>> node.depth(), node.leaf_count()
        (1, 2)
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["internal"] = Field(default="internal", description='Discriminator field. Always "internal".')
    attribute_index: int = Field(ge=1, description="Record field tested at this node.")
    children: dict[str, Annotated[LeafNode | InternalNode, Field(discriminator="kind")]] = Field(
        min_length=1,
        description="Child node per attribute value observed in training, in order of first appearance.",
    )
    majority_label: str = Field(
        description="Most frequent training label at this node; the fallback for unseen attribute values.",
    )
    samples: int = Field(ge=1, description="Number of training records that reached this node.")

    def depth(self) -> int:
        """Return the depth of the subtree rooted here."""
        return 1 + max(child.depth() for child in self.children.values())

    def leaf_count(self) -> int:
        """Return the number of leaves in the subtree rooted here."""
        return sum(child.leaf_count() for child in self.children.values())


# Use this alias wherever either node variant is accepted.
type TreeNode = LeafNode | InternalNode


# ---------------------------------------------------------------------------
# Public models -- Predicates and rules
# ---------------------------------------------------------------------------


class Predicate(BaseModel):
    """An equality test on one attribute of a record.

    Attributes:
        attribute_index (int): Record field the test reads.
        attribute_name (str | None): Header name of the field, when known.
        value (str): Value the field must equal for the test to hold.

    Examples:
        >>> p = Predicate(attribute_index=2, attribute_name="outlook", value="sunny")
        >>> str(p)
        'outlook == sunny'
        >>> p.eval(("yes", "hot", "sunny"))
        True
    """

    model_config = ConfigDict(frozen=True)

    attribute_index: int = Field(ge=1, description="Record field the test reads.")
    attribute_name: str | None = Field(default=None, description="Header name of the field, when known.")
    value: str = Field(description="Value the field must equal.")

    def __str__(self) -> str:
        """Return the predicate as `"<name> == <value>"`.

        Returns:
            str: Human-readable form; unnamed attributes render as `attr_<index>`.
        """
        name = self.attribute_name if self.attribute_name is not None else f"attr_{self.attribute_index}"
        return f"{name} == {self.value}"

    def eval(self, record: Sequence[str]) -> bool:
        """Evaluate this predicate against a record.

        Args:
            record (Sequence[str]): The record to test.

        Returns:
            bool: `True` when the record's field equals `value`.

        Raises:
            MalformedRecordError: If the record is too short to hold the field.
        """
        if self.attribute_index >= len(record):
            raise MalformedRecordError(record, attribute_index=self.attribute_index)
        return str(record[self.attribute_index]) == self.value


class DecisionRule(BaseModel):
    """The path from the root to one leaf, expressed as equality predicates.

    Attributes:
        predicates (list[Predicate]): Tests along the path, root first. Empty
            when the tree is a single leaf.
        prediction (str): Label predicted at the leaf.
        samples (int): Number of training records that reached the leaf.

    Examples:
        >>> rule = DecisionRule(
        ...     predicates=[Predicate(attribute_index=1, attribute_name="color", value="red")],
        ...     prediction="1",
        ...     samples=3,
        ... )
        >>> str(rule)
        'IF color == red THEN 1'
    """

    model_config = ConfigDict(frozen=True)

    predicates: list[Predicate] = Field(description="Equality tests along the root-to-leaf path, root first.")
    prediction: str = Field(description="Label predicted at the leaf.")
    samples: int = Field(ge=1, description="Number of training records that reached the leaf.")

    def __str__(self) -> str:
        """Return the rule as `"IF <p1> AND <p2> THEN <label>"`."""
        if not self.predicates:
            return f"ALWAYS {self.prediction}"
        conditions = " AND ".join(str(predicate) for predicate in self.predicates)
        return f"IF {conditions} THEN {self.prediction}"
