"""Tests for tree traversal: predict, predict_all, decision_path, and extract_rules."""

from __future__ import annotations

import pytest
from pytest_check import check

from id3kit.dataset import Dataset
from id3kit.exceptions import MalformedRecordError
from id3kit.tree.builder import build_tree
from id3kit.tree.models import DecisionRule, InternalNode, LeafNode, Predicate
from id3kit.tree.predictor import decision_path, extract_rules, predict, predict_all


class TestPredict:
    """Tests for `predict`: equality-only traversal with a majority fallback."""

    def test_leaf_returns_its_label(self) -> None:
        """A single-leaf tree should predict its label for any record."""
        # Arrange
        root = LeafNode(label="0", samples=5)

        # Act / Assert
        assert predict(root, ("?", "anything")) == "0"

    @pytest.mark.parametrize(("record", "expected"), [(("?", "A", "X"), "1"), (("?", "B", "Y"), "0")])
    def test_follows_child_matching_attribute_value(self, record: tuple[str, ...], expected: str) -> None:
        """The child keyed by the record's attribute value should decide the label.

        Args:
            record (tuple[str, ...]): Record to classify.
            expected (str): Label of the matching leaf.
        """
        # Arrange
        root = build_tree(_make_reference_dataset())

        # Act / Assert
        assert predict(root, record) == expected

    def test_non_string_values_are_compared_as_strings(self) -> None:
        """Integer fields should match the string keys the tree was built with."""
        # Arrange
        root = build_tree(Dataset([(1, 1), (0, 2)]))

        # Act / Assert
        assert predict(root, (9, 2)) == "0"

    def test_unseen_value_falls_back_to_node_majority_label(self) -> None:
        """A value absent from training should yield the internal node's majority label."""
        # Arrange
        root = InternalNode(
            attribute_index=1,
            children={"A": LeafNode(label="1", samples=1), "B": LeafNode(label="0", samples=3)},
            majority_label="0",
            samples=4,
        )

        # Act
        label = predict(root, ("?", "never-seen"))

        # Assert
        assert label == "0"

    def test_unseen_value_in_subtree_uses_that_subtree_majority(self) -> None:
        """The fallback should come from the deepest node reached, not the root."""
        # Arrange
        subtree = InternalNode(
            attribute_index=2,
            children={"X": LeafNode(label="0", samples=1), "Y": LeafNode(label="1", samples=2)},
            majority_label="1",
            samples=3,
        )
        root = InternalNode(
            attribute_index=1,
            children={"A": subtree, "B": LeafNode(label="0", samples=5)},
            majority_label="0",
            samples=8,
        )

        # Act
        label = predict(root, ("?", "A", "Z"))

        # Assert
        assert label == "1"

    def test_built_tree_tolerates_unseen_value(self) -> None:
        """A tree from `build_tree` should classify a record with an unseen value without raising."""
        # Arrange
        root = build_tree(_make_reference_dataset())

        # Act
        label = predict(root, ("?", "C", "X"))

        # Assert -- training labels tie 2:2, so the first-seen label "1" is the majority
        assert label == "1"

    def test_label_field_is_ignored(self) -> None:
        """Field 0 of the record should have no influence on the prediction."""
        # Arrange
        root = build_tree(_make_reference_dataset())

        # Act / Assert
        assert predict(root, ("0", "A", "X")) == predict(root, ("1", "A", "X"))

    def test_short_record_raises_malformed_record_error(self) -> None:
        """A record missing the tested attribute should raise `MalformedRecordError`."""
        # Arrange
        root = build_tree(_make_reference_dataset())

        # Act / Assert
        with pytest.raises(MalformedRecordError) as exc_info:
            predict(root, ("?",))

        with check:
            assert exc_info.value.attribute_index == 1
        with check:
            assert exc_info.value.record == ("?",)


class TestPredictAll:
    """Tests for `predict_all`: batch prediction over a dataset."""

    def test_predicts_every_record_in_order(self) -> None:
        """One prediction per record, in input order."""
        # Arrange
        training = _make_reference_dataset()
        root = build_tree(training)
        unseen = Dataset([("?", "B", "X"), ("?", "A", "Y"), ("?", "Q", "Y")])

        # Act
        predictions = predict_all(root, unseen)

        # Assert
        assert predictions == ["0", "1", "1"]

    def test_training_data_is_classified_perfectly_when_separable(self) -> None:
        """A consistent training set should be reproduced exactly by its own tree."""
        # Arrange
        training = _make_reference_dataset()
        root = build_tree(training)

        # Act
        predictions = predict_all(root, training)

        # Assert
        assert predictions == list(training.labels)

    def test_empty_input_yields_empty_list(self) -> None:
        """No records, no predictions."""
        # Act / Assert
        assert predict_all(LeafNode(label="1", samples=1), []) == []


class TestDecisionPath:
    """Tests for `decision_path`: the equality tests a record follows."""

    def test_path_lists_tests_root_first(self) -> None:
        """The path should contain one predicate per internal node visited."""
        # Arrange
        dataset = Dataset(
            [("1", "A", "X"), ("0", "A", "Y"), ("0", "B", "X"), ("0", "B", "Y")],
            column_names=("label", "shape", "color"),
        )
        root = build_tree(dataset)

        # Act
        path = decision_path(root, ("?", "A", "X"), column_names=dataset.column_names)

        # Assert
        assert [str(predicate) for predicate in path] == ["shape == A", "color == X"]

    def test_path_stops_at_unseen_value(self) -> None:
        """The path should end where the majority fallback is used."""
        # Arrange
        root = build_tree(_make_reference_dataset())

        # Act
        path = decision_path(root, ("?", "Z", "X"))

        # Assert
        assert path == []

    def test_every_predicate_holds_for_the_record(self) -> None:
        """Each returned predicate should evaluate to True on the traced record."""
        # Arrange
        root = build_tree(_make_reference_dataset())
        record = ("?", "B", "Y")

        # Act
        path = decision_path(root, record)

        # Assert
        for predicate in path:
            with check:
                assert predicate.eval(record)


class TestExtractRules:
    """Tests for `extract_rules`: one rule per leaf."""

    def test_one_rule_per_leaf(self) -> None:
        """Rule count should equal the tree's leaf count."""
        # Arrange
        root = build_tree(_make_reference_dataset())

        # Act
        rules = extract_rules(root)

        # Assert
        with check:
            assert len(rules) == root.leaf_count()
        with check:
            assert all(isinstance(rule, DecisionRule) for rule in rules)

    def test_rules_carry_predicates_prediction_and_samples(self) -> None:
        """Rules should describe each root-to-leaf path in child insertion order."""
        # Arrange
        dataset = _make_reference_dataset()
        root = build_tree(dataset)

        # Act
        rules = extract_rules(root, column_names=("y", "group", "noise"))

        # Assert
        assert rules == [
            DecisionRule(
                predicates=[Predicate(attribute_index=1, attribute_name="group", value="A")],
                prediction="1",
                samples=2,
            ),
            DecisionRule(
                predicates=[Predicate(attribute_index=1, attribute_name="group", value="B")],
                prediction="0",
                samples=2,
            ),
        ]

    def test_single_leaf_tree_yields_unconditional_rule(self) -> None:
        """A tree with no splits should produce one rule with no predicates."""
        # Act
        rules = extract_rules(LeafNode(label="yes", samples=9))

        # Assert
        assert len(rules) == 1
        with check:
            assert rules[0].predicates == []
        with check:
            assert str(rules[0]) == "ALWAYS yes"

    def test_rules_agree_with_predict(self) -> None:
        """A record matching a rule's predicates should be predicted as the rule says."""
        # Arrange
        root = build_tree(_make_reference_dataset())
        record = ("?", "B", "X")

        # Act
        rules = extract_rules(root)
        matching = [rule for rule in rules if all(p.eval(record) for p in rule.predicates)]

        # Assert
        assert len(matching) == 1
        assert matching[0].prediction == predict(root, record)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_reference_dataset() -> Dataset:
    """Four records where attribute 1 separates the labels and attribute 2 does not."""
    return Dataset([
        ("1", "A", "X"),
        ("1", "A", "Y"),
        ("0", "B", "X"),
        ("0", "B", "Y"),
    ])
