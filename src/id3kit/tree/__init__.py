"""Decision tree sub-package: entropy, node models, building, and prediction."""

from __future__ import annotations

from id3kit.tree.builder import build_tree, select_best_attribute
from id3kit.tree.entropy import entropy, information_gain
from id3kit.tree.models import DecisionRule, InternalNode, LeafNode, Predicate, TreeNode
from id3kit.tree.predictor import decision_path, extract_rules, predict, predict_all

__all__ = [
    "DecisionRule",
    "InternalNode",
    "LeafNode",
    "Predicate",
    "TreeNode",
    "build_tree",
    "decision_path",
    "entropy",
    "extract_rules",
    "information_gain",
    "predict",
    "predict_all",
    "select_best_attribute",
]
