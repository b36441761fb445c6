"""id3kit: categorical ID3 decision trees with entropy splitting."""

from loguru import logger

from id3kit.dataset import Dataset, Record, load_dataset, train_test_split
from id3kit.evaluation import EvaluationResult, evaluate
from id3kit.exceptions import DatasetLoadError, ID3Error, InvalidInputError, MalformedRecordError
from id3kit.logging import PACKAGE_NAME, enable_logging
from id3kit.tree import (
    DecisionRule,
    InternalNode,
    LeafNode,
    Predicate,
    TreeNode,
    build_tree,
    decision_path,
    entropy,
    extract_rules,
    information_gain,
    predict,
    predict_all,
)

logger.disable(PACKAGE_NAME)  # noqa: RUF067 - Disable logging for the id3kit package by default

__all__ = [
    "Dataset",
    "DatasetLoadError",
    "DecisionRule",
    "EvaluationResult",
    "ID3Error",
    "InternalNode",
    "InvalidInputError",
    "LeafNode",
    "MalformedRecordError",
    "Predicate",
    "Record",
    "TreeNode",
    "build_tree",
    "decision_path",
    "enable_logging",
    "entropy",
    "evaluate",
    "extract_rules",
    "information_gain",
    "load_dataset",
    "predict",
    "predict_all",
    "train_test_split",
]
