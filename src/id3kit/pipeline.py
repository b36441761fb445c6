"""Load, split, fit, predict, and evaluate in one call."""

from __future__ import annotations

from typing import Annotated

from loguru import logger
from pydantic import BaseModel, Field

from id3kit.config import ID3Settings
from id3kit.dataset import Dataset, load_dataset, train_test_split
from id3kit.evaluation import EvaluationResult, evaluate
from id3kit.logging import FIT_LEVEL
from id3kit.tree.builder import build_tree
from id3kit.tree.models import InternalNode, LeafNode
from id3kit.tree.predictor import predict_all

_STAGE_MSG = "Pipeline stage: {stage}"


class PipelineResult(BaseModel):
    """Output of one train/evaluate run.

    Attributes:
        tree (LeafNode | InternalNode): Root of the tree fitted on the training split.
        predictions (list[str]): Predicted label per test record, in order.
        evaluation (EvaluationResult): Metrics over the test split.
        train_size (int): Number of training records.
        test_size (int): Number of test records.
    """

    tree: Annotated[LeafNode | InternalNode, Field(discriminator="kind")] = Field(
        description="Root of the tree fitted on the training split.",
    )
    predictions: list[str] = Field(description="Predicted label per test record, in order.")
    evaluation: EvaluationResult = Field(description="Metrics over the test split.")
    train_size: int = Field(ge=1, description="Number of training records.")
    test_size: int = Field(ge=1, description="Number of test records.")


def run_pipeline(settings: ID3Settings) -> PipelineResult:
    """Run the full pipeline described by `settings`.

    Args:
        settings (ID3Settings): Data location, split, and evaluation options.

    Returns:
        PipelineResult: The fitted tree, test predictions, and metrics.

    Raises:
        DatasetLoadError: If the data file cannot be read.
        InvalidInputError: If either split is empty.
    """
    logger.log(FIT_LEVEL, _STAGE_MSG.format(stage="load"), path=str(settings.data_path))
    dataset = load_dataset(settings.data_path, separator=settings.separator)
    return evaluate_split(dataset, settings)


def evaluate_split(dataset: Dataset, settings: ID3Settings) -> PipelineResult:
    """Split an in-memory dataset, fit on the training part, and score the test part.

    Args:
        dataset (Dataset): Records to split.
        settings (ID3Settings): Split and evaluation options; `data_path` is unused.

    Returns:
        PipelineResult: The fitted tree, test predictions, and metrics.

    Raises:
        InvalidInputError: If either split is empty.
    """
    logger.log(FIT_LEVEL, _STAGE_MSG.format(stage="split"), train_fraction=settings.train_fraction)
    train, test = train_test_split(
        dataset,
        train_fraction=settings.train_fraction,
        shuffle=settings.shuffle,
        seed=settings.seed,
    )

    logger.log(FIT_LEVEL, _STAGE_MSG.format(stage="build"), train_rows=len(train))
    tree = build_tree(train)

    logger.log(FIT_LEVEL, _STAGE_MSG.format(stage="predict"), test_rows=len(test))
    predictions = predict_all(tree, test)

    logger.log(FIT_LEVEL, _STAGE_MSG.format(stage="evaluate"), positive_label=settings.positive_label)
    evaluation = evaluate(predictions, test.labels, positive_label=settings.positive_label)

    return PipelineResult(
        tree=tree,
        predictions=predictions,
        evaluation=evaluation,
        train_size=len(train),
        test_size=len(test),
    )
