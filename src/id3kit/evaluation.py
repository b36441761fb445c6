"""Accuracy and precision of predicted labels against actual labels."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from loguru import logger
from pydantic import BaseModel, Field, model_validator
from sklearn.metrics import accuracy_score, confusion_matrix

from id3kit.exceptions import InvalidInputError

DEFAULT_POSITIVE_LABEL: str = "1"


class EvaluationResult(BaseModel):
    """Classification metrics for one batch of predictions.

    The confusion counts treat `positive_label` as the positive class and
    every other label as negative.

    Attributes:
        positive_label (str): Label counted as the positive class.
        total (int): Number of predictions scored.
        accuracy (float): Fraction of predictions equal to the actual label.
        precision (float): `TP / (TP + FP)`; 0.0 when nothing was predicted
            positive.
        true_positives (int): Predicted positive, actually positive.
        false_positives (int): Predicted positive, actually negative.
        true_negatives (int): Predicted negative, actually negative.
        false_negatives (int): Predicted negative, actually positive.

    Examples:
        >>> result = evaluate(["1", "0", "1", "0"], ["1", "0", "0", "1"])
        >>> result.accuracy, result.precision
        (0.5, 0.5)
    """

    positive_label: str = Field(description="Label counted as the positive class.")
    total: int = Field(ge=1, description="Number of predictions scored.")
    accuracy: float = Field(ge=0.0, le=1.0, description="Fraction of predictions equal to the actual label.")
    precision: float = Field(
        ge=0.0,
        le=1.0,
        description="TP / (TP + FP) for the positive label; 0.0 when nothing was predicted positive.",
    )
    true_positives: int = Field(ge=0, description="Predicted positive, actually positive.")
    false_positives: int = Field(ge=0, description="Predicted positive, actually negative.")
    true_negatives: int = Field(ge=0, description="Predicted negative, actually negative.")
    false_negatives: int = Field(ge=0, description="Predicted negative, actually positive.")

    @model_validator(mode="after")
    def _validate_counts_sum_to_total(self) -> EvaluationResult:
        """Validate that the four confusion counts add up to `total`.

        Returns:
            EvaluationResult: The validated model instance.

        Raises:
            ValueError: If the counts do not sum to `total`.
        """
        counted = self.true_positives + self.false_positives + self.true_negatives + self.false_negatives
        if counted != self.total:
            raise ValueError(f"confusion counts sum to {counted}, expected total={self.total}")
        return self


def evaluate(
    predictions: Sequence[str],
    actual: Sequence[str],
    *,
    positive_label: str = DEFAULT_POSITIVE_LABEL,
) -> EvaluationResult:
    """Score predicted labels against actual labels.

    Args:
        predictions (Sequence[str]): Predicted label per record.
        actual (Sequence[str]): Actual label per record, aligned with `predictions`.
        positive_label (str): Label treated as the positive class for precision.

    Returns:
        EvaluationResult: Accuracy, precision, and confusion counts.

    Raises:
        InvalidInputError: If the inputs are empty or differ in length.
    """
    if len(predictions) != len(actual):
        raise InvalidInputError(
            f"predictions and actual labels differ in length: {len(predictions)} != {len(actual)}"
        )
    if not predictions:
        raise InvalidInputError("evaluate requires at least one prediction")

    accuracy = float(accuracy_score(list(actual), list(predictions)))

    predicted_positive = np.array([label == positive_label for label in predictions], dtype=np.int64)
    actual_positive = np.array([label == positive_label for label in actual], dtype=np.int64)
    true_negatives, false_positives, false_negatives, true_positives = (
        int(count) for count in confusion_matrix(actual_positive, predicted_positive, labels=[0, 1]).ravel()
    )
    predicted_positive_count = true_positives + false_positives
    precision = true_positives / predicted_positive_count if predicted_positive_count else 0.0

    result = EvaluationResult(
        positive_label=positive_label,
        total=len(predictions),
        accuracy=accuracy,
        precision=precision,
        true_positives=true_positives,
        false_positives=false_positives,
        true_negatives=true_negatives,
        false_negatives=false_negatives,
    )
    logger.info("Predictions evaluated", total=result.total, accuracy=result.accuracy, precision=result.precision)
    return result
