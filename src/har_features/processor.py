"""
processor.py

Real-time activity recognition on top of the feature pipeline.

HarProcessor receives raw samples one at a time, runs the pipeline and,
whenever a window completes, hands the feature vector to the classifier.
The most recent prediction is kept as the current activity.
"""

import logging
from typing import Optional

import numpy as np

from har_features.classifier import (
    MODEL_PATH,
    ModelClassifier,
    Prediction,
    RuleBasedClassifier,
    load_classifier,
)
from har_features.config import DEFAULT_CONFIG, PipelineConfig
from har_features.constants import IDLE_ACTIVITY
from har_features.pipeline import FeaturePipeline
from har_features.preprocessing import RawSample

LOGGER = logging.getLogger(__name__)


class HarProcessor:
    """
    Parameters:
        config : PipelineConfig
            Window, filter and dimension settings.
        classifier : object with classify(vector) -> Prediction, optional
            Defaults to load_classifier(model_path), which falls back to
            RuleBasedClassifier when the model cannot be loaded.
        model_path : str, optional
            Used only when classifier is None.

    Attributes:
        current_prediction : Prediction or None
        last_vector : np.ndarray or None
            Most recent feature vector (read-only).
    """

    def __init__(
        self,
        config: PipelineConfig = DEFAULT_CONFIG,
        classifier=None,
        model_path: Optional[str] = MODEL_PATH,
    ):
        self.pipeline = FeaturePipeline(config)
        if classifier is None:
            classifier = load_classifier(model_path, feature_dim=config.feature_dim)
        self.classifier = classifier
        self.fallback = RuleBasedClassifier(config.feature_dim)
        self.current_prediction: Optional[Prediction] = None
        self.last_vector: Optional[np.ndarray] = None

    @property
    def using_model(self) -> bool:
        return isinstance(self.classifier, ModelClassifier)

    @property
    def current_activity(self) -> str:
        if self.current_prediction is None:
            return IDLE_ACTIVITY
        return str(self.current_prediction)

    @property
    def current_label(self) -> str:
        """Activity name only, without confidence or source."""
        if self.current_prediction is None:
            return IDLE_ACTIVITY
        return self.current_prediction.label

    @property
    def windows_emitted(self) -> int:
        return self.pipeline.windows_emitted

    def process(self, raw: RawSample) -> Optional[Prediction]:
        """
        Feed one raw sample.

        Returns the new prediction when this sample completed a window,
        otherwise None.
        """
        vector = self.pipeline.push(raw)
        if vector is None:
            return None

        self.last_vector = vector
        signals = self.pipeline.last_signals
        if isinstance(self.classifier, RuleBasedClassifier):
            prediction = self.classifier.classify(vector, signals)
        else:
            try:
                prediction = self.classifier.classify(vector)
            except Exception:
                # keep producing labels for this window; the model error is
                # surfaced through the rule source on the prediction
                LOGGER.exception("Model inference failed, using rule-based fallback")
                prediction = self.fallback.classify(vector, signals)

        self.current_prediction = prediction
        LOGGER.debug("Window %d -> %s", self.windows_emitted, prediction)
        return prediction

    def reset(self) -> None:
        self.pipeline.reset()
        self.current_prediction = None
        self.last_vector = None

    def __repr__(self) -> str:
        return (
            f"HarProcessor(classifier={type(self.classifier).__name__}, "
            f"windows={self.windows_emitted}, activity={self.current_activity})"
        )
