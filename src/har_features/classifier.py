import os
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

import joblib
import numpy as np

from har_features import statistics
from har_features.constants import (
    ACTIVITY_LABELS,
    FEATURE_DIM,
    RULE_RUNNING_THRESHOLD,
    RULE_STANDING_THRESHOLD,
    RULE_WALKING_THRESHOLD,
)
from har_features.exceptions import ModelUnavailableError
from har_features.features import FeatureLayout
from har_features.signals import GROUP_MAGNITUDE, GROUP_NAMES, SignalGroup, SignalSet

LOGGER = logging.getLogger(__name__)

# Default location of the trained model, relative to the working directory
MODEL_PATH = os.path.abspath(os.path.join("trained_models", "har_model.pkl"))


@dataclass(frozen=True)
class Prediction:
    label: str
    confidence: float
    source: str  # "model" or "rule"

    def __str__(self) -> str:
        if self.source == "rule":
            return f"{self.label} (rule)"
        return f"{self.label} ({self.confidence * 100:.1f}%)"


class ModelClassifier:
    """
    Wraps a fitted scikit-learn estimator trained on the feature vector.

    Class indices are mapped to names through `labels` unless the
    estimator already predicts strings.
    """

    source = "model"

    def __init__(self, model, labels: Sequence[str] = ACTIVITY_LABELS, feature_dim: int = FEATURE_DIM):
        self.model = model
        self.labels = list(labels)
        self.feature_dim = feature_dim

    @classmethod
    def from_path(cls, path: str = MODEL_PATH, **kwargs) -> "ModelClassifier":
        if not os.path.exists(path):
            raise ModelUnavailableError(f"Model file not found: {path}")
        try:
            model = joblib.load(path)
        except Exception as e:
            raise ModelUnavailableError(f"Could not load model {path}: {e}") from e
        LOGGER.info("Loaded model from %s", path)
        return cls(model, **kwargs)

    def _label_for(self, value) -> str:
        if isinstance(value, str):
            return value
        idx = int(value)
        if 0 <= idx < len(self.labels):
            return self.labels[idx]
        return f"class_{idx}"

    def classify(self, vector: np.ndarray) -> Prediction:
        X = np.asarray(vector, dtype=np.float32).reshape(1, -1)
        if X.shape[1] != self.feature_dim:
            raise ValueError(
                f"Expected a feature vector of length {self.feature_dim}, got {X.shape[1]}"
            )

        if hasattr(self.model, "predict_proba"):
            proba = self.model.predict_proba(X)[0]
            best = int(np.argmax(proba))
            classes = getattr(self.model, "classes_", np.arange(len(proba)))
            return Prediction(self._label_for(classes[best]), float(proba[best]), self.source)

        y_pred = self.model.predict(X)[0]
        return Prediction(self._label_for(y_pred), 1.0, self.source)


class RuleBasedClassifier:
    """
    Threshold rules on the acceleration level, used when no model is loaded.

    The level is SMA(tGravityAccMag) + SMA(tBodyAccMag), which tracks the
    mean raw acceleration magnitude (about 9.8 m/s^2 at rest). It is taken
    from the window's signals when given, otherwise from the two SMA slots
    of the vector. A vector truncated below those slots classifies as UNKNOWN.
    """

    source = "rule"
    LEVEL_GROUPS = (SignalGroup.T_GRAVITY_ACC, SignalGroup.T_BODY_ACC)

    def __init__(self, feature_dim: int = FEATURE_DIM):
        names = FeatureLayout(feature_dim).names
        sma_names = [f"{GROUP_NAMES[g]}-sma()" for g in self.LEVEL_GROUPS]
        self._sma_indices: Optional[List[int]] = None
        if all(n in names for n in sma_names):
            self._sma_indices = [names.index(n) for n in sma_names]

    def acceleration_level(
        self,
        vector: np.ndarray,
        signals: Optional[SignalSet] = None,
    ) -> Optional[float]:
        if signals is not None:
            return sum(statistics.mean(signals[GROUP_MAGNITUDE[g]]) for g in self.LEVEL_GROUPS)
        if self._sma_indices is None:
            return None
        return sum(float(vector[i]) for i in self._sma_indices)

    def classify(self, vector: np.ndarray, signals: Optional[SignalSet] = None) -> Prediction:
        level = self.acceleration_level(vector, signals)
        if level is None:
            label = "UNKNOWN"
        elif level > RULE_RUNNING_THRESHOLD:
            label = "RUNNING_JUMPING"
        elif level > RULE_WALKING_THRESHOLD:
            label = "WALKING"
        elif level > RULE_STANDING_THRESHOLD:
            label = "STANDING"
        else:
            label = "UNKNOWN"
        return Prediction(label, 0.0, self.source)


def load_classifier(path: Optional[str] = MODEL_PATH, feature_dim: int = FEATURE_DIM):
    """Model classifier from `path`, or the rule-based fallback if it cannot be loaded."""
    if path is None:
        LOGGER.info("No model path given, using rule-based classifier")
        return RuleBasedClassifier(feature_dim)
    try:
        return ModelClassifier.from_path(path, feature_dim=feature_dim)
    except ModelUnavailableError as e:
        LOGGER.warning("%s. Falling back to rule-based classifier.", e)
        return RuleBasedClassifier(feature_dim)
