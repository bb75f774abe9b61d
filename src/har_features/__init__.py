"""Streaming UCI-HAR style feature extraction for accelerometer/gyroscope data."""

from har_features.config import DEFAULT_CONFIG, PipelineConfig
from har_features.features import FeatureLayout, FeatureVectorAssembler, feature_names
from har_features.pipeline import FeaturePipeline, build_feature_dataset
from har_features.preprocessing import (
    FilterState,
    GravitySeparationFilter,
    ProcessedSample,
    RawSample,
)
from har_features.processor import HarProcessor

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIG",
    "FeatureLayout",
    "FeaturePipeline",
    "FeatureVectorAssembler",
    "FilterState",
    "GravitySeparationFilter",
    "HarProcessor",
    "PipelineConfig",
    "ProcessedSample",
    "RawSample",
    "build_feature_dataset",
    "feature_names",
]
