import math

import numpy as np
import pytest

from conftest import alternating_z_samples, constant_samples
from har_features.config import PipelineConfig
from har_features.features import (
    FeatureLayout,
    FeatureVectorAssembler,
    feature_names,
    fit_to_dimension,
)
from har_features.pipeline import FeaturePipeline
from har_features.preprocessing import FilterState, GravitySeparationFilter


def _vectors(samples, config=PipelineConfig()):
    pipeline = FeaturePipeline(config)
    out = [pipeline.push(s) for s in samples]
    return [v for v in out if v is not None]


def test_default_layout_blocks():
    layout = FeatureLayout(561)
    assert layout.natural_size == 289
    assert layout.block("time") == slice(0, 150)
    assert layout.block("sma") == slice(150, 155)
    assert layout.block("ar_reserved") == slice(155, 179)
    assert layout.block("correlation") == slice(179, 191)
    assert layout.block("frequency") == slice(191, 282)
    assert layout.block("angle") == slice(282, 289)
    assert layout.block("padding") == slice(289, 561)
    assert len(layout.names) == 561
    assert len(set(layout.names)) == 561


def test_time_block_is_descriptor_then_group_then_axis():
    names = FeatureLayout(561).names
    assert names[:4] == [
        "tBodyAcc-mean()-X", "tBodyAcc-mean()-Y", "tBodyAcc-mean()-Z", "tGravityAcc-mean()-X",
    ]
    assert names[15] == "tBodyAcc-std()-X"
    assert names[105] == "reserved-tBodyAcc-entropy()-X"
    assert names[150] == "tBodyAcc-sma()"
    assert names[179] == "correlation(tBodyAccX,tBodyAccY)"
    assert names[191] == "fBodyAcc-meanFreq()-X"
    assert names[200] == "fBodyAccMag-meanFreq()"
    assert names[282] == "angle(tBodyAccMean,gravityMean)"
    assert names[288] == "angle(Z,gravityMean)"
    assert names[289] == "pad-0"


def test_truncated_layout():
    layout = FeatureLayout(100)
    assert len(layout.names) == 100
    assert layout.block("time") == slice(0, 100)
    assert layout.block("sma") == slice(100, 100)
    assert layout.block("padding") == slice(100, 100)


def test_fit_to_dimension_pads_and_truncates():
    np.testing.assert_array_equal(fit_to_dimension([1.0, 2.0], 4), [1.0, 2.0, 0.0, 0.0])
    np.testing.assert_array_equal(fit_to_dimension([1.0, 2.0, 3.0], 2), [1.0, 2.0])
    assert fit_to_dimension([], 3).dtype == np.float32


@pytest.mark.parametrize("n", [0, 1, 2, 5, 64, 128, 300])
def test_vector_length_is_always_dim(n, random_samples):
    window = GravitySeparationFilter().apply_many(random_samples(n), FilterState())
    vector = FeatureVectorAssembler().assemble(window)

    assert vector.shape == (561,)
    assert vector.dtype == np.float32
    assert np.all(np.isfinite(vector))


@pytest.mark.parametrize("dim", [10, 289, 300, 1000])
def test_vector_length_follows_configured_dim(dim, random_samples):
    config = PipelineConfig(feature_dim=dim)
    window = GravitySeparationFilter().apply_many(random_samples(128), FilterState())
    assert FeatureVectorAssembler(config).assemble(window).shape == (dim,)


def test_vector_is_read_only(random_samples):
    window = GravitySeparationFilter().apply_many(random_samples(128), FilterState())
    vector = FeatureVectorAssembler().assemble(window)
    with pytest.raises(ValueError):
        vector[0] = 1.0


def test_reserved_and_padding_slots_are_zero(random_samples):
    assembler = FeatureVectorAssembler()
    window = GravitySeparationFilter().apply_many(random_samples(128), FilterState())
    vector = assembler.assemble(window)

    reserved = assembler.layout.reserved_indices
    assert len(reserved) == 15 + 24 + 39 + 272
    assert not vector[reserved].any()
    assert np.count_nonzero(vector[assembler.layout.block("time")]) > 100


def test_constant_gravity_scenario():
    layout = FeatureLayout(561)
    vectors = _vectors(constant_samples(256))
    assert len(vectors) == 3

    # second window starts after the filter has settled
    v = vectors[1]
    assert v[layout.index_of("tBodyAcc-sma()")] == pytest.approx(0.0, abs=1e-3)
    assert v[layout.index_of("tGravityAcc-sma()")] == pytest.approx(9.8, abs=1e-3)
    assert v[layout.index_of("tGravityAcc-mean()-Z")] == pytest.approx(9.8, abs=1e-3)
    assert v[layout.index_of("angle(Z,gravityMean)")] == pytest.approx(0.0, abs=1e-3)
    assert v[layout.index_of("angle(X,gravityMean)")] == pytest.approx(math.pi / 2, abs=1e-3)
    assert v[layout.index_of("correlation(tBodyAccX,tBodyAccY)")] == 0.0


def test_alternating_acceleration_scenario():
    layout = FeatureLayout(561)
    vectors = _vectors(alternating_z_samples(256))
    v = vectors[1]

    assert v[layout.index_of("tBodyAcc-std()-Z")] > 1.0
    assert v[layout.index_of("tBodyAcc-energy()-Z")] > 1.0
    assert v[layout.index_of("fBodyAcc-maxInds()-Z")] == pytest.approx(25.0, abs=0.5)
    assert v[layout.index_of("fBodyAcc-energy()-Z")] > 0.0


def test_gravity_group_uses_gravity_axes():
    layout = FeatureLayout(561)
    v = _vectors(constant_samples(256, acc=(3.0, 4.0, 0.0)))[1]
    assert v[layout.index_of("tGravityAcc-mean()-X")] == pytest.approx(3.0, abs=1e-3)
    assert v[layout.index_of("tGravityAcc-mean()-Y")] == pytest.approx(4.0, abs=1e-3)
    assert v[layout.index_of("tGravityAcc-sma()")] == pytest.approx(5.0, abs=1e-3)


def test_feature_names_follow_config():
    assert feature_names() == FeatureLayout(561).names
    assert len(feature_names(PipelineConfig(feature_dim=50))) == 50
