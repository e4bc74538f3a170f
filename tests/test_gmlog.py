"""Tests for the GMLOG no reference quality engine."""

import numpy as np
import pytest
import torch

from helpers import make_image, make_range, train_svm
from xquality import (
    ArtifactIOError,
    ConfigurationError,
    GMLOGConfig,
    InvalidArgumentError,
    QualityGMLOG,
    SVRModel,
    prepare_image,
    split_channels,
)
from xquality.features import compute_plane_features


@pytest.fixture
def engine(gmlog_model, gmlog_range) -> QualityGMLOG:
    return QualityGMLOG.create(gmlog_model, gmlog_range)


class TestCreate:
    """Tests for constructing the engine."""

    def test_from_objects(self, gmlog_model, gmlog_range):
        engine = QualityGMLOG.create(gmlog_model, gmlog_range)
        assert engine.name == "QualityGMLOG"
        assert not engine.empty

    def test_from_artifacts(self, gmlog_artifacts, gmlog_model, gmlog_range, color_image):
        from_files = QualityGMLOG.create(*gmlog_artifacts)
        from_objects = QualityGMLOG(gmlog_model, gmlog_range)
        np.testing.assert_allclose(
            from_files.compute(color_image), from_objects.compute(color_image), rtol=1e-6
        )

    def test_model_dimension_mismatch_at_create(self):
        model = SVRModel.from_opencv(train_svm(24))
        with pytest.raises(ConfigurationError):
            QualityGMLOG.create(model, make_range(24), GMLOGConfig(num_scales=1, num_bins=10))

    def test_range_length_mismatch(self, gmlog_model):
        with pytest.raises(ConfigurationError):
            QualityGMLOG(gmlog_model, make_range(79))

    def test_custom_config(self, color_image):
        config = GMLOGConfig(num_scales=3, num_bins=2)
        engine = QualityGMLOG(SVRModel.from_opencv(train_svm(24)), make_range(24), config)
        assert len(engine.compute(color_image)) == 4
        assert engine.config is config

    def test_mixed_arguments(self, gmlog_artifacts, gmlog_range):
        with pytest.raises(InvalidArgumentError):
            QualityGMLOG.create(gmlog_artifacts[0], gmlog_range)

    def test_missing_artifacts(self, tmp_path):
        with pytest.raises(ArtifactIOError):
            QualityGMLOG.create(str(tmp_path / "model.yml"), str(tmp_path / "range.yml"))


class TestCompute:
    """Tests for compute."""

    def test_color_scores_per_channel_and_gray(self, engine, color_image):
        scores = engine.compute(color_image)
        assert len(scores) == 4
        assert all(isinstance(score, float) and np.isfinite(score) for score in scores)

    def test_alpha_ignored(self, engine, color_image):
        alpha = np.full(color_image.shape[:2] + (1,), 255, dtype=np.uint8)
        with_alpha = np.concatenate([color_image, alpha], axis=-1)
        np.testing.assert_allclose(engine.compute(with_alpha), engine.compute(color_image))

    def test_gray_single_score(self, engine, gray_image):
        assert len(engine.compute(gray_image)) == 1

    def test_channel_order(self, engine, color_image):
        scores = engine.compute(color_image)
        assert scores[0] == engine.compute(color_image[..., 0])[0]
        assert scores[2] == engine.compute(color_image[..., 2])[0]

    def test_deterministic(self, engine, color_image):
        assert engine.compute(color_image) == engine.compute(color_image)

    def test_reusable_across_images(self, engine, gmlog_model, gmlog_range):
        first = make_image(seed=1)
        engine.compute(make_image(80, 96, seed=2))
        assert engine.compute(first) == QualityGMLOG(gmlog_model, gmlog_range).compute(first)

    def test_tensor_input(self, engine, color_image):
        tensor = torch.from_numpy(color_image[..., ::-1].copy()).permute(2, 0, 1)
        np.testing.assert_allclose(engine.compute(tensor), engine.compute(color_image))

    def test_with_artifact_paths(self, engine, gmlog_artifacts, color_image):
        other = QualityGMLOG(SVRModel.from_opencv(train_svm(80, seed=9)), make_range(80, seed=9))
        expected = engine.compute(color_image)
        with_paths = other.compute(color_image, *gmlog_artifacts)
        np.testing.assert_allclose(with_paths, expected, rtol=1e-6)
        assert other.compute(color_image) != other.compute(color_image, *gmlog_artifacts)

    def test_only_one_path(self, engine, gmlog_artifacts, color_image):
        with pytest.raises(InvalidArgumentError):
            engine.compute(color_image, model_path=gmlog_artifacts[0])

    def test_missing_path_artifacts(self, engine, color_image, tmp_path):
        with pytest.raises(ArtifactIOError):
            engine.compute(color_image, str(tmp_path / "a.yml"), str(tmp_path / "b.yml"))

    def test_empty_image(self, engine):
        with pytest.raises(InvalidArgumentError):
            engine.compute(np.zeros((0, 0, 3), dtype=np.uint8))

    def test_too_small_image(self, engine):
        with pytest.raises(InvalidArgumentError):
            engine.compute(make_image(10, 10))

    def test_non_finite_image(self, engine):
        image = prepare_image(make_image(channels=1))
        image[5, 5] = np.nan
        with pytest.raises(InvalidArgumentError):
            engine.compute(image)

    def test_unsupported_channels(self, engine):
        with pytest.raises(InvalidArgumentError):
            engine.compute(np.zeros((32, 32, 2), dtype=np.uint8))


class TestComputeFeatures:
    """Tests for compute_features."""

    def test_length_invariant_to_size(self):
        sizes = [(20, 20), (64, 48), (100, 130)]
        lengths = {QualityGMLOG.compute_features(make_image(h, w)).shape for h, w in sizes}
        assert lengths == {(80,)}

    def test_color_uses_gray_plane(self, color_image):
        gray = split_channels(prepare_image(color_image), with_gray=True)[-1]
        np.testing.assert_array_equal(
            QualityGMLOG.compute_features(color_image), compute_plane_features(gray)
        )

    def test_config(self):
        assert QualityGMLOG.compute_features(make_image(), GMLOGConfig(num_bins=4)).shape == (32,)

    def test_non_finite_image(self):
        image = prepare_image(make_image(channels=1))
        image[5, 5] = np.nan
        with pytest.raises(InvalidArgumentError):
            QualityGMLOG.compute_features(image)
