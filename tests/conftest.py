"""Shared test fixtures for xquality tests."""

import numpy as np
import pytest

from helpers import make_image, make_range, train_svm, write_range
from xquality import DEFAULT_GMLOG_CONFIG, FeatureRange, SVRModel


@pytest.fixture
def color_image() -> np.ndarray:
    return make_image()


@pytest.fixture
def gray_image() -> np.ndarray:
    return make_image(channels=1)


@pytest.fixture
def gmlog_svm():
    return train_svm(DEFAULT_GMLOG_CONFIG.feature_length)


@pytest.fixture
def gmlog_model(gmlog_svm) -> SVRModel:
    return SVRModel.from_opencv(gmlog_svm)


@pytest.fixture
def gmlog_range() -> FeatureRange:
    return make_range(DEFAULT_GMLOG_CONFIG.feature_length)


@pytest.fixture
def gmlog_artifacts(tmp_path, gmlog_svm, gmlog_range) -> tuple[str, str]:
    model_path = tmp_path / "gmlog_model.yml"
    gmlog_svm.save(str(model_path))
    range_path = write_range(tmp_path / "gmlog_range.yml", gmlog_range)
    return str(model_path), str(range_path)
