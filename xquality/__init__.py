"""Perceptual image quality: GM-LOG no reference scoring and Block-SVD reference comparison."""

from ._enable_logging import enable_logging
from ._errors import (
    ArtifactIOError,
    ConfigurationError,
    DimensionMismatchError,
    InvalidArgumentError,
    QualityError,
)
from ._prepare_image import prepare_image, split_channels
from ._quality_algorithm import QualityAlgorithm
from .features import DEFAULT_GMLOG_CONFIG, GMLOGConfig
from .metrics import BlockSize, QualityBlockSVD, QualityGMLOG
from .regression import FeatureRange, Regressor, SVRModel, load_model, load_range

__all__ = [
    "QualityAlgorithm",
    "QualityGMLOG",
    "QualityBlockSVD",
    "BlockSize",
    "GMLOGConfig",
    "DEFAULT_GMLOG_CONFIG",
    "FeatureRange",
    "Regressor",
    "SVRModel",
    "load_model",
    "load_range",
    "prepare_image",
    "split_channels",
    "enable_logging",
    "QualityError",
    "InvalidArgumentError",
    "DimensionMismatchError",
    "ArtifactIOError",
    "ConfigurationError",
]
