from __future__ import annotations

import logging
from typing import Optional

from numpy.typing import NDArray

from .._errors import InvalidArgumentError
from .._prepare_image import ImageLike, prepare_image, split_channels, to_gray
from .._quality_algorithm import QualityAlgorithm
from ..features import DEFAULT_GMLOG_CONFIG, GMLOGConfig, compute_plane_features
from ..regression import FeatureRange, Regressor
from ._model_binding import ModelLike, RangeLike, check_consistency, resolve_artifacts


class QualityGMLOG(QualityAlgorithm):
    """
    No reference quality from the joint statistics of gradient magnitude and LoG responses.

    Colour images are scored per channel (B, G, R) followed by their grayscale version,
    grayscale images get a single score. Scores range nominally from 0 (best) to 100 (worst),
    they are regressor outputs and are not clamped.
    """

    _name: str = "QualityGMLOG"

    _model: Regressor
    _range: FeatureRange
    _config: GMLOGConfig

    def __init__(
        self,
        model: Regressor,
        feature_range: FeatureRange,
        config: GMLOGConfig = DEFAULT_GMLOG_CONFIG,
    ) -> None:
        """
        Initialize the engine with an already constructed model and range.

        Both are shared read-only, the engine never modifies them.

        :param model: The trained regressor.
        :param feature_range: The training time feature range.
        :param config: The feature settings the model was trained with.
        :raises ConfigurationError: If model, range and config disagree on the feature length.
        """
        check_consistency(model, feature_range, config.feature_length)
        self._model, self._range, self._config = model, feature_range, config

    @classmethod
    def create(
        cls,
        model: ModelLike,
        feature_range: RangeLike,
        config: GMLOGConfig = DEFAULT_GMLOG_CONFIG,
    ) -> QualityGMLOG:
        """
        Create an engine from artifact paths or from constructed objects.

        :param model: A regressor or the path to a model file.
        :param feature_range: A range or the path to a range file.
        :param config: The feature settings the model was trained with.
        :returns: The engine.
        """
        model, feature_range = resolve_artifacts(model, feature_range)
        logging.info(f"Created {cls._name} engine with {config.feature_length} features.")
        return cls(model, feature_range, config)

    def compute(
        self,
        image: ImageLike,
        model_path: Optional[str] = None,
        range_path: Optional[str] = None,
    ) -> tuple[float, ...]:
        """
        Compute the quality scores of an image.

        If both artifact paths are given they are loaded for this call only, otherwise the
        model and range of the engine are used.

        :param image: The image to score.
        :param model_path: Optional path to a model file.
        :param range_path: Optional path to a range file.
        :returns: One score per scored plane.
        :raises InvalidArgumentError: If only one of the paths is given.
        """
        if (model_path is None) != (range_path is None):
            raise InvalidArgumentError("Model and range paths have to be given together.")
        if model_path is not None:
            model, feature_range = resolve_artifacts(model_path, range_path)
            check_consistency(model, feature_range, self._config.feature_length)
        else:
            model, feature_range = self._model, self._range

        planes = split_channels(prepare_image(image), with_gray=True)
        scores = tuple(self._score_plane(plane, model, feature_range) for plane in planes)
        logging.debug(f"{self._name} scores: {scores}")
        return scores

    @staticmethod
    def compute_features(image: ImageLike, config: GMLOGConfig = DEFAULT_GMLOG_CONFIG) -> NDArray:
        """
        Compute the feature vector of the grayscale version of an image.

        Meant for training tools, neither a model nor a range is involved.

        :param image: The image (BGR(A) or grayscale).
        :param config: The feature settings.
        :returns: The feature vector of length config.feature_length.
        """
        return compute_plane_features(to_gray(prepare_image(image)), config)

    def clear(self) -> None:
        """Nothing to drop, the engine is bound to its model for its whole lifetime."""

    @property
    def empty(self) -> bool:
        """
        Check whether the engine is unusable.

        :returns: Always False, an engine can not exist without model and range.
        """
        return False

    @property
    def config(self) -> GMLOGConfig:
        """
        Get the feature settings.

        :returns: The config.
        """
        return self._config

    def _score_plane(self, plane: NDArray, model: Regressor, feature_range: FeatureRange) -> float:
        """
        Run the whole pipeline on a single intensity plane.

        :param plane: The plane.
        :param model: The regressor to use.
        :param feature_range: The range to use.
        :returns: The score.
        """
        features = compute_plane_features(plane, self._config)
        return model.predict(feature_range.normalize(features))
