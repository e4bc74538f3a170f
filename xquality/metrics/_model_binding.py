import os
from typing import Union

from .._errors import ConfigurationError, InvalidArgumentError
from ..regression import FeatureRange, Regressor, load_model, load_range

ModelLike = Union[Regressor, str, os.PathLike]
RangeLike = Union[FeatureRange, str, os.PathLike]


def resolve_artifacts(model: ModelLike, feature_range: RangeLike) -> tuple[Regressor, FeatureRange]:
    """
    Get model and range either from artifact paths or as already constructed objects.

    :param model: A regressor or the path to a model file.
    :param feature_range: A range or the path to a range file.
    :returns: The model and range.
    :raises InvalidArgumentError: If paths and objects are mixed.
    """
    is_path = [isinstance(arg, (str, os.PathLike)) for arg in (model, feature_range)]
    if all(is_path):
        return load_model(model), load_range(feature_range)
    if any(is_path):
        raise InvalidArgumentError("Model and range must both be paths or both be objects.")
    if not isinstance(model, Regressor):
        raise InvalidArgumentError(f"Model of type {type(model).__name__} is no Regressor.")
    if not isinstance(feature_range, FeatureRange):
        raise InvalidArgumentError(
            f"Range of type {type(feature_range).__name__} is no FeatureRange."
        )
    return model, feature_range


def check_consistency(model: Regressor, feature_range: FeatureRange, feature_length: int) -> None:
    """
    Make sure model, range and feature extractor agree on the feature vector length.

    :param model: The regressor.
    :param feature_range: The range.
    :param feature_length: The length the feature extractor produces.
    :raises ConfigurationError: If any of the lengths differ.
    """
    if not model.var_count == len(feature_range) == feature_length:
        raise ConfigurationError(
            f"Model expects {model.var_count} features, range has {len(feature_range)} and "
            f"the feature extractor produces {feature_length}."
        )
