"""Range normalization, regression models and the loading of their trained artifacts."""

from ._artifacts import load_model, load_range
from ._feature_range import FeatureRange
from ._regressor import Regressor
from ._svr_model import KernelType, SVRModel

__all__ = ["FeatureRange", "Regressor", "SVRModel", "KernelType", "load_model", "load_range"]
