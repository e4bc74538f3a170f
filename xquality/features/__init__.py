"""The GM-LOG feature pipeline: scale space, structural responses and joint statistics."""

from ._gmlog_config import DEFAULT_GMLOG_CONFIG, GMLOGConfig
from ._nss_features import (
    check_feature_length,
    compute_plane_features,
    joint_normalize,
    joint_statistics,
)
from ._scale_space import build_scale_space, min_input_side
from ._structural_responses import (
    compute_responses,
    derivative_kernels,
    gaussian_kernel,
    gradient_magnitude,
    laplacian_of_gaussian,
    log_kernel,
)

__all__ = [
    "GMLOGConfig",
    "DEFAULT_GMLOG_CONFIG",
    "build_scale_space",
    "min_input_side",
    "compute_responses",
    "gradient_magnitude",
    "laplacian_of_gaussian",
    "gaussian_kernel",
    "log_kernel",
    "derivative_kernels",
    "compute_plane_features",
    "joint_normalize",
    "joint_statistics",
    "check_feature_length",
]
