import logging

import numpy as np
from numpy.typing import NDArray
from scipy.ndimage import correlate

from .._errors import DimensionMismatchError
from ._gmlog_config import DEFAULT_GMLOG_CONFIG, GMLOGConfig
from ._scale_space import build_scale_space
from ._structural_responses import compute_responses, gaussian_kernel


def compute_plane_features(plane: NDArray, config: GMLOGConfig = DEFAULT_GMLOG_CONFIG) -> NDArray:
    """
    Get the GM-LOG feature vector of a single intensity plane.

    For every scale the joint statistics of the normalized gradient magnitude and LoG responses
    are computed, the per scale statistics are concatenated finest scale first.

    :param plane: The 2-D intensity plane with values in [0,1].
    :param config: The feature settings.
    :returns: The feature vector of length config.feature_length.
    """
    levels = build_scale_space(
        plane * config.intensity_scale,
        num_scales=config.num_scales,
        downsample_sigma=config.downsample_sigma,
        min_side=config.min_level_side,
    )
    features = np.concatenate([_scale_statistics(level, config) for level in levels])
    check_feature_length(features, config.feature_length)
    logging.debug(f"Extracted {features.size} features from plane of shape {plane.shape}.")
    return features


def joint_normalize(gm: NDArray, log: NDArray, config: GMLOGConfig) -> tuple[NDArray, NDArray]:
    """
    Jointly normalize both responses by their local energy.

    :param gm: The gradient magnitude map.
    :param log: The LoG map.
    :param config: The feature settings.
    :returns: The normalized maps with the unreliable border removed.
    """
    gm = gm / config.gm_log_ratio
    sigma_n = config.normalization_sigma
    window = gaussian_kernel(2 * config.border + 1, sigma_n)
    energy = correlate((gm**2 + log**2) / 2.0, window, mode="nearest")
    n_map = np.sqrt(energy) + config.normalization_constant

    b = config.border
    gm, log = gm / n_map, log / n_map
    return gm[b:-b, b:-b], log[b:-b, b:-b]


def joint_statistics(gm: NDArray, log: NDArray, config: GMLOGConfig) -> NDArray:
    """
    Summarize the joint distribution of two normalized response maps.

    The result holds the marginal distributions of both maps, followed by the
    independency distributions (one map conditioned on the other, summed and normalized).

    :param gm: The normalized gradient magnitude map.
    :param log: The normalized LoG map.
    :param config: The feature settings.
    :returns: The statistics, 4 * num_bins values.
    """
    bins = config.num_bins
    gq = _quantize(gm, config.bin_step, bins)
    lq = _quantize(log, config.bin_step, bins)

    joint = np.bincount(gq.ravel() * bins + lq.ravel(), minlength=bins * bins)
    joint = joint.reshape(bins, bins).astype(np.float64)
    joint /= joint.sum()

    p_g = joint.sum(axis=1)
    p_l = joint.sum(axis=0)

    eps = config.conditional_epsilon
    q_g = (joint / (p_l[np.newaxis, :] + eps)).sum(axis=1)
    q_l = (joint / (p_g[:, np.newaxis] + eps)).sum(axis=0)
    q_g /= q_g.sum()
    q_l /= q_l.sum()

    return np.concatenate([p_g, p_l, q_g, q_l])


def check_feature_length(features: NDArray, expected: int) -> None:
    """
    Make sure a feature vector has the contracted length.

    :param features: The feature vector.
    :param expected: The expected length.
    :raises DimensionMismatchError: If the lengths differ.
    """
    if features.shape != (expected,):
        raise DimensionMismatchError(
            f"Feature vector has shape {features.shape}, expected ({expected},)."
        )


def _scale_statistics(level: NDArray, config: GMLOGConfig) -> NDArray:
    """
    Get the statistics of a single scale level.

    :param level: The scale level.
    :param config: The feature settings.
    :returns: The statistics of the level.
    """
    gm, log = compute_responses(level, config.sigma)
    gm, log = joint_normalize(gm, log, config)
    return joint_statistics(gm, log, config)


def _quantize(values: NDArray, step: float, bins: int) -> NDArray:
    """
    Quantize non negative values into zero based bin indices.

    Values past the last bin fall into the last bin, zeros into the first.

    :param values: The values.
    :param step: The bin width.
    :param bins: The number of bins.
    :returns: The bin indices.
    """
    return np.clip(np.ceil(values / step), 1, bins).astype(np.intp) - 1
