from numpy.typing import NDArray
from scipy.ndimage import gaussian_filter

from .._errors import InvalidArgumentError


def build_scale_space(
    plane: NDArray, num_scales: int, downsample_sigma: float, min_side: int
) -> list[NDArray]:
    """
    Build the scale space of an intensity plane.

    Level 0 is the plane itself, every further level is the gaussian smoothed previous level sampled
    at stride 2 starting from (0, 0).

    :param plane: The 2-D intensity plane.
    :param num_scales: The number of levels.
    :param downsample_sigma: Sigma of the smoothing before decimation.
    :param min_side: The smallest side length a level may have.
    :returns: The levels, finest first.
    :raises InvalidArgumentError: If the plane is too small for the requested levels.
    """
    required = min_input_side(num_scales, min_side)
    if min(plane.shape) < required:
        raise InvalidArgumentError(
            f"Image of shape {plane.shape} is too small for {num_scales} scales, "
            f"both sides need at least {required} pixels."
        )

    levels = [plane]
    for _ in range(num_scales - 1):
        smoothed = gaussian_filter(levels[-1], sigma=downsample_sigma, mode="nearest")
        levels.append(smoothed[::2, ::2])
    return levels


def min_input_side(num_scales: int, min_side: int) -> int:
    """
    Get the smallest side length an input needs so that every level keeps min_side pixels.

    :param num_scales: The number of levels.
    :param min_side: The smallest side length of any level.
    :returns: The required input side length.
    """
    # A level of side n decimates to ceil(n / 2), so going back up doubles minus one.
    side = min_side
    for _ in range(num_scales - 1):
        side = 2 * side - 1
    return side
