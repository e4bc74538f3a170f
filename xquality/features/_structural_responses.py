from math import ceil

import numpy as np
from numpy.typing import NDArray
from scipy.ndimage import correlate


def gaussian_kernel(size: int, sigma: float) -> NDArray:
    """
    Get a square gaussian kernel normalized to unit sum.

    :param size: The side length of the kernel (odd).
    :param sigma: The standard deviation.
    :returns: The kernel.
    """
    xx, yy = _grid(size)
    kernel = np.exp(-(xx**2 + yy**2) / (2.0 * sigma**2))
    return kernel / kernel.sum()


def log_kernel(size: int, sigma: float) -> NDArray:
    """
    Get a square Laplacian of Gaussian kernel with zero sum.

    :param size: The side length of the kernel (odd).
    :param sigma: The standard deviation of the gaussian.
    :returns: The kernel.
    """
    xx, yy = _grid(size)
    r2 = xx**2 + yy**2
    gaussian = np.exp(-r2 / (2.0 * sigma**2))
    gaussian /= gaussian.sum()
    kernel = gaussian * (r2 - 2.0 * sigma**2) / sigma**4
    return kernel - kernel.sum() / kernel.size


def derivative_kernels(sigma: float) -> tuple[NDArray, NDArray]:
    """
    Get the horizontal and vertical gaussian derivative kernels, normalized to unit absolute sum.

    :param sigma: The standard deviation of the gaussian.
    :returns: The x and y kernels.
    """
    size = 2 * ceil(3 * sigma) + 1
    xx, yy = _grid(size)
    gaussian = gaussian_kernel(size, sigma)
    kx = -xx / sigma**2 * gaussian
    ky = -yy / sigma**2 * gaussian
    return kx / np.abs(kx).sum(), ky / np.abs(ky).sum()


def gradient_magnitude(level: NDArray, sigma: float) -> NDArray:
    """
    Get the gradient magnitude map of a scale level.

    :param level: The intensity map.
    :param sigma: The scale of the derivative filters.
    :returns: The gradient magnitude, same size as level.
    """
    kx, ky = derivative_kernels(sigma)
    gx = correlate(level, kx, mode="nearest")
    gy = correlate(level, ky, mode="nearest")
    return np.sqrt(gx**2 + gy**2)


def laplacian_of_gaussian(level: NDArray, sigma: float) -> NDArray:
    """
    Get the absolute Laplacian of Gaussian response of a scale level.

    :param level: The intensity map.
    :param sigma: The scale of the LoG filter.
    :returns: The response, same size as level.
    """
    kernel = log_kernel(2 * ceil(3 * sigma) + 1, sigma)
    kernel = kernel / np.abs(kernel).sum()
    return np.abs(correlate(level, kernel, mode="nearest"))


def compute_responses(level: NDArray, sigma: float) -> tuple[NDArray, NDArray]:
    """
    Get both structural responses of a scale level.

    :param level: The intensity map.
    :param sigma: The filter scale.
    :returns: The gradient magnitude and LoG maps.
    """
    return gradient_magnitude(level, sigma), laplacian_of_gaussian(level, sigma)


def _grid(size: int) -> tuple[NDArray, NDArray]:
    """
    Get centered coordinate grids for a square kernel.

    :param size: The side length.
    :returns: The x and y coordinates.
    """
    half = (size - 1) / 2.0
    axis = np.arange(size, dtype=np.float64) - half
    return np.meshgrid(axis, axis)
