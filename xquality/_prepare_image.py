from typing import Union

import cv2
import numpy as np
from numpy.typing import NDArray
from PIL import Image
from torch import Tensor

from ._errors import InvalidArgumentError

ImageLike = Union[NDArray, Tensor, Image.Image]

SUPPORTED_CHANNELS = (1, 3, 4)


def prepare_image(image: ImageLike) -> NDArray:
    """
    Prepare an image into a float numpy NDArray in OpenCV layout (HxW or HxWxC, BGR(A) order).

    Tensors are expected as HxW or CxHxW in RGB(A) order, PIL images in their own mode.
    Integer images are scaled by the maximum of their dtype, floating images are kept as they are.

    :param image: The image to prepare.
    :returns: The float64 array.
    :raises InvalidArgumentError: If the image is empty, not finite or has an unsupported layout.
    """
    if isinstance(image, Tensor):
        array = image.detach().cpu().numpy()
        if array.ndim == 3:
            array = _rgb_to_bgr(array.transpose(1, 2, 0))
    elif isinstance(image, Image.Image):
        array = np.asarray(image)
        if array.ndim == 3:
            array = _rgb_to_bgr(array)
    elif isinstance(image, np.ndarray):
        array = image
    else:
        raise InvalidArgumentError(f"Unsupported image type {type(image).__name__}.")

    if array.size == 0:
        raise InvalidArgumentError("Image is empty.")
    if array.ndim == 3 and array.shape[-1] == 1:
        array = array[..., 0]
    if array.ndim not in (2, 3):
        raise InvalidArgumentError(f"Expected a HxW or HxWxC image, found shape {array.shape}.")
    if array.ndim == 3 and array.shape[-1] not in SUPPORTED_CHANNELS:
        raise InvalidArgumentError(
            f"Unsupported number of channels {array.shape[-1]}, "
            f"expected one of {SUPPORTED_CHANNELS}."
        )

    if np.issubdtype(array.dtype, np.integer):
        prepared = array.astype(np.float64) / np.iinfo(array.dtype).max
    else:
        prepared = array.astype(np.float64)
    if not np.all(np.isfinite(prepared)):
        raise InvalidArgumentError("Image contains NaN or infinite values.")
    return prepared


def split_channels(image: NDArray, with_gray: bool) -> list[NDArray]:
    """
    Split a prepared image into the intensity planes that get scored independently.

    Alpha is never scored. Colour images optionally get a derived grayscale plane appended.

    :param image: The prepared image (see prepare_image).
    :param with_gray: Whether to append the grayscale plane for colour images.
    :returns: The planes in channel order.
    """
    if image.ndim == 2:
        return [image]
    planes = [np.ascontiguousarray(image[..., c]) for c in range(3)]
    if with_gray:
        planes.append(to_gray(image))
    return planes


def to_gray(image: NDArray) -> NDArray:
    """
    Get the grayscale plane of a prepared image.

    :param image: The prepared image.
    :returns: The grayscale plane (BGR2GRAY luminance weights).
    """
    if image.ndim == 2:
        return image
    code = cv2.COLOR_BGRA2GRAY if image.shape[-1] == 4 else cv2.COLOR_BGR2GRAY
    return cv2.cvtColor(image.astype(np.float32), code).astype(np.float64)


def _rgb_to_bgr(array: NDArray) -> NDArray:
    """
    Swap the first and third channel, keeping alpha in place.

    :param array: A HxWxC array.
    :returns: The swapped array.
    """
    if array.shape[-1] in (3, 4):
        order = [2, 1, 0] + list(range(3, array.shape[-1]))
        return array[..., order]
    return array
