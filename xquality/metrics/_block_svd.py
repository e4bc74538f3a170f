from __future__ import annotations

import logging
from typing import Optional, Union

import numpy as np
from numpy.typing import NDArray

from .._errors import ConfigurationError, DimensionMismatchError, InvalidArgumentError
from .._prepare_image import ImageLike, prepare_image, split_channels
from .._quality_algorithm import QualityAlgorithm
from ..regression import FeatureRange, Regressor
from ._block_partitioner import BlockSize, partition
from ._model_binding import ModelLike, RangeLike, check_consistency, resolve_artifacts

DEFAULT_BLOCK_SIZE = BlockSize(8, 8)


def block_spectra(plane: NDArray, block_size: BlockSize) -> NDArray:
    """
    Get the singular values of every block of a plane.

    :param plane: The 2-D plane.
    :param block_size: The block size.
    :returns: The (rows, cols, min(width, height)) spectra, each sorted descending.
    """
    return np.linalg.svd(partition(plane, block_size), compute_uv=False)


def spectrum_distance(ref_spectra: NDArray, cmp_spectra: NDArray) -> NDArray:
    """
    Get the normalized distance between aligned singular value spectra.

    The distance is the L2 norm of the difference relative to the summed norms, so it is 0 for
    equal spectra and bounded by 1. Two all-zero spectra have distance 0.

    :param ref_spectra: The reference spectra, spectrum on the last axis.
    :param cmp_spectra: The comparison spectra.
    :returns: The distances.
    """
    diff = np.linalg.norm(ref_spectra - cmp_spectra, axis=-1)
    total = np.linalg.norm(ref_spectra, axis=-1) + np.linalg.norm(cmp_spectra, axis=-1)
    return np.where(total > 0, diff / np.where(total > 0, total, 1.0), 0.0)


def spectrum_features(plane: NDArray, block_size: BlockSize) -> NDArray:
    """
    Get the average energy normalized block spectrum of a plane.

    :param plane: The 2-D plane.
    :param block_size: The block size.
    :returns: The feature vector of length min(width, height).
    """
    spectra = block_spectra(plane, block_size)
    energy = spectra.sum(axis=-1, keepdims=True)
    shares = np.where(energy > 0, spectra / np.where(energy > 0, energy, 1.0), 0.0)
    return shares.mean(axis=(0, 1))


class QualityBlockSVD(QualityAlgorithm):
    """
    Quality from the comparison of block wise singular value spectra.

    In reference mode scores range from 0 (worst) to 1 (best), one per channel.
    In learned mode no reference is needed, the averaged block spectra are fed to a regressor.
    """

    _name: str = "QualityBlockSVD"

    _reference: Optional[NDArray]
    _block_size: BlockSize

    """Learned mode components."""
    _model: Optional[Regressor]
    _range: Optional[FeatureRange]

    def __init__(
        self,
        reference: Optional[ImageLike] = None,
        block_size: Union[int, tuple[int, int]] = DEFAULT_BLOCK_SIZE,
    ) -> None:
        """
        Initialize the metric in reference mode.

        :param reference: The reference image, None leaves the metric empty.
        :param block_size: The (width, height) of the blocks.
        """
        self._reference = None if reference is None else prepare_image(reference)
        self._block_size = BlockSize.of(block_size)
        self._model, self._range = None, None

    @classmethod
    def create(
        cls,
        reference: Optional[ImageLike] = None,
        block_size: Union[int, tuple[int, int]] = DEFAULT_BLOCK_SIZE,
    ) -> QualityBlockSVD:
        """
        Create a metric bound to a reference image.

        :param reference: The reference image.
        :param block_size: The (width, height) of the blocks.
        :returns: The metric.
        """
        return cls(reference, block_size)

    @classmethod
    def create_learned(
        cls,
        model: ModelLike,
        feature_range: RangeLike,
        block_size: Union[int, tuple[int, int]] = DEFAULT_BLOCK_SIZE,
    ) -> QualityBlockSVD:
        """
        Create a metric bound to a trained regressor instead of a reference.

        :param model: A regressor or the path to a model file.
        :param feature_range: A range or the path to a range file.
        :param block_size: The (width, height) of the blocks the model was trained with.
        :returns: The metric.
        :raises ConfigurationError: If model, range and block size disagree on the feature length.
        """
        model, feature_range = resolve_artifacts(model, feature_range)
        metric = cls(None, block_size)
        check_consistency(model, feature_range, min(metric._block_size))
        metric._model, metric._range = model, feature_range
        logging.info(f"Created learned {cls._name} metric with block size {metric._block_size}.")
        return metric

    def compute(self, image: ImageLike) -> tuple[float, ...]:
        """
        Compute the quality of a comparison image.

        :param image: The comparison image.
        :returns: Per channel scores.
        :raises InvalidArgumentError: If the metric has neither reference nor model.
        """
        if self._reference is not None:
            scores, _ = self._compare(self._reference, prepare_image(image))
            return scores
        if self._model is not None:
            planes = split_channels(prepare_image(image), with_gray=True)
            scores = tuple(
                self._model.predict(self._range.normalize(spectrum_features(p, self._block_size)))
                for p in planes
            )
            logging.debug(f"{self._name} learned scores: {scores}")
            return scores
        raise InvalidArgumentError(f"{self._name} has neither a reference image nor a model.")

    def compare(self, reference: ImageLike, image: ImageLike) -> tuple[tuple[float, ...], NDArray]:
        """
        Compare an image against a reference.

        :param reference: The reference image.
        :param image: The comparison image.
        :returns: Per channel scores and the quality map of block distances.
        """
        return self._compare(prepare_image(reference), prepare_image(image))

    def clear(self) -> None:
        """Drop the reference image."""
        self._reference = None

    @property
    def empty(self) -> bool:
        """
        Check whether the metric has nothing to compare against.

        :returns: True if neither a reference nor a model is bound.
        """
        return self._reference is None and self._model is None

    @property
    def block_size(self) -> BlockSize:
        """
        Get the block size used for subsequent computations.

        :returns: The block size.
        """
        return self._block_size

    @block_size.setter
    def block_size(self, value: Union[int, tuple[int, int]]) -> None:
        """
        Set the block size used for subsequent computations.

        :param value: The (width, height) of the blocks.
        :raises ConfigurationError: If a bound model expects a different spectrum length.
        """
        size = BlockSize.of(value)
        if self._model is not None and min(size) != self._model.var_count:
            raise ConfigurationError(
                f"Block size {size} yields {min(size)} features, the model expects "
                f"{self._model.var_count}."
            )
        self._block_size = size

    def get_block_size(self) -> BlockSize:
        """
        Get the block size used for subsequent computations.

        :returns: The block size.
        """
        return self.block_size

    def set_block_size(self, value: Union[int, tuple[int, int]]) -> None:
        """
        Set the block size used for subsequent computations.

        :param value: The (width, height) of the blocks.
        """
        self.block_size = value

    def _compare(self, reference: NDArray, image: NDArray) -> tuple[tuple[float, ...], NDArray]:
        """
        Compare two prepared images block by block.

        :param reference: The prepared reference.
        :param image: The prepared comparison image.
        :returns: Per channel scores and the quality map.
        :raises DimensionMismatchError: If the images differ in size or channels.
        """
        if reference.shape != image.shape:
            raise DimensionMismatchError(
                f"Reference of shape {reference.shape} and comparison of shape {image.shape} "
                "differ."
            )
        size = self._block_size
        distances = [
            spectrum_distance(block_spectra(r, size), block_spectra(c, size))
            for r, c in zip(
                split_channels(reference, with_gray=False), split_channels(image, with_gray=False)
            )
        ]
        scores = tuple(float(1.0 - d.mean()) for d in distances)
        quality_map = distances[0] if len(distances) == 1 else np.stack(distances, axis=-1)
        logging.debug(f"{self._name} scores: {scores}")
        return scores, quality_map
