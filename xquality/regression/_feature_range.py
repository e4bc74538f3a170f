from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .._errors import ConfigurationError, DimensionMismatchError


@dataclass(frozen=True, eq=False)
class FeatureRange:
    """Per feature (min, max) bounds observed at training time."""

    lower: NDArray
    upper: NDArray

    def __post_init__(self) -> None:
        """Validate the bounds and make them read-only so they can be shared."""
        lower = np.array(self.lower, dtype=np.float64).ravel()
        upper = np.array(self.upper, dtype=np.float64).ravel()
        if lower.shape != upper.shape:
            raise ConfigurationError(
                f"Range bounds differ in length: {lower.size} minima, {upper.size} maxima."
            )
        if np.any(lower > upper):
            raise ConfigurationError("Range has minima above their maxima.")
        lower.flags.writeable = False
        upper.flags.writeable = False
        object.__setattr__(self, "lower", lower)
        object.__setattr__(self, "upper", upper)

    @classmethod
    def from_matrix(cls, matrix: ArrayLike) -> FeatureRange:
        """
        Build a range from a bounds matrix.

        :param matrix: A 2xL matrix (minima row then maxima row) or a Lx2 matrix of pairs.
        :returns: The range.
        :raises ConfigurationError: If the matrix has neither layout.
        """
        matrix = np.asarray(matrix, dtype=np.float64)
        if matrix.ndim == 2 and matrix.shape[0] == 2:
            return cls(matrix[0], matrix[1])
        if matrix.ndim == 2 and matrix.shape[1] == 2:
            return cls(matrix[:, 0], matrix[:, 1])
        raise ConfigurationError(f"Range matrix of shape {matrix.shape} is neither 2xL nor Lx2.")

    def __len__(self) -> int:
        return self.lower.size

    def normalize(self, features: NDArray) -> NDArray:
        """
        Rescale features into [-1, 1] with the training time bounds.

        Values outside the bounds are clamped, dimensions with equal bounds map to 0.

        :param features: The feature vector.
        :returns: The normalized feature vector.
        :raises DimensionMismatchError: If the feature vector does not match the range.
        """
        features = np.asarray(features, dtype=np.float64)
        if features.shape != self.lower.shape:
            raise DimensionMismatchError(
                f"Feature vector has shape {features.shape}, range has length {len(self)}."
            )
        span = self.upper - self.lower
        degenerate = span == 0
        scaled = -1.0 + 2.0 * (features - self.lower) / np.where(degenerate, 1.0, span)
        return np.where(degenerate, 0.0, np.clip(scaled, -1.0, 1.0))
