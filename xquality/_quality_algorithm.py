from abc import ABC, abstractmethod
from typing import Any


class QualityAlgorithm(ABC):
    """A quality algorithm, allowing to score images."""

    _name: str

    @abstractmethod
    def compute(self, image: Any) -> tuple[float, ...]:
        """
        Compute the quality of an image.

        :param image: The image to score.
        :returns: One score per scored plane.
        """
        ...

    @abstractmethod
    def clear(self) -> None:
        """Drop the per-instance bindings (e.g. a reference image), keeping configuration."""
        ...

    @property
    @abstractmethod
    def empty(self) -> bool:
        """
        Check whether the algorithm is unusable in its current state.

        :returns: True if compute can not run.
        """
        ...

    @property
    def name(self) -> str:
        """
        Get the algorithms default name.

        :returns: The name.
        """
        return self._name
