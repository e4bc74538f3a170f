from abc import ABC, abstractmethod

from numpy.typing import NDArray


class Regressor(ABC):
    """A trained regression model mapping a normalized feature vector to a quality score."""

    @property
    @abstractmethod
    def var_count(self) -> int:
        """
        Get the input dimension the model was trained on.

        :returns: The dimension.
        """
        ...

    @abstractmethod
    def predict(self, features: NDArray) -> float:
        """
        Predict the score of a normalized feature vector.

        :param features: The feature vector of length var_count.
        :returns: The prediction.
        """
        ...
