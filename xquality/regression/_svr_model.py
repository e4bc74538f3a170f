from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any

import cv2
import numpy as np
from numpy.typing import NDArray

from .._errors import ConfigurationError, DimensionMismatchError
from ._regressor import Regressor

REGRESSION_TYPES = (cv2.ml.SVM_EPS_SVR, cv2.ml.SVM_NU_SVR)


class KernelType(IntEnum):
    """Kernel types, numbered like the kernels of cv2.ml.SVM."""

    LINEAR = 0
    POLY = 1
    RBF = 2
    SIGMOID = 3
    CHI2 = 4
    INTER = 5


@dataclass(frozen=True, eq=False)
class SVRModel(Regressor):
    """
    A trained support vector regressor, evaluated with numpy.

    The prediction is the weighted kernel similarity to the support vectors minus the bias rho.
    """

    kernel: KernelType
    support_vectors: NDArray  # Shape (n, var_count).
    dual_coefs: NDArray  # One weight per support vector.
    rho: float
    gamma: float = 1.0
    coef0: float = 0.0
    degree: float = 3.0

    def __post_init__(self) -> None:
        """Validate the parameters and make the arrays read-only so the model can be shared."""
        svs = np.array(self.support_vectors, dtype=np.float64)
        coefs = np.array(self.dual_coefs, dtype=np.float64).ravel()
        if svs.ndim == 1:
            svs = svs[np.newaxis, :]
        if svs.ndim != 2 or svs.shape[0] == 0:
            raise ConfigurationError(
                f"Support vectors of shape {svs.shape} are not a (n, L) matrix."
            )
        if coefs.size != svs.shape[0]:
            raise ConfigurationError(
                f"Found {coefs.size} dual coefficients for {svs.shape[0]} support vectors."
            )
        svs.flags.writeable = False
        coefs.flags.writeable = False
        object.__setattr__(self, "kernel", KernelType(self.kernel))
        object.__setattr__(self, "support_vectors", svs)
        object.__setattr__(self, "dual_coefs", coefs)
        object.__setattr__(self, "rho", float(self.rho))

    @classmethod
    def from_opencv(cls, svm: Any) -> SVRModel:
        """
        Extract the decision function of a trained cv2.ml.SVM regressor.

        :param svm: The trained cv2.ml.SVM.
        :returns: The model.
        :raises ConfigurationError: If the SVM is untrained or no regressor.
        """
        if not svm.isTrained():
            raise ConfigurationError("The SVM is not trained.")
        if svm.getType() not in REGRESSION_TYPES:
            raise ConfigurationError(f"SVM of type {svm.getType()} is no regressor.")
        rho, alpha, svidx = svm.getDecisionFunction(0)
        support_vectors = svm.getSupportVectors()[np.asarray(svidx).ravel()]
        return cls(
            kernel=KernelType(svm.getKernelType()),
            support_vectors=support_vectors,
            dual_coefs=np.asarray(alpha).ravel(),
            rho=rho,
            gamma=svm.getGamma(),
            coef0=svm.getCoef0(),
            degree=svm.getDegree(),
        )

    @property
    def var_count(self) -> int:
        """
        Get the input dimension of the model.

        :returns: The dimension.
        """
        return self.support_vectors.shape[1]

    def predict(self, features: NDArray) -> float:
        """
        Predict the score of a normalized feature vector.

        :param features: The feature vector of length var_count.
        :returns: The prediction.
        :raises DimensionMismatchError: If the vector length is not var_count.
        """
        x = np.asarray(features, dtype=np.float64)
        if x.shape != (self.var_count,):
            raise DimensionMismatchError(
                f"Feature vector has shape {x.shape}, the model expects ({self.var_count},)."
            )
        return float(self.dual_coefs @ self._kernel_values(x) - self.rho)

    def _kernel_values(self, x: NDArray) -> NDArray:
        """
        Get the kernel similarity of x to every support vector.

        :param x: The feature vector.
        :returns: One value per support vector.
        """
        svs = self.support_vectors
        if self.kernel == KernelType.LINEAR:
            return svs @ x
        if self.kernel == KernelType.POLY:
            return (self.gamma * (svs @ x) + self.coef0) ** self.degree
        if self.kernel == KernelType.RBF:
            return np.exp(-self.gamma * ((svs - x) ** 2).sum(axis=1))
        if self.kernel == KernelType.SIGMOID:
            return np.tanh(self.gamma * (svs @ x) + self.coef0)
        if self.kernel == KernelType.CHI2:
            total = svs + x
            safe = np.where(total != 0, total, 1.0)
            chi2 = np.where(total != 0, (svs - x) ** 2 / safe, 0.0).sum(axis=1)
            return np.exp(-self.gamma * chi2)
        return np.minimum(svs, x).sum(axis=1)
