"""Loading of trained model and range artifacts in the OpenCV YAML/XML formats."""

import logging
import os.path
from typing import Union

import cv2

from .._errors import ArtifactIOError, ConfigurationError
from ._feature_range import FeatureRange
from ._svr_model import SVRModel

PathLike = Union[str, os.PathLike]


def load_model(path: PathLike) -> SVRModel:
    """
    Load a trained support vector regressor saved by cv2.ml.SVM.save.

    :param path: The path to the model file.
    :returns: The model.
    :raises ArtifactIOError: If the file is missing or does not hold a trained regressor.
    """
    path = _existing_file(path, "Model")
    try:
        svm = cv2.ml.SVM_load(path)
        if svm is None:
            raise ArtifactIOError(f"Model file {path} holds no SVM.")
        model = SVRModel.from_opencv(svm)
    except cv2.error as err:
        raise ArtifactIOError(f"Model file {path} could not be parsed.") from err
    except ConfigurationError as err:
        raise ArtifactIOError(f"Model file {path} holds no usable regressor: {err}") from err
    logging.info(
        f"Loaded {model.kernel.name} model with {len(model.dual_coefs)} support vectors "
        f"and {model.var_count} features from {path}."
    )
    return model


def load_range(path: PathLike, node: str = "range") -> FeatureRange:
    """
    Load the feature range stored as a matrix node of a cv2.FileStorage file.

    :param path: The path to the range file.
    :param node: The name of the matrix node.
    :returns: The range.
    :raises ArtifactIOError: If the file is missing or the node is absent or malformed.
    """
    path = _existing_file(path, "Range")
    try:
        storage = cv2.FileStorage(path, cv2.FILE_STORAGE_READ)
    except cv2.error as err:
        raise ArtifactIOError(f"Range file {path} could not be parsed.") from err
    try:
        if not storage.isOpened():
            raise ArtifactIOError(f"Range file {path} could not be opened.")
        matrix = storage.getNode(node).mat()
    finally:
        storage.release()

    if matrix is None or matrix.size == 0:
        raise ArtifactIOError(f"Range file {path} has no matrix node '{node}'.")
    try:
        feature_range = FeatureRange.from_matrix(matrix)
    except ConfigurationError as err:
        raise ArtifactIOError(f"Range file {path} is malformed: {err}") from err
    logging.info(f"Loaded range of {len(feature_range)} features from {path}.")
    return feature_range


def _existing_file(path: PathLike, kind: str) -> str:
    """
    Make sure an artifact exists before handing it to OpenCV.

    :param path: The artifact path.
    :param kind: The artifact kind for the error message.
    :returns: The path as string.
    :raises ArtifactIOError: If there is no such file.
    """
    path = os.fspath(path)
    if not os.path.isfile(path):
        raise ArtifactIOError(f"{kind} file not found: {path}")
    return path
