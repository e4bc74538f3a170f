"""Builders for synthetic images, OpenCV trained regressors and range artifacts."""

from pathlib import Path

import cv2
import numpy as np

from xquality import FeatureRange


def make_image(height: int = 64, width: int = 64, channels: int = 3, seed: int = 0) -> np.ndarray:
    """Smooth gradients with a bit of texture, as uint8 in OpenCV layout."""
    rng = np.random.default_rng(seed)
    yy, xx = np.mgrid[0:height, 0:width].astype(np.float64)
    planes = []
    for c in range(channels):
        base = 120 + 60 * np.sin(xx / (7.0 + c)) * np.cos(yy / (11.0 + 2 * c))
        planes.append(base + rng.normal(0, 8, (height, width)))
    image = np.stack(planes, axis=-1) if channels > 1 else planes[0]
    return np.clip(image, 0, 255).astype(np.uint8)


def train_svm(var_count: int, kernel: int = cv2.ml.SVM_RBF, seed: int = 0):
    """Train a small OpenCV epsilon-SVR on random data in [-1, 1]."""
    rng = np.random.default_rng(seed)
    samples = rng.uniform(-1, 1, (40, var_count)).astype(np.float32)
    responses = (50 + 10 * samples.mean(axis=1)).astype(np.float32).reshape(-1, 1)

    svm = cv2.ml.SVM_create()
    svm.setType(cv2.ml.SVM_EPS_SVR)
    svm.setKernel(kernel)
    svm.setC(10.0)
    svm.setP(0.1)
    svm.setGamma(0.1)
    if kernel == cv2.ml.SVM_POLY:
        svm.setDegree(2.0)
        svm.setCoef0(1.0)
    svm.train(samples, cv2.ml.ROW_SAMPLE, responses)
    return svm


def make_range(var_count: int, seed: int = 0) -> FeatureRange:
    """A range with every minimum below its maximum."""
    rng = np.random.default_rng(seed)
    lower = rng.uniform(0.0, 0.05, var_count)
    return FeatureRange(lower, lower + rng.uniform(0.1, 0.5, var_count))


def write_range(path: Path, feature_range: FeatureRange, node: str = "range") -> Path:
    """Store a range the way OpenCV range files are laid out (2xL matrix)."""
    storage = cv2.FileStorage(str(path), cv2.FILE_STORAGE_WRITE)
    storage.write(node, np.stack([feature_range.lower, feature_range.upper]))
    storage.release()
    return path
