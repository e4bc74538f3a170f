"""The quality algorithms: GMLOG (no reference) and Block-SVD (reference based or learned)."""

from ._block_partitioner import BlockGrid, BlockSize, partition
from ._block_svd import (
    DEFAULT_BLOCK_SIZE,
    QualityBlockSVD,
    block_spectra,
    spectrum_distance,
    spectrum_features,
)
from ._gmlog import QualityGMLOG

__all__ = [
    "QualityGMLOG",
    "QualityBlockSVD",
    "BlockSize",
    "BlockGrid",
    "partition",
    "block_spectra",
    "spectrum_distance",
    "spectrum_features",
    "DEFAULT_BLOCK_SIZE",
]
