from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Iterator, NamedTuple, Union

from numpy.typing import NDArray

from .._errors import InvalidArgumentError


class BlockSize(NamedTuple):
    """The extent of a block in pixels."""

    width: int
    height: int

    @classmethod
    def of(cls, value: Union[int, tuple[int, int]]) -> BlockSize:
        """
        Get a block size from an int (square blocks) or a (width, height) pair.

        :param value: The size.
        :returns: The block size.
        :raises InvalidArgumentError: If the size is not positive.
        """
        width, height = (value, value) if isinstance(value, numbers.Integral) else value
        if int(width) < 1 or int(height) < 1:
            raise InvalidArgumentError(f"Block size needs to be positive, found {value}.")
        return cls(int(width), int(height))


@dataclass(frozen=True)
class BlockGrid:
    """
    A grid of non overlapping blocks anchored at (0, 0).

    Trailing rows and columns that do not fill a whole block are not part of the grid,
    so two images of the same shape always get the same grid.
    """

    rows: int
    cols: int
    block_size: BlockSize

    @classmethod
    def for_shape(cls, shape: tuple[int, ...], block_size: BlockSize) -> BlockGrid:
        """
        Get the block grid of an image shape.

        :param shape: The image shape (H, W, ...).
        :param block_size: The block size.
        :returns: The grid.
        :raises InvalidArgumentError: If the image does not hold a single block.
        """
        rows, cols = shape[0] // block_size.height, shape[1] // block_size.width
        if rows == 0 or cols == 0:
            raise InvalidArgumentError(
                f"Image of shape {shape[:2]} is smaller than a single {block_size} block."
            )
        return cls(rows, cols, block_size)

    @property
    def shape(self) -> tuple[int, int]:
        """
        Get the grid shape.

        :returns: Rows and columns.
        """
        return self.rows, self.cols

    def windows(self) -> Iterator[tuple[int, int, int, int]]:
        """
        Iterate the blocks in row-major order.

        :yields: The top, left, height and width of each block.
        """
        h, w = self.block_size.height, self.block_size.width
        for r in range(self.rows):
            for c in range(self.cols):
                yield r * h, c * w, h, w


def partition(plane: NDArray, block_size: BlockSize) -> NDArray:
    """
    Split a 2-D plane into its blocks.

    :param plane: The plane.
    :param block_size: The block size.
    :returns: The blocks as (rows, cols, height, width) array.
    """
    grid = BlockGrid.for_shape(plane.shape, block_size)
    h, w = block_size.height, block_size.width
    cropped = plane[: grid.rows * h, : grid.cols * w]
    return cropped.reshape(grid.rows, h, grid.cols, w).swapaxes(1, 2)
