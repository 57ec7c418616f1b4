"""World grid state."""

from typing import Any

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, Field, PrivateAttr

from .exceptions import TileOutOfBoundsError
from .tiles import TileType


class Tile(BaseModel, frozen=True):
    """Immutable tile value: a type tag plus an active flag."""

    type: TileType = TileType.AIR
    active: bool = False

    @property
    def is_solid(self) -> bool:
        return self.type.is_solid

    @property
    def drop_type(self) -> TileType:
        return self.type.drop_type


class World(BaseModel, frozen=True):
    """
    Fixed-size tile grid.

    Dimensions are immutable after construction. Tiles live in two numpy
    planes of shape (height, width): a uint8 plane of TileType values and a
    bool plane of active flags. Generation stages operate on the planes
    directly; gameplay code goes through the bounds-checked accessors.
    """

    width: int = Field(gt=0, description="World width in tiles")
    height: int = Field(gt=0, description="World height in tiles")

    _types: NDArray[np.uint8] = PrivateAttr()
    _active: NDArray[np.bool_] = PrivateAttr()

    def model_post_init(self, context: Any, /) -> None:
        self._types = np.zeros((self.height, self.width), dtype=np.uint8)
        self._active = np.zeros((self.height, self.width), dtype=np.bool_)

    @property
    def types(self) -> NDArray[np.uint8]:
        """TileType plane, indexed [y, x]."""
        return self._types

    @property
    def active(self) -> NDArray[np.bool_]:
        """Active-flag plane, indexed [y, x]."""
        return self._active

    # --- Tile operations ---

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if a coordinate is within world bounds."""
        return 0 <= x < self.width and 0 <= y < self.height

    def tile(self, x: int, y: int) -> Tile:
        """Get the tile at (x, y).

        Raises:
            TileOutOfBoundsError: If the coordinate is outside the grid.
        """
        self._check_bounds(x, y)
        return Tile(
            type=TileType(int(self._types[y, x])),
            active=bool(self._active[y, x]),
        )

    def set_tile(self, x: int, y: int, tile_type: TileType, active: bool) -> None:
        """Replace the tile at (x, y)."""
        self._check_bounds(x, y)
        self._types[y, x] = tile_type
        self._active[y, x] = active

    def set_tile_type(self, x: int, y: int, tile_type: TileType) -> None:
        """Change the tile type at (x, y), keeping its active flag."""
        self._check_bounds(x, y)
        self._types[y, x] = tile_type

    def _check_bounds(self, x: int, y: int) -> None:
        # Negative indices would silently wrap in numpy
        if not self.in_bounds(x, y):
            raise TileOutOfBoundsError(x, y, self.width, self.height)

    # --- Whole-grid operations ---

    def count(self, tile_type: TileType) -> int:
        """Count cells holding tile_type, active or not."""
        return int(np.count_nonzero(self._types == tile_type))

    def reset(self) -> None:
        """Restore the grid to all-Air, inactive."""
        self._types.fill(TileType.AIR)
        self._active.fill(False)

    def to_bytes(self) -> bytes:
        """Serialize (type, active) per cell in row-major order."""
        packed = np.empty((self.height, self.width, 2), dtype=np.uint8)
        packed[..., 0] = self._types
        packed[..., 1] = self._active
        return packed.tobytes()
