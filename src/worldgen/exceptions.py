"""Custom exceptions for world generation."""


class WorldGenError(Exception):
    """Base exception for world generation errors."""

    pass


class TileOutOfBoundsError(WorldGenError, IndexError):
    """Raised when a tile coordinate lies outside the grid."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(
            f"Tile ({x}, {y}) is outside the {width}x{height} world"
        )
        self.x = x
        self.y = y


class UnknownStageError(WorldGenError):
    """Raised when a pipeline stage name is not recognised."""

    pass


class ConfigError(WorldGenError):
    """Raised when a generation config file or preset is invalid."""

    pass
