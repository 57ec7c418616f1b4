"""Seeded terrain generation stages.

Each stage is a pure or grid-mutating function driven by its own seeded
generator; generator.py fixes their order.
"""

from .den import DragonDenInfo, carve_dragon_den, den_info
from .generator import (
    STAGE_NAMES,
    STAGES,
    GenerationContext,
    generate,
    run_pipeline,
)
from .surface import build_surface_profile
from .validation import ValidationResult, validate_world

__all__ = [
    "DragonDenInfo",
    "GenerationContext",
    "STAGES",
    "STAGE_NAMES",
    "ValidationResult",
    "build_surface_profile",
    "carve_dragon_den",
    "den_info",
    "generate",
    "run_pipeline",
    "validate_world",
]
