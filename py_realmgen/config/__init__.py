"""
Configuration for map generation.
"""

from .config import Settings, settings
from .options import (
    DEFAULT_PALETTE,
    LandmassOptions,
    MapOptions,
    RenderOptions,
    SeedingOptions,
    TessellationOptions,
)

__all__ = ['Settings', 'settings', 'DEFAULT_PALETTE', 'LandmassOptions', 'MapOptions',
           'RenderOptions', 'SeedingOptions', 'TessellationOptions']
