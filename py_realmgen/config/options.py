"""Option models for each generation stage."""

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_PALETTE = [
    "#41E0A2",
    "#E0CF5F",
    "#CD37E0",
    "#4B4861",
    "#2F5F34",
    "#664733",
    "#99DB2C",
    "#F3DA9D",
    "#E05151",
    "#5570A6",
]


class MapOptions(BaseModel):
    """Top-level partition targets for one create_map call."""

    region_count: int = Field(default=5, gt=0, description="Number of regions on the mainland")
    countries_per_region: int = Field(
        default=3, gt=0, description="Number of countries inside every region"
    )
    min_tiles_region: int = Field(default=30, gt=0, description="Minimum tiles per region")
    min_tiles_country: int = Field(default=10, gt=0, description="Minimum tiles per country")


class TessellationOptions(BaseModel):
    """Poisson-disk density knobs for the base tessellation."""

    min_distance: float = Field(default=20.0, gt=0, description="Minimum site spacing")
    max_distance: float = Field(default=40.0, gt=0, description="Maximum parent-child site spacing")
    tries: int = Field(default=10, gt=0, description="Candidates per active sample")

    @model_validator(mode="after")
    def _check_band(self) -> "TessellationOptions":
        if self.max_distance < self.min_distance:
            raise ValueError("max_distance must be >= min_distance")
        return self


class LandmassOptions(BaseModel):
    """Shape of the radial bump function that carves the mainland."""

    bumps: int = Field(default=3, ge=1, le=6, description="Number of coastline lobes")
    start_angle: float = Field(default=0.0, description="Rotational phase of the lobes")
    scale: float = Field(default=1.0, gt=0, description="Radius multiplier")


class SeedingOptions(BaseModel):
    """How group seed centers are placed before the flood fill."""

    strategy: Literal["hull", "ellipse"] = Field(
        default="hull", description="hull: blue noise inside the convex hull; ellipse: evenly on an ellipse"
    )
    poisson_tries: int = Field(default=30, gt=0, description="Poisson candidates per active sample")
    rejection_attempts: int = Field(
        default=5000, ge=0, description="Uniform rejection sampling budget for topping up"
    )
    fallback_jitter: float = Field(
        default=80.0, ge=0, description="Half-width of the jitter box around the fallback center"
    )
    ellipse_radius: float = Field(
        default=150.0, gt=0, description="Horizontal radius used by the ellipse strategy"
    )


class RenderOptions(BaseModel):
    """Colors handed to the rendering step."""

    model_config = ConfigDict(frozen=True)

    palette: List[str] = Field(
        default_factory=lambda: list(DEFAULT_PALETTE),
        min_length=1,
        description="Region fill colors, indexed by region number modulo length",
    )
    ocean_color: str = Field(default="#6495ED", description="Background and ocean tile fill")
    frame_color: str = Field(default="black", description="Map frame stroke color")
    frame_width: float = Field(default=1.0, gt=0, description="Map frame stroke width")
    border_color: str = Field(default="red", description="Country border stroke color")
    border_width: float = Field(default=2.0, gt=0, description="Country border stroke width")
