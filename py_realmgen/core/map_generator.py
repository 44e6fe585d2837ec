"""
Realm map generation pipeline.

Stages:
1. Blue-noise Voronoi tessellation of the map rectangle
2. Mainland selection (bump function + largest connected component)
3. Region partition of the mainland
4. Country partition inside every region
5. Border extraction for rendering
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

import structlog

from .adjacency import AdjacencyGraph
from .alea_prng import AleaPRNG
from .borders import boundary_edges
from .geometry import BBox, Edge
from .landmass import build_mainland
from .partition import partition_into_connected_groups
from .tessellation import Tessellation, tessellate
from ..config.options import (
    LandmassOptions,
    MapOptions,
    RenderOptions,
    SeedingOptions,
    TessellationOptions,
)
if TYPE_CHECKING:
    from ..render.base import Renderer

logger = structlog.get_logger()


@dataclass
class MapResult:
    """Static partition produced by one create_map call."""
    tessellation: Tessellation
    mainland: List[int] = field(default_factory=list)
    regions: List[List[int]] = field(default_factory=list)
    countries: List[List[List[int]]] = field(default_factory=list)
    region_borders: List[List[Edge]] = field(default_factory=list)
    country_borders: List[List[List[Edge]]] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.mainland


class MapGenerator:
    """
    Generates a mainland split into regions and countries.

    Args:
        x0: Left edge of the map rectangle
        y0: Top edge of the map rectangle
        width: Map rectangle width
        height: Map rectangle height
        canvas_width: Canvas width; the bump function radius is a third of it
        seed: Seed for the single random source of the run
        renderer: Optional draw-call sink
        tessellation_options: Site sampling density
        landmass_options: Bump function shape
        seeding_options: Seed center placement
        render_options: Colors passed to the renderer
    """

    def __init__(self, x0: float, y0: float, width: float, height: float,
                 canvas_width: float, seed: str = "default",
                 renderer: Optional["Renderer"] = None,
                 tessellation_options: Optional[TessellationOptions] = None,
                 landmass_options: Optional[LandmassOptions] = None,
                 seeding_options: Optional[SeedingOptions] = None,
                 render_options: Optional[RenderOptions] = None):
        self.bbox = BBox(x0, y0, width, height)
        self.canvas_width = canvas_width
        self.pixel_scale = canvas_width / 3
        self.map_center = self.bbox.center
        self.seed = seed
        self.prng = AleaPRNG(seed)
        self.renderer = renderer
        self.tessellation_options = tessellation_options or TessellationOptions()
        self.landmass_options = landmass_options or LandmassOptions()
        self.seeding_options = seeding_options or SeedingOptions()
        self.render_options = render_options or RenderOptions()

    def create_map(self, region_count: int = 5, countries_per_region: int = 3,
                   min_tiles_region: int = 30, min_tiles_country: int = 10) -> MapResult:
        """
        Run the whole pipeline once.

        Returns:
            MapResult; empty (no regions) when no mainland could be carved
        """
        options = MapOptions(
            region_count=region_count,
            countries_per_region=countries_per_region,
            min_tiles_region=min_tiles_region,
            min_tiles_country=min_tiles_country,
        )
        logger.info("Creating map", seed=self.seed, **options.model_dump())

        self._draw_frame()
        tessellation = tessellate(self.bbox, self.prng, self.tessellation_options)
        self._draw_ocean(tessellation)
        result = MapResult(tessellation=tessellation)

        tiles = tessellation.tiles
        adjacency = AdjacencyGraph.build(tiles)
        result.mainland = build_mainland(tiles, adjacency, self.map_center,
                                         self.pixel_scale, self.landmass_options)
        if result.empty:
            logger.warning("No mainland, stopping early", tiles=len(tiles))
            return result

        result.regions = partition_into_connected_groups(
            tiles, result.mainland, options.region_count, options.min_tiles_region,
            self.prng, adjacency=adjacency, seeding=self.seeding_options, frame=self.bbox,
        )

        for i, region in enumerate(result.regions):
            countries = partition_into_connected_groups(
                tiles, region, options.countries_per_region, options.min_tiles_country,
                self.prng, adjacency=adjacency, seeding=self.seeding_options, frame=self.bbox,
            )
            borders = [boundary_edges(tiles, country) for country in countries]
            result.countries.append(countries)
            result.country_borders.append(borders)
            result.region_borders.append(boundary_edges(tiles, region))
            self._draw_region(tessellation, i, region, borders)

        logger.info("Map created",
                    tiles=len(tiles), mainland=len(result.mainland),
                    regions=[len(r) for r in result.regions],
                    countries=[[len(c) for c in cs] for cs in result.countries])
        return result

    def _draw_frame(self) -> None:
        if self.renderer is None:
            return
        opts = self.render_options
        self.renderer.fill_rect(self.bbox.x0, self.bbox.y0, self.bbox.width,
                                self.bbox.height, opts.ocean_color)
        self.renderer.stroke_rect(self.bbox.x0, self.bbox.y0, self.bbox.width,
                                  self.bbox.height, opts.frame_color, opts.frame_width)

    def _draw_ocean(self, tessellation: Tessellation) -> None:
        if self.renderer is None:
            return
        for tile in tessellation.tiles:
            self.renderer.fill_tile(tile, self.render_options.ocean_color)

    def _draw_region(self, tessellation: Tessellation, index: int, region: List[int],
                     country_borders: List[List[Edge]]) -> None:
        if self.renderer is None:
            return
        opts = self.render_options
        color = opts.palette[index % len(opts.palette)]
        for idx in region:
            self.renderer.fill_tile(tessellation.tiles[idx], color)
        for edges in country_borders:
            self.renderer.stroke_edges(edges, opts.border_color, opts.border_width)
