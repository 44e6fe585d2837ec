#!/usr/bin/env python3
"""
Generate a realm map and save it as a PNG.

This runs the full pipeline:
1. Blue-noise Voronoi tessellation
2. Mainland selection
3. Regions, then countries inside each region
4. Country border extraction

Usage:
    python generate_sample_maps.py [seed]

If no seed is provided, the REALMGEN_SEED setting is used.
"""

import sys
from pathlib import Path
sys.path.append(str(Path(__file__).parent))

from py_realmgen.config import settings
from py_realmgen.core.map_generator import MapGenerator
from py_realmgen.render.matplotlib_renderer import MatplotlibRenderer
from py_realmgen.utils.log_config import configure_logging


def create_map_with_full_pipeline(seed, region_count=5, countries_per_region=3,
                                  min_tiles_region=30, min_tiles_country=10):
    """Generate one map and write it to the output directory."""

    print(f"\nGenerating realm map with seed '{seed}'...")
    print(f"  Rectangle: ({settings.map_x}, {settings.map_y}) "
          f"{settings.map_width}x{settings.map_height}")
    print(f"  Canvas width: {settings.canvas_width}")

    canvas_width = max(settings.canvas_width, settings.map_x * 2 + settings.map_width)
    renderer = MatplotlibRenderer(canvas_width, settings.canvas_height)
    generator = MapGenerator(
        settings.map_x,
        settings.map_y,
        settings.map_width,
        settings.map_height,
        settings.canvas_width,
        seed=seed,
        renderer=renderer,
    )

    result = generator.create_map(region_count, countries_per_region,
                                  min_tiles_region, min_tiles_country)

    print(f"  Tiles: {len(result.tessellation.tiles)} "
          f"({len(result.tessellation.discarded)} degenerate cells dropped)")
    if result.empty:
        print("  No mainland could be carved; only the ocean was drawn")
    else:
        print(f"  Mainland: {len(result.mainland)} tiles")
        for i, (region, countries) in enumerate(zip(result.regions, result.countries)):
            sizes = ", ".join(str(len(c)) for c in countries)
            print(f"    Region {i + 1}: {len(region)} tiles -> countries [{sizes}]")

    output_path = Path(settings.output_dir) / f"realm_{seed}.png"
    renderer.save(output_path)
    renderer.close()
    print(f"  Saved {output_path}")
    return result


if __name__ == "__main__":
    configure_logging(settings.log_level, settings.log_format)
    seed = sys.argv[1] if len(sys.argv) > 1 else settings.seed
    create_map_with_full_pipeline(seed)
