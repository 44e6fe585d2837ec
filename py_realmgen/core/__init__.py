"""
Core map generation functionality.
"""

from .alea_prng import AleaPRNG
from .adjacency import AdjacencyGraph
from .borders import boundary_edges
from .connectivity import is_connected, largest_component, split_components
from .geometry import BBox, Edge, Point, Tile
from .landmass import build_mainland, is_land
from .map_generator import MapGenerator, MapResult
from .partition import partition_into_connected_groups
from .rebalance import RebalanceResult, Transfer, rebalance
from .region_growth import GrowthResult, grow_regions
from .tessellation import Tessellation, tessellate

__all__ = ['AleaPRNG', 'AdjacencyGraph', 'boundary_edges', 'is_connected',
           'largest_component', 'split_components', 'BBox', 'Edge', 'Point', 'Tile',
           'build_mainland', 'is_land', 'MapGenerator', 'MapResult',
           'partition_into_connected_groups', 'RebalanceResult', 'Transfer', 'rebalance',
           'GrowthResult', 'grow_regions', 'Tessellation', 'tessellate']
