"""
Truchet Hex Tiler - Utilities Package
ODD-Q coordinate system helpers.
"""
from .hex_parity import EDGE_COUNT, get_hex_neighbors_oddq, opposite_edge

__all__ = ['EDGE_COUNT', 'get_hex_neighbors_oddq', 'opposite_edge']
