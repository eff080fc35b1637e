"""
Spatial geometry module for cellviz.

This module turns cell corners into polygons that render correctly on an
equirectangular (longitude/latitude) map:

1. **great_circle.great_circle**: Interpolates one cell edge as a
   great-circle arc, split at the antimeridian when it crosses it.

2. **cell_boundary.cell_ring**: Corrects pole corners, seam sign
   ambiguity, interpolation artifacts and antimeridian crossings, and
   assembles the four arcs into one closed ring.

Callers normally go through nsidc.cellviz.features, which pairs each ring
with the cell's level, token and center.
"""

__all__ = []
