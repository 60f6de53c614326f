"""
Geometry Infrastructure Module

Exports:
    - ShapelyGeometryKernel: GeometryKernelProtocol backed by shapely
"""

from .shapely_geometry_kernel import ShapelyGeometryKernel

__all__ = ["ShapelyGeometryKernel"]
