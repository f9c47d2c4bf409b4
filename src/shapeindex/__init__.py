"""
shapeindex - Scrap Mechanic mod and shape index

Discovers vanilla, local and workshop mods and indexes the blocks and parts
they define by uuid.
"""

__version__ = "0.1.0"
__author__ = "shapeindex contributors"

from shapeindex.mods import PackageRegistry, Package, load_package, parse_shapesets
from shapeindex.paths import PathResolver
