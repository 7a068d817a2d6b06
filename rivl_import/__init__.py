"""Importer for RIVL scene models (BGFscene markup + binary companion).

    from rivl_import import import_rivl

    with import_rivl("scene.rivl") as world:
        print(world.summary())
"""

__version__ = "0.1.0"

from .exceptions import (
    BlobError, ContractViolationError, FormatError, KindMismatchError, RivlError,
)
from .import_profiles import ImportOptions, get_profile, register_profile
from .importer.import_rivl import (
    ImportContext, collect_meshes, import_rivl, import_rivl_document,
)
from .rivl_format.rivl_blob import BlobProvider
from .rivl_format.rivl_document import DocElement, parse_document, parse_document_string
from .scene_graph.sg_classes import Diagnostic, Group, Material, Mesh, Transform, World
from .scene_graph.sg_table import NodeTable
from .scene_graph.sg_walk import format_tree, walk

__all__ = [
    "BlobError", "ContractViolationError", "FormatError", "KindMismatchError",
    "RivlError", "ImportOptions", "get_profile", "register_profile",
    "ImportContext", "collect_meshes", "import_rivl", "import_rivl_document",
    "BlobProvider", "DocElement", "parse_document", "parse_document_string",
    "Diagnostic", "Group", "Material", "Mesh", "Transform", "World",
    "NodeTable", "format_tree", "walk",
]
