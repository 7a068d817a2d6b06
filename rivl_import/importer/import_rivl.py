"""RIVL scene importer.

Reads a RIVL model, i.e. a BGFscene markup file ``path`` plus its binary
companion ``path + ".bin"``, and returns a World holding the scene graph.

    world = import_rivl("scene.rivl")
    for mesh, matrix in collect_meshes(world):
        ...
    world.close()

Mesh arrays are views into the memory-mapped .bin file. The World keeps
the mapping alive; do not use mesh data after dropping it.
"""

import logging
import os

from ..import_profiles import resolve_options
from ..rivl_format.rivl_blob import BlobProvider
from ..rivl_format.rivl_constants import BIN_SUFFIX
from ..rivl_format.rivl_document import parse_document
from ..scene_graph.sg_classes import Diagnostic, World, kind_of
from ..scene_graph.sg_table import NodeTable
from ..scene_graph.sg_walk import MeshCollector, walk
from .declaration_parser import parse_declarations

_log = logging.getLogger("rivl_import.importer")


class ImportContext:
    """State shared by every declaration builder during one import."""

    def __init__(self, blob, options, nodes=None):
        self.blob = blob
        self.options = options
        self.nodes = nodes if nodes is not None else NodeTable()
        self.diagnostics = []
        self.last_node = None
        self._index = None    # declaration being parsed
        self._element = None

    def begin(self, index, element):
        self._index = index
        self._element = element

    def warn(self, index, element, message):
        _log.warning("#%s %s: %s", index, element, message)
        self.diagnostics.append(Diagnostic("warning", index, element, message))

    def error(self, index, element, message):
        _log.error("#%s %s: %s", index, element, message)
        self.diagnostics.append(Diagnostic("error", index, element, message))

    def lenient_number(self, token, value):
        """Called by the value decoder when a token only partly parsed."""
        self.warn(
            self._index, self._element,
            f"malformed number {token!r} read as {value!r}",
        )

    def log_declaration(self, index, node):
        _log.debug("#%s -> %s", index, kind_of(node))


def bin_path_for(path):
    """Return the path of the binary companion of a RIVL markup file."""
    return os.fspath(path) + BIN_SUFFIX


def import_rivl_document(document, blob, options=None, profile=None, path=None):
    """Build a World from an already parsed BGFscene document.

    Args:
        document: root DocElement (see rivl_document.parse_document)
        blob: open BlobProvider for the binary companion
        options: ImportOptions, or None to use ``profile``
        profile: name of a registered options profile (default "default")
        path: markup path, for reporting only

    Returns:
        World whose ``blob`` is ``blob``
    """
    opts = resolve_options(options, profile)
    ctx = ImportContext(blob, opts)
    parse_declarations(ctx, document)

    world = World(path, nodes=ctx.nodes, blob=blob)
    world.root = ctx.last_node
    world.diagnostics = ctx.diagnostics
    return world


def import_rivl(path, options=None, profile=None):
    """Import a RIVL model.

    Args:
        path: path to the BGFscene markup file; the binary file is path + ".bin"
        options: ImportOptions, or None to use ``profile``
        profile: name of a registered options profile (default "default")

    Returns:
        World

    Raises:
        BlobError: the .bin file cannot be opened or sized
        FormatError: the markup is not a well-formed RIVL scene
        ContractViolationError: a declaration breaks a format guarantee
            (only under the "raise" policy)
    """
    opts = resolve_options(options, profile)
    path = os.fspath(path)

    blob = BlobProvider(bin_path_for(path), writable=opts.writable_blob).open()
    try:
        document = parse_document(path)
        world = import_rivl_document(document, blob, opts, path=path)
    except BaseException:
        blob.close()
        raise

    _log.info(
        "imported %s: %d declarations, root=%s, %d diagnostics",
        path, len(world.nodes),
        kind_of(world.root) if world.root is not None else None,
        len(world.diagnostics),
    )
    return world


def collect_meshes(world):
    """Return (mesh, 4x4 world matrix) for every mesh instance under the root."""
    collector = MeshCollector()
    walk(world, collector)
    return collector.instances
