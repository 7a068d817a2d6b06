"""Depth-first traversal of an imported RIVL scene.

The same node may hang under several parents (a mesh instanced by many
transforms), so each path is visited separately. An ancestor set guards
against cycles; the format only allows backward references so none
should occur, but a hand-built graph could still contain one.
"""

import numpy as np

from .sg_classes import KIND_GROUP, KIND_MESH, KIND_TRANSFORM


def walk(world, visitor, node=None, parent_transform=None):
    """Walk the scene from ``node`` (default: the world root) calling visitor methods.

    Visitor methods are all optional:
        visit_transform(node, accumulated_matrix)
        visit_group(node, accumulated_matrix)
        visit_mesh(node, accumulated_matrix)

    Args:
        world: World returned by import_rivl (may be None when node is given)
        visitor: object with visit_* methods
        node: starting node
        parent_transform: 4x4 numpy matrix to start from (identity if None)
    """
    if node is None:
        node = world.root if world is not None else None
    if node is None:
        return
    if parent_transform is None:
        parent_transform = np.identity(4)
    _visit_node(node, visitor, parent_transform, set())


def _visit_node(node, visitor, parent_transform, ancestors):
    if node is None:
        return
    key = id(node)
    if key in ancestors:
        return
    ancestors.add(key)

    if node.is_kind(KIND_TRANSFORM):
        local = parent_transform @ node.matrix()
        if hasattr(visitor, 'visit_transform'):
            visitor.visit_transform(node, local)
        _visit_node(node.node, visitor, local, ancestors)

    elif node.is_kind(KIND_GROUP):
        if hasattr(visitor, 'visit_group'):
            visitor.visit_group(node, parent_transform)
        for child in node.children:
            _visit_node(child, visitor, parent_transform, ancestors)

    elif node.is_kind(KIND_MESH):
        if hasattr(visitor, 'visit_mesh'):
            visitor.visit_mesh(node, parent_transform)

    ancestors.discard(key)


class MeshCollector:
    """Visitor that records every mesh instance with its world matrix."""

    def __init__(self):
        self.instances = []  # list of (mesh, 4x4 matrix)

    def visit_mesh(self, mesh, transform):
        self.instances.append((mesh, transform))


def format_tree(world, node=None):
    """Return an indented text rendering of the scene below ``node``."""
    lines = []
    start = node if node is not None else world.root
    _format_node(start, 0, lines, set())
    return "\n".join(lines)


def _format_node(node, depth, lines, ancestors):
    indent = "  " * depth
    if node is None:
        lines.append(f"{indent}<absent>")
        return
    if id(node) in ancestors:
        lines.append(f"{indent}[cycle -> {node!r}]")
        return
    lines.append(f"{indent}{node!r}")
    ancestors.add(id(node))
    if node.is_kind(KIND_TRANSFORM):
        _format_node(node.node, depth + 1, lines, ancestors)
    elif node.is_kind(KIND_GROUP):
        for child in node.children:
            _format_node(child, depth + 1, lines, ancestors)
    elif node.is_kind(KIND_MESH):
        for mat in node.material_list:
            lines.append(f"{indent}  uses {mat!r}")
    ancestors.discard(id(node))
