"""Scene graph node classes produced by the RIVL importer.

Node kinds:
- Material: named parameter set (scalars and small vectors)
- Transform: affine transform over exactly one child node
- Mesh: zero-copy vertex/normal/texcoord/triangle views plus materials
- Group: ordered list of child nodes
- World: result of an import; owns the node table and the blob mapping

Every node carries a ``kind`` tag. Code that needs a particular kind
asks with is_kind() instead of relying on isinstance checks scattered
through the importer.
"""

import numpy as np


KIND_MATERIAL = "Material"
KIND_TRANSFORM = "Transform"
KIND_MESH = "Mesh"
KIND_GROUP = "Group"


def kind_of(node):
    """Return the kind tag of a table entry ("placeholder" for None)."""
    if node is None:
        return "placeholder"
    return getattr(node, "kind", type(node).__name__)


class Node:
    """Base class for scene nodes."""

    kind = "Node"

    def __init__(self):
        self.index = -1  # node table slot, set on append

    def is_kind(self, kind):
        return self.kind == kind

    def __repr__(self):
        return f"{self.kind}(#{self.index})"


class Material(Node):
    """Material declaration: name, type tag and typed parameters.

    ``params`` maps parameter name to a float, an int, or a tuple of 2-4
    floats/ints. ``ref_count`` counts the meshes that adopted the material.
    """

    kind = KIND_MATERIAL

    def __init__(self, name="", mat_type=""):
        super().__init__()
        self.name = name
        self.type = mat_type
        self.params = {}
        self.ref_count = 0

    def set_param(self, name, value):
        self.params[name] = value

    def ref_inc(self):
        self.ref_count += 1
        return self.ref_count

    def __repr__(self):
        return (
            f"Material(#{self.index}, {self.name!r}, type={self.type!r}, "
            f"params={len(self.params)}, refs={self.ref_count})"
        )


class Transform(Node):
    """Affine transform applied to a single child node.

    ``linear`` holds the three axis vectors (vx, vy, vz) in file order and
    ``translation`` the offset p, so a point maps to
    vx*x + vy*y + vz*z + p.
    """

    kind = KIND_TRANSFORM

    def __init__(self, node=None, linear=None, translation=(0.0, 0.0, 0.0)):
        super().__init__()
        self.node = node
        if linear is None:
            linear = ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0))
        self.linear = linear
        self.translation = translation

    @classmethod
    def from_values(cls, values, node=None):
        """Build from the 12 floats of a Transform body."""
        v = tuple(values)
        return cls(
            node=node,
            linear=(v[0:3], v[3:6], v[6:9]),
            translation=v[9:12],
        )

    def matrix(self):
        """Return the transform as a 4x4 matrix (column-vector convention)."""
        m = np.identity(4)
        for col, axis in enumerate(self.linear):
            m[:3, col] = axis
        m[:3, 3] = self.translation
        return m

    def __repr__(self):
        return f"Transform(#{self.index}, child={self.node!r})"


class Mesh(Node):
    """Triangle mesh whose arrays are views into the blob mapping.

    ``vertex`` and ``normal`` are (N, 3) float32, ``texcoord`` (N, 2)
    float32 and ``triangle`` (N, 4) int32 where the fourth column is
    padding from the file layout. Any of them may be None.
    """

    kind = KIND_MESH

    def __init__(self):
        super().__init__()
        self.vertex = None
        self.normal = None
        self.texcoord = None
        self.triangle = None
        self.material_list = []

    @property
    def num_vertices(self):
        return 0 if self.vertex is None else len(self.vertex)

    @property
    def num_triangles(self):
        return 0 if self.triangle is None else len(self.triangle)

    def triangles(self):
        """Return the (N, 3) vertex index triples, without the padding column."""
        if self.triangle is None:
            return np.zeros((0, 3), dtype=np.int32)
        return self.triangle[:, :3]

    def bounds(self):
        """Return ((min_x, min_y, min_z), (max_x, max_y, max_z)), or None if empty."""
        if self.vertex is None or len(self.vertex) == 0:
            return None
        lo = self.vertex.min(axis=0)
        hi = self.vertex.max(axis=0)
        return tuple(float(x) for x in lo), tuple(float(x) for x in hi)

    def __repr__(self):
        return (
            f"Mesh(#{self.index}, verts={self.num_vertices}, "
            f"tris={self.num_triangles}, materials={len(self.material_list)})"
        )


class Group(Node):
    """Ordered list of child nodes. Entries may be None for absent children."""

    kind = KIND_GROUP

    def __init__(self, children=None):
        super().__init__()
        self.children = children if children is not None else []

    def __repr__(self):
        return f"Group(#{self.index}, children={len(self.children)})"


class Diagnostic:
    """A non-fatal anomaly recorded during import."""

    __slots__ = ('severity', 'index', 'element', 'message')

    def __init__(self, severity, index, element, message):
        self.severity = severity  # "warning" or "error"
        self.index = index        # node table slot, or None
        self.element = element    # element name the anomaly belongs to
        self.message = message

    def __repr__(self):
        where = f"#{self.index} " if self.index is not None else ""
        return f"[{self.severity}] {where}{self.element}: {self.message}"


class World:
    """Result of an import.

    Holds the root node (the last Mesh or Group declared, or None), the
    node table, the diagnostics collected on the way and the blob mapping
    that backs every Mesh array. Keep the World (or the blob) alive for as
    long as any mesh data is in use.
    """

    def __init__(self, path=None, nodes=None, blob=None):
        self.path = path
        self.root = None
        self.nodes = nodes
        self.blob = blob
        self.diagnostics = []

    @property
    def warnings(self):
        return [d for d in self.diagnostics if d.severity == "warning"]

    @property
    def errors(self):
        return [d for d in self.diagnostics if d.severity == "error"]

    def close(self):
        """Release the blob mapping reference held by this World."""
        if self.blob is not None:
            self.blob.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def summary(self):
        """Return a dict of node counts per kind plus root/diagnostic info."""
        counts = {}
        if self.nodes is not None:
            for node in self.nodes:
                kind = kind_of(node)
                counts[kind] = counts.get(kind, 0) + 1
        return {
            'path': self.path,
            'declarations': len(self.nodes) if self.nodes is not None else 0,
            'kinds': counts,
            'root': repr(self.root) if self.root is not None else None,
            'warnings': len(self.warnings),
            'errors': len(self.errors),
        }

    def __repr__(self):
        count = len(self.nodes) if self.nodes is not None else 0
        return f"World({self.path!r}, nodes={count}, root={self.root!r})"
