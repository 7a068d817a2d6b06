"""Declaration parser for RIVL scenes.

Walks the children of <BGFscene> in document order. Each child is one
declaration and receives exactly one node table slot, in order:

    text        skipped, no slot
    Texture2D   placeholder (textures not supported yet)
    Material    Material node
    Transform   Transform over an earlier declaration
    Mesh        Mesh node
    Group       Group over earlier declarations
    <other>     placeholder

A node is appended only after its declaration has been fully read, so
a declaration can reference only the ones before it. The world root is
the last Mesh or Group declared.
"""

from ..exceptions import ContractViolationError, FormatError
from ..import_profiles import CONTRACT_RAISE
from ..rivl_format.rivl_constants import (
    DECL_GROUP, DECL_MATERIAL, DECL_MESH, DECL_TEXT, DECL_TEXTURE2D,
    DECL_TRANSFORM, TEXTURE2D_ATTRS, TRANSFORM_TOKEN_COUNT,
)
from ..rivl_format.rivl_values import decode_floats, decode_indices, parse_index
from ..scene_graph.sg_classes import KIND_GROUP, KIND_MESH, Group, Transform
from .material_builder import build_material
from .mesh_builder import build_mesh


def build_texture2d(ctx, elem, index):
    """Texture2D declarations are not supported: record a placeholder."""
    declared = ", ".join(
        f"{name}={elem.get(name)}" for name in TEXTURE2D_ATTRS if elem.has(name)
    )
    ctx.warn(
        index, elem.name,
        "textures not yet implemented, placeholder stored"
        + (f" ({declared})" if declared else ""),
    )
    return None


def build_transform(ctx, elem, index):
    """Create a Transform from a <Transform child="N"> element.

    The body holds twelve floats: the three axis vectors, then the
    translation.
    """
    child_text = elem.get("child")
    if child_text is None:
        raise ContractViolationError("Transform without 'child' attribute", index)
    child_id = parse_index(child_text, ctx.options.strict_numbers, ctx.lenient_number)
    child = ctx.nodes.resolve(child_id, referrer=index)

    try:
        values = decode_floats(
            elem.text, TRANSFORM_TOKEN_COUNT,
            ctx.options.strict_numbers, ctx.lenient_number,
        )
    except FormatError as exc:
        raise FormatError(f"invalid RIVL transform node #{index}: {exc}") from exc

    return Transform.from_values(values, node=child)


def build_group(ctx, elem, index):
    """Create a Group from a <Group> element whose body lists child indices.

    Indices that do not name an earlier declaration become absent (None)
    children rather than failing the import.
    """
    group = Group()
    for child_id in decode_indices(elem.text, ctx.options.strict_numbers, ctx.lenient_number):
        if ctx.nodes.contains(child_id):
            group.children.append(ctx.nodes.get(child_id))
        else:
            ctx.warn(index, elem.name, f"child {child_id} not declared yet, stored as absent")
            group.children.append(None)
    return group


def build_unknown(ctx, elem, index):
    ctx.warn(index, elem.name, "unknown declaration kind, placeholder stored")
    return None


DECLARATION_BUILDERS = {
    DECL_TEXT: None,
    DECL_TEXTURE2D: build_texture2d,
    DECL_MATERIAL: build_material,
    DECL_TRANSFORM: build_transform,
    DECL_MESH: build_mesh,
    DECL_GROUP: build_group,
}


def parse_declarations(ctx, scene):
    """Parse every declaration under the <BGFscene> element ``scene``.

    Fills ctx.nodes and ctx.last_node. Raises FormatError (and, under the
    "raise" policy, ContractViolationError) on the first fatal problem.
    """
    for elem in scene.children:
        if elem.name in DECLARATION_BUILDERS:
            builder = DECLARATION_BUILDERS[elem.name]
            if builder is None:
                continue
        else:
            builder = build_unknown

        index = len(ctx.nodes)
        ctx.begin(index, elem.name)
        try:
            node = builder(ctx, elem, index)
        except ContractViolationError as exc:
            if ctx.options.contract_violations == CONTRACT_RAISE:
                raise
            ctx.error(index, elem.name, f"{exc}; placeholder stored")
            node = None

        ctx.nodes.append(node)
        ctx.log_declaration(index, node)
        if node is not None and (node.is_kind(KIND_MESH) or node.is_kind(KIND_GROUP)):
            ctx.last_node = node
    ctx.begin(None, None)
    return ctx.last_node
