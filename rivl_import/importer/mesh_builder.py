"""Build Mesh nodes from RIVL Mesh declarations.

    <Mesh>
        <vertex ofs="0" num="4"/>
        <normal ofs="48" num="4"/>
        <texcoord ofs="96" num="4"/>
        <prim ofs="128" num="2"/>
        <materiallist>0 2 0</materiallist>
    </Mesh>

Array children bind numpy views straight into the .bin mapping; nothing
is copied. The <materiallist> body is a list of node table indices that
must all name earlier Material declarations.
"""

from ..exceptions import ContractViolationError, FormatError
from ..rivl_format.rivl_constants import DECL_TEXT, MESH_ARRAYS, MESH_MATERIALLIST
from ..rivl_format.rivl_values import decode_indices, parse_int
from ..scene_graph.sg_classes import KIND_MATERIAL, Mesh


def build_mesh(ctx, elem, index):
    """Create a Mesh from a <Mesh> element.

    Args:
        ctx: ImportContext of the running import
        elem: DocElement for the declaration
        index: node table slot the mesh will occupy

    Returns:
        Mesh

    Raises:
        FormatError: a child element of unknown kind
        ContractViolationError: missing ofs/num, array outside the blob,
            material list entry that is not a Material
    """
    mesh = Mesh()
    adopted = []

    for child in elem.children:
        name = child.name
        if name == DECL_TEXT:
            continue
        if name in MESH_ARRAYS:
            attr, record = MESH_ARRAYS[name]
            setattr(mesh, attr, _bind_array(ctx, child, record, index))
        elif name == MESH_MATERIALLIST:
            ids = decode_indices(child.text, ctx.options.strict_numbers, ctx.lenient_number)
            for mat_id in ids:
                adopted.append(ctx.nodes.resolve(mat_id, KIND_MATERIAL, index))
        else:
            raise FormatError(f"unknown child node type {name!r} for mesh node #{index}")

    # Only count references once the whole declaration is known to be good.
    for mat in adopted:
        mat.ref_inc()
        mesh.material_list.append(mat)

    return mesh


def _bind_array(ctx, child, record, index):
    """Return the blob view described by an array child's ofs/num attributes."""
    ofs_text = child.get("ofs")
    num_text = child.get("num")
    if ofs_text is None:
        raise ContractViolationError(f"<{child.name}> without 'ofs' attribute", index)
    if num_text is None:
        raise ContractViolationError(f"<{child.name}> without 'num' attribute", index)

    strict = ctx.options.strict_numbers
    ofs = parse_int(ofs_text, strict, ctx.lenient_number)
    num = parse_int(num_text, strict, ctx.lenient_number)
    if ofs < 0 or num < 0:
        raise ContractViolationError(
            f"<{child.name}> has negative ofs/num ({ofs}, {num})", index
        )
    if ctx.options.validate_blob_ranges and not ctx.blob.in_range(ofs, num, record):
        raise ContractViolationError(
            f"<{child.name}> ofs={ofs} num={num} runs past the end of "
            f"{ctx.blob.filepath} ({ctx.blob.size} bytes)",
            index,
        )
    return ctx.blob.elements_at(ofs, num, record)
