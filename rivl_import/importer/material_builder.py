"""Build Material nodes from RIVL Material declarations.

    <Material name="steel" type="OBJMaterial">
        <param name="kd" type="float3">0.5 0.5 0.5</param>
        <param name="ns" type="float">10</param>
        <param name="map_kd" type="int">0</param>
        <textures num="1">3</textures>
    </Material>

Texture bindings (``map_*`` int parameters and the <textures> list) are
not supported yet: they are reported as warnings and not stored.
"""

from ..rivl_format.rivl_constants import MAT_PARAM, MAT_TEXTURES, TEXTURE_SLOT_MARKER
from ..rivl_format.rivl_values import decode_value, parse_int
from ..scene_graph.sg_classes import Material


def build_material(ctx, elem, index):
    """Create a Material from a <Material> element.

    Args:
        ctx: ImportContext of the running import
        elem: DocElement for the declaration
        index: node table slot the material will occupy

    Returns:
        Material
    """
    mat = Material()

    # Attributes first, in document order; both are optional.
    for attr_name, value in elem.attributes:
        if attr_name == "name":
            mat.name = value
        elif attr_name == "type":
            mat.type = value

    for child in elem.children:
        if child.name == MAT_PARAM:
            _read_param(ctx, mat, child, index)
        elif child.name == MAT_TEXTURES:
            _read_textures(ctx, mat, child, index)

    return mat


def _read_param(ctx, mat, child, index):
    param_name = ""
    param_type = ""
    for attr_name, value in child.attributes:
        if attr_name == "name":
            param_name = value
        elif attr_name == "type":
            param_type = value

    if param_type == "int" and TEXTURE_SLOT_MARKER in param_name:
        ctx.warn(
            index, MAT_PARAM,
            f"texture parameter {param_name!r} on material {mat.name!r} ignored "
            f"(textures not supported yet)",
        )
        return

    value = decode_value(
        param_type, child.text, ctx.options.strict_numbers, ctx.lenient_number
    )
    mat.set_param(param_name, value)


def _read_textures(ctx, mat, child, index):
    num = None
    declared = child.get("num")
    if declared is not None:
        num = parse_int(declared, ctx.options.strict_numbers, ctx.lenient_number)
    ctx.warn(
        index, MAT_TEXTURES,
        f"texture list on material {mat.name!r} ignored "
        f"(declared num={num}, textures not supported yet)",
    )
