"""Constants for the RIVL scene format."""

# Outermost element of a RIVL markup file
ROOT_ELEMENT = "BGFscene"

# Companion binary file suffix (appended to the full markup path)
BIN_SUFFIX = ".bin"

# Top-level declaration element names
DECL_TEXT = "text"
DECL_TEXTURE2D = "Texture2D"
DECL_MATERIAL = "Material"
DECL_TRANSFORM = "Transform"
DECL_MESH = "Mesh"
DECL_GROUP = "Group"

# Material child elements
MAT_PARAM = "param"
MAT_TEXTURES = "textures"

# Parameter names containing this substring name a texture slot
TEXTURE_SLOT_MARKER = "map_"

# Mesh child elements
MESH_VERTEX = "vertex"
MESH_NORMAL = "normal"
MESH_TEXCOORD = "texcoord"
MESH_PRIM = "prim"
MESH_MATERIALLIST = "materiallist"

# Number of float tokens in a Transform body: 3x3 linear part + translation
TRANSFORM_TOKEN_COUNT = 12

# Characters that separate numeric tokens in element bodies
TOKEN_SEPARATORS = " \t\n\r"

# Record layouts in the .bin file: (numpy dtype, components per record).
# Everything is stored little-endian, 4 bytes per component.
RECORD_VEC3F = ("<f4", 3)
RECORD_VEC2F = ("<f4", 2)
RECORD_VEC4I = ("<i4", 4)

# Mesh array child -> (Mesh attribute, record layout)
MESH_ARRAYS = {
    MESH_VERTEX: ("vertex", RECORD_VEC3F),
    MESH_NORMAL: ("normal", RECORD_VEC3F),
    MESH_TEXCOORD: ("texcoord", RECORD_VEC2F),
    MESH_PRIM: ("triangle", RECORD_VEC4I),
}

# Material parameter type tags -> (python scalar type, token count)
VALUE_TYPES = {
    "float": (float, 1),
    "float2": (float, 2),
    "float3": (float, 3),
    "float4": (float, 4),
    "int": (int, 1),
    "int2": (int, 2),
    "int3": (int, 3),
    "int4": (int, 4),
}

# Texture2D attributes reported when the placeholder is recorded
TEXTURE2D_ATTRS = ("width", "height", "channels", "depth", "format", "ofs")
