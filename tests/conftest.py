import numpy as np
import pytest


VERTS = np.array([[0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0]], dtype="<f4")
NORMALS = np.array([[0, 0, 1]] * 4, dtype="<f4")
UVS = np.array([[0, 0], [1, 0], [1, 1], [0, 1]], dtype="<f4")
PRIMS = np.array([[0, 1, 2, 0], [0, 2, 3, 0]], dtype="<i4")

# vertex @ 0 (48 bytes), normal @ 48 (48), texcoord @ 96 (32), prim @ 128 (32)
BLOB = VERTS.tobytes() + NORMALS.tobytes() + UVS.tobytes() + PRIMS.tobytes()

SCENE = """<BGFscene>
  <Material name="red" type="OBJMaterial">
    <param name="kd" type="float3">1.0 2.0 3.0</param>
    <param name="metallic" type="int">7</param>
  </Material>
  <Texture2D ofs="0" width="2" height="2" channels="4" depth="1" format="RGBA"/>
  <Material name="blue">
    <param name="ns" type="float">10</param>
  </Material>
  <Mesh>
    <vertex ofs="0" num="4"/>
    <normal ofs="48" num="4"/>
    <texcoord ofs="96" num="4"/>
    <prim ofs="128" num="2"/>
    <materiallist>0 2 0</materiallist>
  </Mesh>
  <Transform child="3">
    1 0 0
    0 1 0
    0 0 1
    5 6 7
  </Transform>
  <Group>3 4</Group>
  <Transform child="5">2 0 0 0 2 0 0 0 2 0 0 0</Transform>
</BGFscene>
"""


def scene_with(*declarations):
    """Wrap declaration markup in a BGFscene element."""
    return "<BGFscene>\n" + "\n".join(declarations) + "\n</BGFscene>\n"


@pytest.fixture
def write_scene(tmp_path):
    """Factory writing a markup file and its .bin companion; returns the markup path."""

    def _write(markup, blob=BLOB, name="scene.rivl"):
        path = tmp_path / name
        path.write_text(markup)
        (tmp_path / (name + ".bin")).write_bytes(blob)
        return path

    return _write
