import numpy as np
import pytest

from rivl_import import collect_meshes, format_tree, import_rivl, walk
from rivl_import.cli import main
from rivl_import.scene_graph.sg_classes import Group, Mesh, Transform

from conftest import SCENE, scene_with


def test_collect_meshes_accumulates_transforms(write_scene):
    with import_rivl(write_scene(SCENE)) as world:
        instances = collect_meshes(world)
        assert len(instances) == 2
        (mesh_a, m_a), (mesh_b, m_b) = instances
        assert mesh_a is mesh_b is world.nodes[3]
        assert np.allclose(m_a, np.identity(4))
        assert np.allclose(m_b[:3, 3], [5.0, 6.0, 7.0])


def test_walk_from_transform_composes_matrices():
    mesh = Mesh()
    inner = Transform.from_values([1, 0, 0, 0, 1, 0, 0, 0, 1, 1, 0, 0], node=mesh)
    outer = Transform.from_values([2, 0, 0, 0, 2, 0, 0, 0, 2, 0, 0, 0], node=inner)

    seen = []

    class Visitor:
        def visit_mesh(self, node, transform):
            seen.append(transform)

    walk(None, Visitor(), node=outer)
    assert len(seen) == 1
    # outer scales the inner translation
    assert np.allclose(seen[0] @ [0, 0, 0, 1], [2, 0, 0, 1])


def test_walk_skips_absent_children_and_cycles():
    group = Group()
    group.children = [None, group, Mesh()]
    visited = []

    class Visitor:
        def visit_group(self, node, transform):
            visited.append(node)

        def visit_mesh(self, node, transform):
            visited.append(node)

    walk(None, Visitor(), node=group)
    assert visited == [group, group.children[2]]


def test_walk_without_root_does_nothing(write_scene):
    with import_rivl(write_scene(scene_with("<Material/>"))) as world:
        assert collect_meshes(world) == []


def test_format_tree(write_scene):
    with import_rivl(write_scene(SCENE)) as world:
        text = format_tree(world)
    lines = text.splitlines()
    assert lines[0].startswith("Group(#5")
    assert any(line.strip().startswith("Transform(#4") for line in lines)
    assert any("uses Material(#0" in line for line in lines)


def test_cli_summary(write_scene, capsys):
    path = write_scene(SCENE)
    assert main([str(path), "--tree"]) == 0
    out = capsys.readouterr().out
    assert "declarations: 7" in out
    assert "root: Group(#5" in out
    assert "Diagnostics:" in out
    assert "Scene:" in out


def test_cli_reports_import_errors(write_scene, capsys):
    path = write_scene(scene_with('<Mesh><vertex num="4"/></Mesh>'))
    assert main([str(path)]) == 1
    assert "error:" in capsys.readouterr().err
    assert main([str(path), "--profile", "lenient"]) == 0


def test_cli_strict_flag(write_scene):
    path = write_scene(scene_with('<Material><param name="x" type="float">1.0f</param></Material>'))
    assert main([str(path)]) == 0
    assert main([str(path), "--strict"]) == 1


def test_cli_missing_file(tmp_path):
    with pytest.raises(SystemExit):
        main([str(tmp_path / "missing.rivl")])
