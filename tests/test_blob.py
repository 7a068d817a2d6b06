import numpy as np
import pytest

from rivl_import.exceptions import BlobError
from rivl_import.rivl_format.rivl_blob import BlobProvider
from rivl_import.rivl_format.rivl_constants import RECORD_VEC2F, RECORD_VEC3F, RECORD_VEC4I

from conftest import BLOB, PRIMS, UVS, VERTS


@pytest.fixture
def blob_path(tmp_path):
    path = tmp_path / "scene.rivl.bin"
    path.write_bytes(BLOB)
    return path


def test_missing_file_raises_blob_error(tmp_path):
    provider = BlobProvider(str(tmp_path / "nope.bin"))
    with pytest.raises(BlobError) as info:
        provider.open()
    assert isinstance(info.value, OSError)


def test_elements_at_returns_views(blob_path):
    with BlobProvider(str(blob_path)) as blob:
        assert blob.size == len(BLOB)
        verts = blob.elements_at(0, 4, RECORD_VEC3F)
        uvs = blob.elements_at(96, 4, RECORD_VEC2F)
        prims = blob.elements_at(128, 2, RECORD_VEC4I)
        assert verts.shape == (4, 3)
        assert verts.dtype == np.dtype("<f4")
        assert np.array_equal(verts, VERTS)
        assert np.array_equal(uvs, UVS)
        assert np.array_equal(prims, PRIMS)
        assert np.shares_memory(verts, blob.data)


def test_mapping_is_read_only_by_default(blob_path):
    with BlobProvider(str(blob_path)) as blob:
        assert not blob.elements_at(0, 4, RECORD_VEC3F).flags.writeable


def test_writable_mapping(blob_path):
    with BlobProvider(str(blob_path), writable=True) as blob:
        assert blob.elements_at(0, 4, RECORD_VEC3F).flags.writeable


def test_in_range(blob_path):
    with BlobProvider(str(blob_path)) as blob:
        assert blob.in_range(128, 2, RECORD_VEC4I)
        assert not blob.in_range(128, 3, RECORD_VEC4I)
        assert not blob.in_range(-4, 1, RECORD_VEC3F)


def test_empty_file_maps_to_no_records(tmp_path):
    path = tmp_path / "empty.bin"
    path.write_bytes(b"")
    with BlobProvider(str(path)) as blob:
        assert blob.size == 0
        assert blob.elements_at(0, 0, RECORD_VEC3F).shape == (0, 3)
        assert not blob.in_range(0, 1, RECORD_VEC3F)


def test_closed_provider_refuses_access(blob_path):
    blob = BlobProvider(str(blob_path)).open()
    verts = blob.elements_at(0, 4, RECORD_VEC3F)
    blob.close()
    assert not blob.is_open
    with pytest.raises(BlobError):
        blob.elements_at(0, 4, RECORD_VEC3F)
    # views handed out earlier keep the mapping alive
    assert np.array_equal(verts, VERTS)
