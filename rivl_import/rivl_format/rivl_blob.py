"""Memory-mapped access to the RIVL companion binary file.

The .bin file is a flat run of little-endian records. Meshes address
their arrays by byte offset and record count; elements_at() hands back
numpy views into the mapping so no vertex data is ever copied.

Usage:
    with BlobProvider("scene.rivl.bin") as blob:
        verts = blob.elements_at(0, 4, RECORD_VEC3F)   # (4, 3) float32 view
"""

import logging
import os

import numpy as np

from ..exceptions import BlobError

_log = logging.getLogger("rivl_import.blob")


class BlobProvider:
    """Maps a binary file once and serves zero-copy record views."""

    def __init__(self, filepath, writable=False):
        self.filepath = filepath
        self.writable = writable
        self.size = 0
        self._data = None  # np.memmap of uint8, or empty array for a 0-byte file

    @property
    def is_open(self):
        return self._data is not None

    @property
    def data(self):
        """The whole mapping as a flat uint8 array (None when closed)."""
        return self._data

    def open(self):
        """Map the whole file. Raises BlobError if it cannot be opened or sized."""
        if self._data is not None:
            return self
        try:
            self.size = os.path.getsize(self.filepath)
        except OSError as exc:
            raise BlobError(
                exc.errno, f"could not size binary file: {exc.strerror}", self.filepath
            ) from exc

        if self.size == 0:
            # mmap refuses empty files; a scene with no array data is still valid
            self._data = np.zeros(0, dtype=np.uint8)
            return self

        mode = "r+" if self.writable else "r"
        try:
            self._data = np.memmap(self.filepath, dtype=np.uint8, mode=mode)
        except OSError as exc:
            raise BlobError(
                exc.errno, f"could not open binary file: {exc.strerror}", self.filepath
            ) from exc
        _log.debug("mapped %s (%d bytes, mode=%s)", self.filepath, self.size, mode)
        return self

    def close(self):
        """Drop this provider's reference to the mapping.

        Views already handed out keep the mapping alive until they are
        released themselves.
        """
        self._data = None

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def in_range(self, byte_offset, count, record):
        """Return True if ``count`` records starting at ``byte_offset`` fit in the file."""
        dtype, components = record
        nbytes = count * components * np.dtype(dtype).itemsize
        return byte_offset >= 0 and count >= 0 and byte_offset + nbytes <= self.size

    def elements_at(self, byte_offset, count, record):
        """Return a (count, components) view of records starting at ``byte_offset``.

        Args:
            byte_offset: offset of the first record from the start of the file
            count: number of records
            record: (dtype, components) layout, e.g. RECORD_VEC3F

        No range checking is done here beyond what numpy enforces when
        reshaping; callers validate with in_range() when they need to.
        """
        if self._data is None:
            raise BlobError(f"binary file {self.filepath} is not open")
        dtype, components = record
        nbytes = count * components * np.dtype(dtype).itemsize
        raw = self._data[byte_offset:byte_offset + nbytes]
        return raw.view(dtype).reshape(count, components)

    def __repr__(self):
        state = "open" if self.is_open else "closed"
        return f"BlobProvider({self.filepath!r}, size={self.size}, {state})"
