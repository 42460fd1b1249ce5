from pathlib import Path
from typing import List

import pytest

from phat_benchmark.errors import LoadError

# ---------- Fake persistence backend ---------------------------------------


class FakeMatrix:
    def __init__(self, representation):
        self.representation = representation
        self.loaded_from = None


class FakeBackend:
    """
    Stands in for the phat bindings. Records every call; loading fails for
    paths that are not existing files.
    """

    def __init__(self):
        self.calls: List[tuple] = []
        self.matrices: List[FakeMatrix] = []

    def representation(self, kind):
        return f"rep:{kind.value}"

    def reduction(self, kind):
        return f"red:{kind.label}"

    def new_matrix(self, representation):
        matrix = FakeMatrix(representation)
        self.matrices.append(matrix)
        return matrix

    def load(self, matrix, path, use_binary):
        self.calls.append(("load", path, use_binary))
        if not Path(path).is_file():
            raise LoadError(path, "no such file")
        matrix.loaded_from = path

    def compute_pairs(self, matrix, reduction, dualized):
        self.calls.append(("compute", matrix.loaded_from, matrix.representation, reduction, dualized))
        return [(0, 1)]

    @property
    def loaded_paths(self) -> List[str]:
        return [c[1] for c in self.calls if c[0] == "load"]


# ---------- Fixtures --------------------------------------------------------


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def matrix_file(tmp_path):
    """A readable (content-free) input file; the fake backend only checks existence."""
    path = tmp_path / "sphere.bin"
    path.write_bytes(b"\x00")
    return str(path)


@pytest.fixture
def make_matrix_file(tmp_path):
    def _make(name: str) -> str:
        path = tmp_path / name
        path.write_bytes(b"\x00")
        return str(path)

    return _make
