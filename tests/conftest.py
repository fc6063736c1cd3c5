import pytest

from synthetic_de import build_de_file


@pytest.fixture
def de_bytes() -> bytes:
    """A two-interval little-endian synthetic DE file with zero coefficients."""
    return build_de_file()


@pytest.fixture
def de_path(tmp_path, de_bytes):
    """Path of the synthetic DE file written to disk."""
    path = tmp_path / "synthetic.102"
    path.write_bytes(de_bytes)
    return str(path)
