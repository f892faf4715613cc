import pytest

SAMPLE_PBM = (
    b"P1\n"
    b"# test.pbm\n"
    b"7 5\n"
    b"0 0 0 0 0 0 0 \n"
    b"0 0 1 1 1 0 0 \n"
    b"0 0 0 1 0 0 0 \n"
    b"0 0 0 1 0 0 0 \n"
    b"0 0 0 0 0 0 0 \n"
)

ROTATED_PBM = (
    b"P1\n"
    b"# test.pbm\n"
    b"5 7\n"
    b"0 0 0 0 0 \n"
    b"0 0 0 0 0 \n"
    b"0 1 0 0 0 \n"
    b"0 1 1 1 0 \n"
    b"0 1 0 0 0 \n"
    b"0 0 0 0 0 \n"
    b"0 0 0 0 0 \n"
)

SAMPLE_BITMAP = [
    [0, 0, 0, 0, 0, 0, 0],
    [0, 0, 1, 1, 1, 0, 0],
    [0, 0, 0, 1, 0, 0, 0],
    [0, 0, 0, 1, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0],
]


@pytest.fixture
def sample_pbm():
    return SAMPLE_PBM


@pytest.fixture
def rotated_pbm():
    return ROTATED_PBM


@pytest.fixture
def sample_bitmap():
    return [list(row) for row in SAMPLE_BITMAP]


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "test.pbm"
    path.write_bytes(SAMPLE_PBM)
    return path


@pytest.fixture
def asymmetric_bitmap():
    # no symmetry, so every quarter turn gives a distinct grid
    return [
        [1, 1, 0, 0],
        [1, 0, 0, 1],
        [0, 0, 0, 1],
    ]
