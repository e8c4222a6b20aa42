import pytest

from airfoil_lift import config

TEST_SEED = 20240601
TEST_SAMPLES = 2000


@pytest.fixture(autouse=True)
def seeded_settings():
    """Small, reproducible Monte Carlo runs; the previous settings are restored afterwards."""
    previous = config.get_settings()
    config.configure(config.Settings(n_samples=TEST_SAMPLES, seed=TEST_SEED))
    yield config.get_settings()
    config.configure(previous)


def synthetic_rows(n_positions=139):
    """
    Cp rows ordered so that, at every position, the 10° curve gives the
    fastest upper-surface flow and the slowest lower-surface flow.
    """
    rows = []
    for i in range(n_positions):
        x = i / (n_positions - 1)
        over10, over5, over0 = -2.0 + 1.8 * x, -1.4 + 1.2 * x, -0.8 + 0.6 * x
        under0, under5, under10 = 0.3 - 0.2 * x, 0.6 - 0.4 * x, 0.9 - 0.6 * x
        rows.append([float(i), over10, over5, over0, under0, under5, under10])
    return rows


def write_table(path, rows, decimal_comma=True, header="x;over10;over5;over0;under0;under5;under10"):
    lines = [header]
    for row in rows:
        tokens = [f"{v:.4f}" for v in row]
        if decimal_comma:
            tokens = [t.replace(".", ",") for t in tokens]
        lines.append(";".join(tokens))
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def cp_table(tmp_path):
    """A valid 140 x 7 table with decimal commas."""
    return write_table(tmp_path / "all_angles.csv", synthetic_rows())
