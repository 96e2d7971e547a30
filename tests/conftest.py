from pathlib import Path

import pytest

from common.spark_session import SparkConfig, get_spark


@pytest.fixture(scope="session")
def spark():
    session = get_spark(SparkConfig(
        app_name="monthly-revenue-tests",
        master="local[1]",
        shuffle_partitions=1,
        extra=(("spark.ui.enabled", "false"),),
    ))
    yield session
    session.stop()


@pytest.fixture
def write_lines(tmp_path):
    """Write headerless CSV lines to tmp_path/<name>/part-00000 and return the folder."""
    def _write(name, lines):
        folder = tmp_path / name
        folder.mkdir()
        (folder / "part-00000").write_text("".join(line + "\n" for line in lines))
        return str(folder)
    return _write


@pytest.fixture
def read_output():
    def _read(path):
        parts = sorted(Path(path).glob("part-*"))
        return "".join(p.read_text() for p in parts)
    return _read
