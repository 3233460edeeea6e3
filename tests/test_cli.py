from pathlib import Path

import pytest
from typer.testing import CliRunner

from romlayout.__main__ import app

LAYOUT = """\
# flashrom layout 2
0x0000:0x0fff fd
0x1000:0x1fff "boot block"
0x2000:0x3fff rest
"""


@pytest.fixture
def runner():
    return CliRunner()


def test_show(runner, write_file):
    path = write_file("chip.lay", LAYOUT)
    result = runner.invoke(app, ["show", path, "-i", "boot block:bb.bin"])
    assert result.exit_code == 0, result.output
    assert '0x00000000 - 0x00000fff "fd"\n' in result.output
    assert '0x00001000 - 0x00001fff "boot block" [included] <- bb.bin' in result.output


def test_show_error(runner, write_file):
    path = write_file("chip.lay", "# flashrom layout 2\n0x10:0x0 backwards\n")
    result = runner.invoke(app, ["show", path])
    assert result.exit_code == 1
    assert "not positive" in result.output


def test_build(runner, write_file, tmp_path):
    layout = write_file("chip.lay", LAYOUT)
    new = write_file("new.bin", bytes([0x11]) * 0x4000)
    old = write_file("old.bin", bytes([0x22]) * 0x4000)
    bb = write_file("bb.bin", bytes([0x33]) * 0x1000)
    out = tmp_path / "out.bin"

    result = runner.invoke(
        app,
        [
            "build",
            "-l", layout,
            "-i", "fd",
            "-i", f"boot block:{bb}",
            "--new", new,
            "--old", old,
            "-o", str(out),
            "--no-progress",
            "--chunk", "256",
        ],
    )  # fmt: skip
    assert result.exit_code == 0, result.output
    assert "read 8192 of 16384 bytes" in result.output

    image = Path(out).read_bytes()
    assert image[:0x1000] == bytes([0x11]) * 0x1000
    assert image[0x1000:0x2000] == bytes([0x33]) * 0x1000
    assert image[0x2000:] == bytes([0x22]) * 0x2000


def test_build_erased_chip(runner, write_file, tmp_path):
    layout = write_file("chip.lay", LAYOUT)
    new = write_file("new.bin", bytes([0x11]) * 0x4000)
    out = tmp_path / "out.bin"

    result = runner.invoke(
        app, ["build", "-l", layout, "-i", "rest", "--new", new, "-o", str(out), "--chip-size", "0x4000"]
    )
    assert result.exit_code == 0, result.output
    image = Path(out).read_bytes()
    assert image[:0x2000] == bytes([0xFF]) * 0x2000
    assert image[0x2000:] == bytes([0x11]) * 0x2000


def test_build_whole_chip(runner, write_file, tmp_path):
    layout = write_file("chip.lay", LAYOUT)
    new = write_file("new.bin", bytes(range(256)) * 0x40)
    out = tmp_path / "out.bin"

    result = runner.invoke(app, ["build", "-l", layout, "--new", new, "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert Path(out).read_bytes() == bytes(range(256)) * 0x40


def test_build_chip_size_mismatch(runner, write_file, tmp_path):
    layout = write_file("chip.lay", LAYOUT)
    new = write_file("new.bin", bytes(0x4000))
    out = tmp_path / "out.bin"

    result = runner.invoke(
        app, ["build", "-l", layout, "-i", "fd", "--new", new, "-o", str(out), "--chip-size", "0x8000"]
    )
    assert result.exit_code == 1
    assert not out.exists()


def test_build_unknown_region(runner, write_file, tmp_path):
    layout = write_file("chip.lay", LAYOUT)
    new = write_file("new.bin", bytes(0x4000))

    result = runner.invoke(
        app, ["build", "-l", layout, "-i", "nope", "--new", new, "-o", str(tmp_path / "out.bin")]
    )
    assert result.exit_code == 1
    assert "invalid region specified" in result.output
