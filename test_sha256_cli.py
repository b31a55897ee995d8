import pytest

from sha256_cli import format_block, format_digest, main


ABC_HEX = "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
EMPTY_HEX = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_format_digest():
    words = [0xBA7816BF, 0x8F01CFEA, 0x414140DE, 0x5DAE2223, 0xB00361A3, 0x96177A9C, 0xB410FF61, 0xF20015AD]

    assert format_digest(words) == ABC_HEX
    assert format_digest([0] * 8) == "0" * 64


@pytest.mark.parametrize("strategy", ["loop", "unrolled"])
def test_main_hashes_argument(capsys, strategy):
    assert main(["--strategy", strategy, "abc"]) == 0
    assert capsys.readouterr().out.strip() == ABC_HEX


def test_main_hashes_empty_string(capsys):
    assert main([""]) == 0
    assert capsys.readouterr().out.strip() == EMPTY_HEX


def test_main_hashes_file(tmp_path, capsys):
    path = tmp_path / "message.bin"
    path.write_bytes(b"abc")

    assert main(["-f", str(path)]) == 0
    assert capsys.readouterr().out.strip() == ABC_HEX


def test_main_missing_file(tmp_path, capsys):
    assert main(["-f", str(tmp_path / "missing.bin")]) == 1
    assert "Error reading file" in capsys.readouterr().err


@pytest.mark.parametrize("argv", [[], ["-f", "x", "abc"]])
def test_main_needs_exactly_one_input(argv, capsys):
    assert main(argv) == 1
    assert "error" in capsys.readouterr().err


def test_main_rejects_unknown_strategy():
    with pytest.raises(SystemExit):
        main(["--strategy", "fast", "abc"])


def test_format_block_abc():
    lines = format_block([0x61626380] + [0] * 14 + [24], 3, True, 24)

    assert lines[0] == "-- 61626380"
    assert lines[1:14] == ["-z 00000000"] * 13
    assert lines[14:] == ["-# 00000000", "-# 00000018"]


def test_format_block_full_data_block():
    lines = format_block([0x61616161] * 16, 64, True, 512)

    assert lines == ["-- 61616161"] * 16


def test_trace_56_bytes(capsys):
    """The marker fills word 14; the length moves into a second block."""
    assert main(["--trace", "a" * 56]) == 0
    out = capsys.readouterr().out

    assert "Block 0 (56 message bytes):" in out
    assert "-- 80000000" in out
    assert "Block 1 (0 message bytes):" in out
    assert "-# 000001c0" in out
    assert "Message length: 448 bits" in out
