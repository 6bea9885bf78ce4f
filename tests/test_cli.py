import importlib.util
import json
from pathlib import Path

import pytest

from feistelab.formatting import format_binary, format_round_keys, format_sbox

_CLI_PATH = Path(__file__).parent.parent / "scripts" / "feistel_cli.py"


@pytest.fixture(scope="module")
def cli():
    spec = importlib.util.spec_from_file_location("feistel_cli", _CLI_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_format_binary_groups_bytes():
    assert format_binary(0xFF, 16) == "00000000 11111111"
    assert format_binary(1).split() == ["00000000"] * 7 + ["00000001"]


def test_format_round_keys_and_sbox():
    lines = format_round_keys([0x0A] * 32)
    assert len(lines) == 32
    assert lines[0] == "Round 1 Key: 0x0a"
    assert len(format_sbox(list(range(256)))) == 16


def test_encrypt_then_decrypt(cli, capsys):
    assert cli.main(["--key", "0123456789ABCDEF", "encrypt", "ABCDEFGH"]) == 0
    out = capsys.readouterr().out
    hex_line = next(line for line in out.splitlines() if line.startswith("Encrypted Hexadecimal Output"))
    ciphertext = hex_line.split(":")[1].strip()

    assert cli.main(["--key", "0123456789ABCDEF", "decrypt", ciphertext]) == 0
    assert 'Decrypted Text: "ABCDEFGH"' in capsys.readouterr().out


def test_bad_key_exit_code(cli, capsys):
    assert cli.main(["--key", "XYZ", "keys"]) == 2
    assert "Error" in capsys.readouterr().err


def test_bad_ciphertext_exit_code(cli, capsys):
    assert cli.main(["decrypt", "not-hex"]) == 2


def test_keys_and_sbox(cli, capsys):
    assert cli.main(["keys"]) == 0
    assert "Round 32 Key: 0x" in capsys.readouterr().out
    assert cli.main(["sbox", "1"]) == 0
    assert "S-box for Round 1:" in capsys.readouterr().out
    assert cli.main(["sbox", "33"]) == 2


def test_differential_command(cli, capsys):
    assert cli.main(["--key", "FFFFFFFFFFFFFFFF", "differential", "TESTTEST"]) == 0
    out = capsys.readouterr().out
    positions = out.split("Flipped Bit Positions:")[1].split()
    assert positions


def test_evaluate_writes_report(cli, capsys, tmp_path):
    rc = cli.main([
        "evaluate", "--sac-trials", "1", "--roundtrip-vectors", "5",
        "--output", str(tmp_path),
    ])
    assert rc == 0
    reports = list(tmp_path.glob("*/report.json"))
    assert len(reports) == 1
    data = json.loads(reports[0].read_text(encoding="utf-8"))
    assert data["summary"]["roundtrip_all_pass"] is True
    assert len(data["sbox"]) == 32
