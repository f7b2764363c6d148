import json
import logging

import pytest
from click.testing import CliRunner

from arcode import __version__
from arcode.cli import cli


@pytest.fixture()
def cli_runner() -> CliRunner:
    return CliRunner()


def test_version(cli_runner: CliRunner):
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_encode_table(cli_runner: CliRunner):
    result = cli_runner.invoke(cli, ["encode", "AAAB"])
    assert result.exit_code == 0
    assert "Codeword: 011 (3 bits)" in result.output
    assert "Hamming codeword: 110011 (m=3, r=3, n=6)" in result.output
    assert "Rate: 0.500" in result.output
    assert "OK:" in result.output


def test_encode_default_message(cli_runner: CliRunner):
    result = cli_runner.invoke(cli, ["encode"])
    assert result.exit_code == 0
    assert "'K'" in result.output
    assert "OK: decoded 23 symbols" in result.output


def test_encode_json(cli_runner: CliRunner):
    result = cli_runner.invoke(cli, ["encode", "AAAB", "--format", "json"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["codeword"] == "011"
    assert data["hamming"] == "110011"
    assert data["verified"] is True


def test_encode_trace(cli_runner: CliRunner):
    result = cli_runner.invoke(cli, ["encode", "AAAB", "--trace"])
    assert result.exit_code == 0
    assert "encode[0] 'A'" in result.output
    assert "decode[3] 'B'" in result.output
    assert "p1 checks" in result.output


def test_encode_no_verify(cli_runner: CliRunner):
    result = cli_runner.invoke(cli, ["encode", "AAAB", "--no-verify"])
    assert result.exit_code == 0
    assert "OK:" not in result.output


def test_encode_precision_overrides(cli_runner: CliRunner):
    result = cli_runner.invoke(cli, ["encode", "AAAB", "--precision", "120", "--epsilon", "1e-60"])
    assert result.exit_code == 0
    assert "Codeword: 011" in result.output


def test_encode_bad_epsilon(cli_runner: CliRunner):
    result = cli_runner.invoke(cli, ["encode", "AAAB", "--epsilon", "tiny"])
    assert result.exit_code == 2


def test_encode_empty_text(cli_runner: CliRunner):
    result = cli_runner.invoke(cli, ["encode", ""])
    assert result.exit_code == 1
    assert "non-empty" in result.output


def test_decode(cli_runner: CliRunner):
    result = cli_runner.invoke(cli, ["decode", "011", "--length", "4", "--model", "AAAB"])
    assert result.exit_code == 0
    assert result.output.strip() == "AAAB"


def test_encode_then_decode(cli_runner: CliRunner):
    text = "abracadabra"
    enc = cli_runner.invoke(cli, ["encode", text, "--format", "json"])
    bits = json.loads(enc.output)["codeword"]
    dec = cli_runner.invoke(cli, ["decode", bits, "--length", str(len(text)), "--model", text])
    assert dec.exit_code == 0
    assert dec.output.strip() == text


def test_decode_bad_bits(cli_runner: CliRunner):
    result = cli_runner.invoke(cli, ["decode", "01x", "--length", "4", "--model", "AAAB"])
    assert result.exit_code == 2


def test_hamming(cli_runner: CliRunner):
    result = cli_runner.invoke(cli, ["hamming", "1011"])
    assert result.exit_code == 0
    assert "m=4 r=3 n=7" in result.output
    assert "0110011" in result.output


def test_hamming_trace(cli_runner: CliRunner):
    result = cli_runner.invoke(cli, ["hamming", "1011", "--trace"])
    assert result.exit_code == 0
    assert "p1 checks 1 3 5 7 -> 0" in result.output


def test_hamming_invalid(cli_runner: CliRunner):
    assert cli_runner.invoke(cli, ["hamming", "10a1"]).exit_code == 2
    assert cli_runner.invoke(cli, ["hamming", ""]).exit_code == 1


def test_verbose_logs_steps(cli_runner: CliRunner, caplog):
    caplog.set_level(logging.DEBUG, logger="arcode")
    result = cli_runner.invoke(cli, ["-v", "encode", "AAAB"])
    assert result.exit_code == 0
    assert "Codeword: 011" in result.output
    assert "encode[0] 'A'" in caplog.text
    assert "decode[3] 'B'" in caplog.text


def test_steps_not_logged_without_verbose(cli_runner: CliRunner, caplog):
    result = cli_runner.invoke(cli, ["hamming", "1011"])
    assert result.exit_code == 0
    assert "p1 checks" not in caplog.text
