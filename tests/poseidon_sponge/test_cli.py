"""Tests for the command line entry point."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from poseidon_sponge.__main__ import (
    FIELDS,
    LOG_FORMAT,
    ColoredFormatter,
    build_parser,
    hash_file_inputs,
    main,
    parse_hex_input,
)
from poseidon_sponge.subspecs.poseidon import PoseidonParams, dump_parameters_file
from poseidon_sponge.types import EncodingError

ONE = "0x01" + "00" * 31
TWO = "0x02" + "00" * 31
DIGEST_ONE_TWO = "0x43a04366c5c3d0c1502b4d46ac0adef4a23a7e42bf073a8b3a2151d508870709"
DIGEST_ONE_TWO_THREE_ZERO_CAPACITY = (
    "0x5274c532628e8e57094f06107a56480a6093e2e8fa37e587a494329a3417e127"
)


@pytest.fixture
def params_file(toy_params: PoseidonParams, tmp_path: Path) -> Path:
    """The toy parameters written to a JSON file."""
    path = tmp_path / "params.json"
    dump_parameters_file(toy_params, path)
    return path


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    """Remove handlers that `main` installs on the root logger."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestParseHexInput:
    """Tests for decoding command line inputs."""

    def test_with_and_without_prefix(self) -> None:
        """The 0x prefix is optional."""
        assert parse_hex_input("0x0102") == b"\x01\x02"
        assert parse_hex_input("0102") == b"\x01\x02"

    def test_invalid_hex(self) -> None:
        """Non-hex text is an encoding error."""
        with pytest.raises(EncodingError, match="hex input"):
            parse_hex_input("0xzz")


class TestHashFileInputs:
    """Tests for hashing inputs with parameters from a file."""

    def test_two_elements(self, params_file: Path) -> None:
        """Two 32-byte inputs under capacity value 21."""
        assert hash_file_inputs(params_file, [ONE, TWO], capacity_value=21) == DIGEST_ONE_TWO

    def test_remainder_is_padded(self, params_file: Path) -> None:
        """Three inputs leave one buffered element that is padded."""
        three = "0x03" + "00" * 31
        digest = hash_file_inputs(params_file, [ONE, TWO, three], capacity_value=0)
        assert digest == DIGEST_ONE_TWO_THREE_ZERO_CAPACITY

    def test_yaml_params(self, toy_params: PoseidonParams, tmp_path: Path) -> None:
        """YAML parameter files give the same digest."""
        path = tmp_path / "params.yaml"
        dump_parameters_file(toy_params, path)
        assert hash_file_inputs(path, [ONE, TWO], capacity_value=21) == DIGEST_ONE_TWO

    def test_short_input(self, params_file: Path) -> None:
        """Inputs must be exactly one element wide."""
        with pytest.raises(EncodingError, match="Expected 32 bytes, got 1"):
            hash_file_inputs(params_file, ["0x01"], capacity_value=21)

    def test_single_use_does_not_affect_one_digest(self, params_file: Path) -> None:
        """A single squeeze is allowed on a single-use sponge."""
        digest = hash_file_inputs(params_file, [ONE, TWO], capacity_value=21, single_use=True)
        assert digest == DIGEST_ONE_TWO


class TestMain:
    """Tests for the CLI entry point."""

    def test_prints_digest(self, params_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """The digest is printed on stdout and the exit code is 0."""
        code = main(["--params", str(params_file), "--capacity-value", "21", ONE, TWO])

        assert code == 0
        assert capsys.readouterr().out.strip() == DIGEST_ONE_TWO

    def test_capacity_value_accepts_hex(
        self, params_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """The capacity value may be written in any Python integer base."""
        code = main(["--params", str(params_file), "--capacity-value", "0x15", ONE, TWO])

        assert code == 0
        assert capsys.readouterr().out.strip() == DIGEST_ONE_TWO

    def test_invalid_input_exits_with_error(
        self, params_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Encoding problems are reported and exit with code 1."""
        code = main(["--params", str(params_file), "--no-color", "0x01"])

        assert code == 1
        assert capsys.readouterr().out == ""

    def test_missing_params_file(self, tmp_path: Path) -> None:
        """A missing parameter file exits with code 1."""
        assert main(["--params", str(tmp_path / "missing.json"), ONE]) == 1

    def test_wrong_field(self, params_file: Path) -> None:
        """BN254 parameters cannot be loaded as KoalaBear."""
        assert main(["--params", str(params_file), "--field", "koalabear", ONE]) == 1

    def test_usage_errors(self, params_file: Path) -> None:
        """Missing arguments are argparse usage errors."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--params", str(params_file)])
        assert exc_info.value.code == 2

    def test_undecodable_params_file(self, tmp_path: Path) -> None:
        """A parameter file that is not UTF-8 text exits with code 1."""
        path = tmp_path / "params.json"
        path.write_bytes(b"\xff\xfe{")
        assert main(["--params", str(path), ONE]) == 1

    def test_bad_capacity_value(
        self, params_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A capacity value that is not an integer is a usage error naming the parser."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--params", str(params_file), "--capacity-value", "zz", ONE])

        assert exc_info.value.code == 2
        err = capsys.readouterr().err
        assert "invalid parse_int value: 'zz'" in err
        assert "<lambda>" not in err

    def test_verbose_enables_debug_logging(self, params_file: Path) -> None:
        """-v lowers the root logger to DEBUG."""
        main(["--params", str(params_file), "-v", "--no-color", ONE, TWO])
        assert logging.getLogger().level == logging.DEBUG


def test_parser_choices() -> None:
    """Every selectable field is offered on the command line."""
    parser = build_parser()
    args = parser.parse_args(["--params", "p.json", "--field", "koalabear", "0x00"])

    assert set(FIELDS) == {"bn254", "koalabear"}
    assert FIELDS[args.field].element_size() == 4
    assert args.single_use is None


def test_colored_formatter_keeps_record_intact() -> None:
    """Colors wrap the level name without altering the record itself."""
    record = logging.LogRecord("poseidon", logging.WARNING, __file__, 1, "careful", None, None)
    line = ColoredFormatter(LOG_FORMAT).format(record)

    assert "\x1b[33mWARNING \x1b[0m" in line
    assert line.endswith("poseidon: careful")
    assert record.levelname == "WARNING"
