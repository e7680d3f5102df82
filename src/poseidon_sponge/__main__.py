"""
Poseidon hash CLI entry point.

Load a parameter file, absorb the given field elements and print the digest.

Usage::

    python -m poseidon_sponge --params params.json 0x01<62 zeros> 0x02<62 zeros>
    python -m poseidon_sponge --params params.yaml --field koalabear 0x2a000000
    python -m poseidon_sponge --params params.json --capacity-value 0 0x01<62 zeros>

Options:
    --params          Path to a JSON or YAML parameter document (required)
    --field           Field of the parameters: bn254 (default) or koalabear
    --capacity-value  Domain-separation value for the capacity slot
    --single-use      Reject reuse of the sponge after squeezing

Each input is the little-endian hex encoding of one field element and must be
exactly as wide as the field's encoding (32 bytes for bn254).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from poseidon_sponge import config
from poseidon_sponge.subspecs.bn254 import Fr
from poseidon_sponge.subspecs.koalabear import Fp
from poseidon_sponge.subspecs.poseidon import create_sponge, load_parameters_file
from poseidon_sponge.types import EncodingError, PoseidonError, PrimeFieldElement

FIELDS: dict[str, type[PrimeFieldElement]] = {
    "bn254": Fr,
    "koalabear": Fp,
}
"""Fields selectable with `--field`."""

logger = logging.getLogger(__name__)


def parse_hex_input(text: str) -> bytes:
    """
    Decode one command line input into bytes.

    The `0x` prefix is optional.

    Raises:
        EncodingError: If the text is not valid hex.
    """
    try:
        return bytes.fromhex(text.removeprefix("0x"))
    except ValueError as e:
        raise EncodingError("hex input", f"{text!r} is not valid hex") from e


def parse_int(text: str) -> int:
    """Parse an integer in any Python base notation, e.g. `21` or `0x15`."""
    return int(text, 0)


def hash_file_inputs(
    params_path: Path,
    inputs: list[str],
    field: type[PrimeFieldElement] = Fr,
    capacity_value: int | None = None,
    single_use: bool | None = None,
) -> str:
    """
    Hash hex-encoded inputs with parameters loaded from a file.

    Args:
        params_path: Location of the parameter document.
        inputs: Hex encodings of the elements to absorb, in order.
        field: The field of the parameters.
        capacity_value: Domain-separation value, defaults to configuration.
        single_use: Lock the sponge after squeezing, defaults to configuration.

    Returns:
        The digest as a `0x`-prefixed hex string.
    """
    params = load_parameters_file(params_path, field)

    sponge = create_sponge(params, capacity_value, single_use=single_use)
    sponge.absorb_bytes(parse_hex_input(text) for text in inputs)
    logger.debug("Absorbed %d input(s)", len(inputs))

    return "0x" + sponge.hexdigest()


LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name of each record for terminals."""

    _LEVEL_STYLES = {
        logging.DEBUG: "\x1b[2m",
        logging.INFO: "\x1b[32m",
        logging.WARNING: "\x1b[33m",
        logging.ERROR: "\x1b[31m",
        logging.CRITICAL: "\x1b[1;31m",
    }
    _RESET = "\x1b[0m"

    def formatMessage(self, record: logging.LogRecord) -> str:
        style = self._LEVEL_STYLES.get(record.levelno)
        if style is None:
            return super().formatMessage(record)

        # Pad before coloring so the escape codes do not break alignment.
        plain = record.levelname
        record.levelname = f"{style}{plain:<8}{self._RESET}"
        try:
            return super().formatMessage(record)
        finally:
            record.levelname = plain


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """
    Send log records to stderr, keeping stdout for the digest.

    Only warnings and errors are shown unless `verbose` is set.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    formatter_cls = logging.Formatter if no_color else ColoredFormatter

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter_cls(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(level)


def build_parser() -> argparse.ArgumentParser:
    """Create the command line parser."""
    parser = argparse.ArgumentParser(
        prog="poseidon_sponge",
        description="Poseidon sponge hash over a prime field",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--params",
        required=True,
        type=Path,
        help="Path to a JSON or YAML parameter document",
    )
    parser.add_argument(
        "--field",
        choices=sorted(FIELDS),
        default="bn254",
        help="Field of the parameters (default: bn254)",
    )
    parser.add_argument(
        "--capacity-value",
        type=parse_int,
        default=None,
        help=f"Domain-separation value (default: {config.DEFAULT_CAPACITY_VALUE})",
    )
    parser.add_argument(
        "--single-use",
        action="store_true",
        default=None,
        help="Reject reuse of the sponge after squeezing",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored logging output",
    )
    parser.add_argument(
        "inputs",
        nargs="+",
        metavar="INPUT",
        help="Little-endian hex encoding of one field element",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose, args.no_color)

    try:
        digest = hash_file_inputs(
            args.params,
            args.inputs,
            field=FIELDS[args.field],
            capacity_value=args.capacity_value,
            single_use=args.single_use,
        )
    except (PoseidonError, OSError) as e:
        logger.error("Hashing failed: %s", e)
        return 1

    print(digest)
    return 0


if __name__ == "__main__":
    sys.exit(main())
