"""
Parameter file loader.

Reads Poseidon parameter documents from JSON or YAML files. Files with a
`.yaml` or `.yml` suffix are parsed as YAML, everything else as JSON.

The JSON layout matches the output of the reference parameter generator,
where every field element is a list of little-endian octets:

    {
      "t": 3, "rate": 2, "rF": 8, "rP": 57,
      "constants": {"start": [[[1, 0, ...], ...]], "end": [...], "partial": [...]},
      "mdsMatrices": {"mds": [...], "preSparseMds": [...],
                      "sparseMatrices": [{"row": [...], "colHat": [...]}]}
    }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import yaml

from poseidon_sponge.types import PrimeFieldElement, ValidationError

from ..bn254 import Fr
from .params import PoseidonParams, load_parameters

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = (".yaml", ".yml")


def _is_yaml(path: Path) -> bool:
    return path.suffix.lower() in _YAML_SUFFIXES


def load_parameters_file(
    path: Path | str, field: type[PrimeFieldElement] = Fr
) -> PoseidonParams:
    """
    Load and validate a parameter document from disk.

    Args:
        path: Location of a JSON or YAML parameter document.
        field: The field to decode every byte array into.

    Returns:
        Immutable, validated parameters.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValidationError: If the file is not valid JSON/YAML or fails validation.
        EncodingError: If a byte array is not a canonical field element.
    """
    path = Path(path)
    logger.info("Loading Poseidon parameters from %s", path)

    with path.open(encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) if _is_yaml(path) else json.load(f)
        except (yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ValidationError(str(path), detail=f"not a valid parameter file: {e}") from e

    if not isinstance(data, dict):
        raise ValidationError(str(path), detail="parameter document must be a mapping")

    return load_parameters(data, field)


def dump_parameters_file(params: PoseidonParams, path: Path | str) -> None:
    """
    Write parameters to disk, encoding field elements as hex strings.

    The format is chosen from the file suffix, as in `load_parameters_file`.
    """
    path = Path(path)
    data = params.to_raw().model_dump(mode="json", by_alias=True)

    with path.open("w", encoding="utf-8") as f:
        if _is_yaml(path):
            yaml.safe_dump(data, f, sort_keys=False)
        else:
            json.dump(data, f, indent=2)

    logger.info("Wrote Poseidon parameters to %s", path)
