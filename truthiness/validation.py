"""Schema validation for weights documents and evaluation records."""

import json
from functools import lru_cache
from pathlib import Path

import jsonschema

SCHEMAS_DIR = Path(__file__).resolve().parent.parent / "schemas"

WEIGHTS_SCHEMA = "truthiness_weights"
EVALUATION_SCHEMA = "evaluation"


@lru_cache(maxsize=None)
def load_schema(name: str) -> dict:
    """Read schemas/<name>.schema.json once per process."""
    path = SCHEMAS_DIR / f"{name}.schema.json"
    return json.loads(path.read_text(encoding="utf-8"))


def validate(name: str, data: dict) -> None:
    """Check data against the named schema. Raises jsonschema.ValidationError if invalid."""
    jsonschema.validate(data, load_schema(name))


def validate_weights(data: dict) -> None:
    validate(WEIGHTS_SCHEMA, data)


def validate_evaluation(data: dict) -> None:
    validate(EVALUATION_SCHEMA, data)
