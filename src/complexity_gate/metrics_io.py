"""Reading unit metrics produced by an external analyzer."""

import json
from pathlib import Path
from typing import Any, Dict, List, Union

from .exceptions import MetricsFileError
from .logging_config import get_logger

logger = get_logger(__name__)


def load_metrics(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Load raw unit entries from a metrics JSON file.

    Two layouts are accepted::

        [{"name": "handler", "path": "app.py", "kind": "function",
          "metrics": {"cyclomatic": 12}}]

        {"units": [...]}

    Entries are returned unparsed so that a malformed unit fails on its own
    during batch evaluation instead of rejecting the whole file.

    Raises:
        MetricsFileError: If the file is missing, not JSON, or not a list of units.
    """
    p = Path(path)
    try:
        with open(p, encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError:
        raise MetricsFileError(p, "file not found")
    except json.JSONDecodeError as e:
        raise MetricsFileError(p, f"invalid JSON: {e}")
    except OSError as e:
        raise MetricsFileError(p, f"cannot read file: {e}")

    if isinstance(raw, dict):
        raw = raw.get("units")
    if not isinstance(raw, list):
        raise MetricsFileError(p, "expected a list of units or an object with a 'units' list")

    logger.debug(f"Loaded {len(raw)} unit entries from {p}")
    return raw


def dump_metrics(records, path: Union[str, Path]) -> None:
    """Write records in the layout ``load_metrics`` reads."""
    data = {"units": [r.to_dict() for r in records]}
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")
