"""Baseline persistence for the delta ratchet."""

import json
import math
from pathlib import Path
from typing import Union

from .exceptions import BaselineError
from .logging_config import get_logger
from .models import BaselineSnapshot

logger = get_logger(__name__)

BASELINE_VERSION = 1


def save_baseline(snapshot: BaselineSnapshot, path: Union[str, Path]) -> None:
    """Write a baseline snapshot as JSON.

    Units are written in sorted order so the file diffs cleanly.
    """
    data = {
        "version": BASELINE_VERSION,
        "units": {identity: snapshot[identity] for identity in sorted(snapshot)},
    }

    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")

    logger.info(f"Saved baseline with {len(snapshot)} entries to {path}")


def load_baseline(path: Union[str, Path]) -> BaselineSnapshot:
    """Load a baseline snapshot from JSON.

    Returns:
        Dict mapping unit identity -> total.
        Empty dict if the file does not exist.

    Raises:
        BaselineError: If the file is not valid JSON or holds non-numeric totals.
    """
    p = Path(path)
    if not p.exists():
        logger.info(f"No baseline file at {path}")
        return {}

    try:
        with open(p, encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise BaselineError(p, f"invalid JSON: {e}")
    except OSError as e:
        raise BaselineError(p, f"cannot read file: {e}")

    if not isinstance(raw, dict):
        raise BaselineError(p, "expected a JSON object")

    # Support both {"version": 1, "units": {...}} and a flat {identity: total}
    units = raw["units"] if "units" in raw else raw
    if not isinstance(units, dict):
        raise BaselineError(p, "'units' must be an object")

    result: BaselineSnapshot = {}
    for identity, total in units.items():
        if isinstance(total, bool) or not isinstance(total, (int, float)) or not math.isfinite(total):
            raise BaselineError(p, f"total for '{identity}' is not a number: {total!r}")
        result[identity] = total

    logger.info(f"Loaded baseline with {len(result)} entries from {path}")
    return result
