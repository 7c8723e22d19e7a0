from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"json", "yaml", "yml"}:
        return ext
    # Default to JSON for unknown extensions.
    return "json"


def new_state(config_summary: Dict[str, Any], *, dry_run: bool = False) -> Dict[str, Any]:
    """Fresh run record. Records are written for audit only, never resumed."""

    return {
        "config": dict(config_summary, dry_run=dry_run),
        "execution": {
            "current_step": None,
            "ran_steps": [],
            "failed_step": None,
            "decisions": {},
            "warnings": [],
            "errors": [],
        },
    }


def record_decision(state: Dict[str, Any], key: str, value: Any) -> None:
    state.setdefault("execution", {}).setdefault("decisions", {})[key] = value


def record_warning(state: Dict[str, Any], warning: Dict[str, Any]) -> None:
    state.setdefault("execution", {}).setdefault("warnings", []).append(warning)


def save_state(path: str, state: Dict[str, Any]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    fmt = _detect_format(p)
    if fmt in {"yaml", "yml"}:
        try:
            import yaml  # type: ignore
        except Exception as e:  # pragma: no cover
            raise RuntimeError("YAML run record requested but PyYAML is not available.") from e
        p.write_text(yaml.safe_dump(state, sort_keys=False), encoding="utf-8")
    else:
        p.write_text(json.dumps(state, indent=2, sort_keys=True) + "\n", encoding="utf-8")
