# config.py — defaults for the hold calculator (TAS, base time, racetrack constants)

import json, logging
from pathlib import Path
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

SETTINGS_PATH = Path(__file__).with_name("defaults.json")

_MINIMAL_FALLBACK = {
    "inputs": { "tas_kt": 120.0, "outbound_base_time_sec": 60.0 },
    "gates": { "gate2_offset_deg": 60.0 },
    "geometry": { "scale": 1.6, "leg_length": 140.0, "turn_radius": 45.0 }
}

def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = {k: (dict(v) if isinstance(v, dict) else v) for k, v in base.items()}
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out

def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """Read defaults.json; any read/parse problem falls back to the built-in values."""
    path = Path(path) if path else SETTINGS_PATH
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = f.read()
        if not raw.strip().startswith("{"):
            raise ValueError("File does not start with '{' – likely not JSON.")
        return _merge(_MINIMAL_FALLBACK, json.loads(raw))
    except FileNotFoundError:
        logger.warning(f"{path.name} not found. Using built-in defaults.")
        return _merge(_MINIMAL_FALLBACK, {})
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {path.name} at line {e.lineno}, column {e.colno}: {e.msg}")
        return _merge(_MINIMAL_FALLBACK, {})
    except (OSError, ValueError) as e:
        logger.error(f"Could not read {path.name}: {e}")
        return _merge(_MINIMAL_FALLBACK, {})

SETTINGS = load_settings()
