"""Load/save app settings. Settings live in configs/settings.json; simulation state is never saved."""

import json
import logging
import math
from pathlib import Path

from fluid.commands import DEFAULT_IMPULSE, DEFAULT_SOURCE_AMOUNT
from fluid.constants import DEFAULT_DT, DEFAULT_NX, DEFAULT_NY, ITERATIONS, VORTICITY_STRENGTH

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).resolve().parent / "configs"
SETTINGS_FILE = CONFIG_DIR / "settings.json"

# key -> (type, lo, hi); None leaves that side open. Values are coerced then clamped.
_WORLD_KEYS = {
    "nx": (int, 1, 512),
    "ny": (int, 1, 512),
}
_TOP_LEVEL_KEYS = {
    "tick_rate": (int, 1, 60),
    "dt": (float, 1e-4, 1.0),
    "fluid_index": (int, 0, None),
    "source_amount": (float, 0.0, None),
    "impulse": (float, 0.0, None),
    "iterations": (int, 1, 200),
    "vorticity_strength": (float, 0.0, None),
    "render_scale": (int, 1, 4),
    "cell_px": (int, 1, 64),
    "view_mode": (str, None, None),
}


def load_config(path: Path | str | None = None) -> dict:
    """Settings merged over defaults. Missing or unreadable files fall back to defaults."""
    p = Path(path) if path is not None else SETTINGS_FILE
    if not p.exists():
        return _default_config()
    try:
        with open(p, "r") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        logger.warning("could not read settings from %s (%s); using defaults", p, exc)
        return _default_config()
    if not isinstance(data, dict):
        logger.warning("settings in %s are not an object; using defaults", p)
        return _default_config()
    return _merge_defaults(data)


def save_config(cfg: dict, path: Path | str | None = None) -> Path:
    p = Path(path) if path is not None else SETTINGS_FILE
    p.parent.mkdir(parents=True, exist_ok=True)
    out = _merge_defaults(cfg)
    with open(p, "w") as f:
        json.dump(out, f, indent=2)
    logger.debug("saved settings to %s", p)
    return p


def _default_config() -> dict:
    return {
        "world": {"nx": DEFAULT_NX, "ny": DEFAULT_NY},
        "tick_rate": 30,
        "dt": DEFAULT_DT,
        "fluid_index": 0,
        "source_amount": DEFAULT_SOURCE_AMOUNT,
        "impulse": DEFAULT_IMPULSE,
        "iterations": ITERATIONS,
        "vorticity_strength": VORTICITY_STRENGTH,
        "render_scale": 1,
        "cell_px": 8,
        "view_mode": "color",
    }


def _coerce(key: str, raw, default, kind: tuple):
    """raw as kind's type, clamped to its range; default (with a warning) if it does not convert."""
    typ, lo, hi = kind
    try:
        if isinstance(raw, bool) or (typ is str and not isinstance(raw, str)):
            raise TypeError(type(raw).__name__)
        if typ is str:
            return raw
        value = typ(raw)
        if not math.isfinite(value):
            raise ValueError(raw)
    except (TypeError, ValueError, OverflowError):
        logger.warning("setting %s=%r is not a valid %s; using %r", key, raw, typ.__name__, default)
        return default
    if lo is not None:
        value = max(lo, value)
    if hi is not None:
        value = min(hi, value)
    return value


def _merge_defaults(data: dict) -> dict:
    d = _default_config()
    if isinstance(data.get("world"), dict):
        for k, kind in _WORLD_KEYS.items():
            if k in data["world"]:
                d["world"][k] = _coerce(k, data["world"][k], d["world"][k], kind)
    for k, kind in _TOP_LEVEL_KEYS.items():
        if k in data:
            d[k] = _coerce(k, data[k], d[k], kind)
    return d
