#!/usr/bin/env python3
# image_banner/config.py
"""
Config loader/saver and defaults for Image Banner.

Goals:
- Single JSON file per user.
- Safe atomic writes.
- Deep-merge of user config over defaults.
- Basic validation with sane fallbacks.

Usage:
    from image_banner.config import Config
    cfg = Config.load()                 # ~/.config/image_banner/image_banner.json or OS-specific
    width = cfg["banner"]["max_width"]
    cfg["banner"]["invert"] = True
    cfg.save()
"""

from __future__ import annotations

import json
import logging
import os
import platform
import shutil
import tempfile
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from image_banner.rendering.resizer import RESAMPLE_FILTERS

log = logging.getLogger(__name__)

# ----------------------------
# Defaults
# ----------------------------

DEFAULT_CONFIG: Dict[str, Any] = {
    "banner": {
        "image": None,                    # path or URL; CLI argument wins
        "max_width": 76,                  # characters
        "aspect_ratio": 0.5,              # console cells are about twice as tall as wide
        "invert": False,                  # True for dark console backgrounds
    },
    "render": {
        "resample": "lanczos",            # lanczos | bicubic | bilinear | box | hamming | nearest
        "max_image_pixels": 89478485,     # Pillow decompression bomb limit while decoding
    },
    "source": {
        "user_agent": "image-banner/1.0",
        "connect_timeout_s": 5.0,
        "read_timeout_s": 15.0,
        "retries": 3,
    },
    "logging": {
        "level": "WARNING",
        "http_debug": False,
        "file": None,                     # path or None
        "rotate_bytes": 5 * 1024 * 1024,
        "rotate_keep": 3,
    },
}

# ----------------------------
# Helpers
# ----------------------------

def _os_config_home() -> str:
    """Return per-OS config base directory."""
    if platform.system() == "Windows":
        base = os.environ.get("APPDATA") or os.path.expanduser("~\\AppData\\Roaming")
        return os.path.join(base, "ImageBanner")
    if platform.system() == "Darwin":
        return os.path.join(os.path.expanduser("~/Library/Application Support"), "ImageBanner")
    return os.path.join(os.path.expanduser("~/.config"), "image_banner")

def _default_config_path() -> str:
    """Resolve default config path, honoring IMAGE_BANNER_CONFIG env override."""
    env = os.environ.get("IMAGE_BANNER_CONFIG")
    if env:
        return os.path.expanduser(env)
    return os.path.join(_os_config_home(), "image_banner.json")

def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    """Return deep-merged copy of dicts: values in b override a."""
    out = dict(a)
    for k, v in b.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out

def _atomic_write_json(path: str, data: Dict[str, Any]) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=".tmp_cfg_", dir=os.path.dirname(path) or ".")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, sort_keys=True)
            f.write("\n")
        os.replace(tmp, path)
    except Exception:
        try:
            os.remove(tmp)
        except OSError:
            pass
        raise

def _coerce_num(v: Any, default: float, minmax: Optional[Tuple[float, float]] = None) -> float:
    try:
        x = float(v)
        if x != x:  # NaN
            raise ValueError(v)
        if minmax:
            lo, hi = minmax
            if x < lo: x = lo
            if x > hi: x = hi
        return x
    except (TypeError, ValueError):
        return float(default)

def _coerce_int(v: Any, default: int, minmax: Optional[Tuple[int, int]] = None) -> int:
    try:
        if isinstance(v, bool):
            raise TypeError(v)
        x = int(v)
        if minmax:
            lo, hi = minmax
            if x < lo: x = lo
            if x > hi: x = hi
        return x
    except (TypeError, ValueError):
        return int(default)

def _coerce_bool(v: Any, default: bool) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        s = v.strip().lower()
        if s in ("1", "true", "yes", "on"): return True
        if s in ("0", "false", "no", "off"): return False
    return default

def _copy_defaults() -> Dict[str, Any]:
    return json.loads(json.dumps(DEFAULT_CONFIG))

# ----------------------------
# Validation
# ----------------------------

def _validate(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Return validated copy with fallbacks applied."""
    c = _deep_merge(_copy_defaults(), cfg or {})

    # banner
    b = c["banner"]
    img = b.get("image")
    b["image"] = str(img) if img else None
    b["max_width"] = _coerce_int(b.get("max_width"), DEFAULT_CONFIG["banner"]["max_width"], (1, 1000))
    b["aspect_ratio"] = _coerce_num(b.get("aspect_ratio"), DEFAULT_CONFIG["banner"]["aspect_ratio"], (0.05, 10.0))
    b["invert"] = _coerce_bool(b.get("invert"), DEFAULT_CONFIG["banner"]["invert"])

    # render
    r = c["render"]
    if r.get("resample") not in RESAMPLE_FILTERS:
        r["resample"] = DEFAULT_CONFIG["render"]["resample"]
    r["max_image_pixels"] = _coerce_int(
        r.get("max_image_pixels"), DEFAULT_CONFIG["render"]["max_image_pixels"], (1024, 2 ** 31)
    )

    # source
    s = c["source"]
    s["user_agent"] = str(s.get("user_agent") or DEFAULT_CONFIG["source"]["user_agent"])
    s["connect_timeout_s"] = _coerce_num(s.get("connect_timeout_s"), 5.0, (0.2, 60.0))
    s["read_timeout_s"]    = _coerce_num(s.get("read_timeout_s"), 15.0, (0.5, 120.0))
    s["retries"]           = _coerce_int(s.get("retries"), 3, (0, 10))

    # logging
    lg = c["logging"]
    if lg.get("level") not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"):
        lg["level"] = DEFAULT_CONFIG["logging"]["level"]
    lg["http_debug"] = _coerce_bool(lg.get("http_debug"), DEFAULT_CONFIG["logging"]["http_debug"])
    lf = lg.get("file")
    lg["file"] = str(lf) if lf else None
    lg["rotate_bytes"] = _coerce_int(lg.get("rotate_bytes"), DEFAULT_CONFIG["logging"]["rotate_bytes"], (256 * 1024, 50 * 1024 * 1024))
    lg["rotate_keep"]  = _coerce_int(lg.get("rotate_keep"), DEFAULT_CONFIG["logging"]["rotate_keep"], (0, 50))

    return c

# ----------------------------
# Public API
# ----------------------------

@dataclass
class Config:
    """Thin wrapper around a nested dict with load/save/merge."""
    data: Dict[str, Any] = field(default_factory=lambda: _validate({}))
    path: str = field(default_factory=_default_config_path)
    # Problems met while loading, kept for callers that set up logging afterwards.
    load_warnings: List[str] = field(default_factory=list)

    def __getitem__(self, k: str) -> Any:
        return self.data[k]

    def __setitem__(self, k: str, v: Any) -> None:
        self.data[k] = v

    def get(self, k: str, default: Any = None) -> Any:
        return self.data.get(k, default)

    @classmethod
    def load(
        cls,
        path: Optional[str] = None,
        create_if_missing: bool = True,
        defer_warnings: bool = False,
    ) -> "Config":
        """
        Load and validate the config at path (or the default location).
        With defer_warnings=True, load problems are only collected in
        load_warnings instead of being logged.
        """
        cfg_path = os.path.expanduser(path) if path else _default_config_path()
        if not os.path.exists(cfg_path):
            cfg = _validate({})
            if create_if_missing:
                _atomic_write_json(cfg_path, cfg)
            return cls(cfg, cfg_path)

        warnings: List[str] = []
        try:
            with open(cfg_path, "r", encoding="utf-8") as f:
                user_cfg = json.load(f)
            if not isinstance(user_cfg, dict):
                raise ValueError("top level must be an object")
        except (OSError, ValueError) as exc:
            # Corrupt file. Keep a backup and fall back to defaults.
            warnings.append(f"Ignoring unreadable config {cfg_path}: {exc}")
            if not defer_warnings:
                log.warning("%s", warnings[-1])
            try:
                shutil.copyfile(cfg_path, cfg_path + ".corrupt.bak")
            except OSError:
                pass
            user_cfg = {}

        return cls(_validate(user_cfg), cfg_path, warnings)

    def save(self) -> None:
        """Persist to JSON atomically."""
        self.data = _validate(self.data)
        _atomic_write_json(self.path, self.data)

    def update(self, partial: Dict[str, Any]) -> None:
        """Deep-merge a partial config then validate."""
        self.data = _validate(_deep_merge(self.data, partial))

    def diff(self) -> Dict[str, Any]:
        """Keys whose values differ from DEFAULT_CONFIG."""
        return _diff(_validate({}), self.data)


def _diff(base: Dict[str, Any], cur: Dict[str, Any]) -> Dict[str, Any]:
    """Return nested dictionary of keys where cur differs from base."""
    out: Dict[str, Any] = {}
    for k in cur.keys() | base.keys():
        if k not in base:
            out[k] = cur[k]
            continue
        if k not in cur:
            continue
        vb = base[k]
        vc = cur[k]
        if isinstance(vb, dict) and isinstance(vc, dict):
            d = _diff(vb, vc)
            if d:
                out[k] = d
        elif vb != vc:
            out[k] = vc
    return out

__all__ = [
    "Config",
    "DEFAULT_CONFIG",
    "_default_config_path",
]
