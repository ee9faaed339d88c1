"""Run configuration loaded from YAML or JSON.

Example ``config.yaml``::

    instance: data/instances/ft06
    heuristic: longest_operation_first
    machine_base: 1        # optional, 0 or 1; detected when omitted
    log_level: INFO
    color: true
    verify: true
    charts:
      dir: charts
      gantt: gantt.png
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional

import yaml

from jobshop.heuristics import DEFAULT_HEURISTIC, HEURISTICS

DEFAULT_INSTANCE = os.path.join("data", "instances", "ft06")


@dataclass(slots=True)
class RunConfig:
    """Settings for one CLI run.

    ``gantt`` is a file name resolved against ``charts_dir``; ``None`` skips
    the image.
    """

    instance: str = DEFAULT_INSTANCE
    heuristic: str = DEFAULT_HEURISTIC
    log_level: str = "INFO"
    color: bool = True
    verify: bool = True
    charts_dir: str = "charts"
    gantt: Optional[str] = None
    machine_base: Optional[int] = None

    def merged(self, **overrides: Any) -> RunConfig:
        """Copy with every non-``None`` override applied."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    @property
    def gantt_path(self) -> Optional[str]:
        if not self.gantt:
            return None
        if os.path.dirname(self.gantt):
            return self.gantt
        return os.path.join(self.charts_dir, self.gantt)


def _section(cfg: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = cfg.get(name, {})
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"Config section {name!r} must be a mapping")
    return value


def parse_config(cfg: Dict[str, Any]) -> RunConfig:
    """Build a ``RunConfig`` from an already decoded mapping."""
    if not isinstance(cfg, dict):
        raise ValueError("Config root must be a mapping")
    charts_cfg = _section(cfg, "charts")
    defaults = RunConfig()

    heuristic = str(cfg.get("heuristic", defaults.heuristic))
    if heuristic not in HEURISTICS:
        known = ", ".join(sorted(HEURISTICS))
        raise ValueError(f"Unknown heuristic in config: {heuristic!r} (known: {known})")

    machine_base = cfg.get("machine_base", defaults.machine_base)
    if machine_base not in (None, 0, 1):
        raise ValueError(f"machine_base must be 0 or 1, got {machine_base!r}")

    return RunConfig(
        instance=str(cfg.get("instance", defaults.instance)),
        heuristic=heuristic,
        log_level=str(cfg.get("log_level", defaults.log_level)).upper(),
        color=bool(cfg.get("color", defaults.color)),
        verify=bool(cfg.get("verify", defaults.verify)),
        charts_dir=str(charts_cfg.get("dir", defaults.charts_dir)),
        gantt=charts_cfg.get("gantt", defaults.gantt),
        machine_base=machine_base,
    )


def load_config(path: str) -> RunConfig:
    """Load a YAML (``.yml``/``.yaml``) or JSON config file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: On malformed sections or an unknown heuristic.
    """
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        text = f.read()

    if path.endswith((".yml", ".yaml")):
        cfg: Dict[str, Any] = yaml.safe_load(text) or {}
    else:
        cfg = json.loads(text)
    return parse_config(cfg)
