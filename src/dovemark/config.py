# config.py
from __future__ import annotations

import argparse
import logging
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Dict, Tuple

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # type: ignore

from .model import JointConfig
from .units import IMPERIAL_STEP_MM, METRIC_STEP_MM, round_half_up, unit_step_mm

log = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("dovemark.toml")
OUTPUT_FORMATS = ("table", "json")

# (min, max) per JointConfig field, as offered by the layout sliders.
SLIDER_RANGES: Dict[str, Tuple[float, float]] = {
    "width_mm": (50.0, 600.0),
    "thickness_mm": (METRIC_STEP_MM, 50.0),
    "angle_deg": (0.0, 15.0),
    "half_pin_size": (0.3, 1.0),
    "tail_to_pin": (0.7, 3.0),
    "density": (0.1, 1.0),
    "tail_variation": (1.0, 2.0),
}


@dataclass
class RunConfig:
    joint_config: JointConfig
    imperial: bool
    output_format: str
    clamp: bool


def default_joint_config() -> JointConfig:
    return JointConfig(
        width_mm=300.0,
        thickness_mm=25.0,
        angle_deg=10.0,
        half_pin_size=0.7,
        tail_to_pin=1.8,
        density=0.5,
        tail_variation=1.3,
    )


def build_arg_parser() -> argparse.ArgumentParser:
    """
    Build the CLI argument parser for joint and display flags.

    Returns:
        Configured argparse.ArgumentParser instance.
    """
    p = argparse.ArgumentParser(
        description="Dovetail layout calculator: pin/tail positions and marking points",
    )
    p.add_argument(
        "--config",
        type=Path,
        help=f"TOML config file (defaults to {DEFAULT_CONFIG_PATH} if present)",
    )
    p.add_argument(
        "--imperial",
        dest="imperial",
        action="store_true",
        help="Show lengths in inches (1/16 resolution)",
    )
    p.add_argument(
        "--metric",
        dest="imperial",
        action="store_false",
        help="Show lengths in millimetres (default)",
    )
    p.set_defaults(imperial=None)
    p.add_argument("--format", dest="output_format", choices=OUTPUT_FORMATS)
    p.add_argument(
        "--no-clamp",
        action="store_true",
        help="Use joint values exactly as given instead of snapping/clamping to slider ranges",
    )

    # Joint overrides
    p.add_argument("--width-mm", type=float)
    p.add_argument("--thickness-mm", type=float)
    p.add_argument("--angle-deg", type=float)
    p.add_argument("--half-pin-size", type=float, help="Half-pin to pin ratio")
    p.add_argument("--tail-to-pin", type=float, help="Tail to pin ratio")
    p.add_argument("--density", type=float, help="Pin frequency (0.1 = few wide pins)")
    p.add_argument("--tail-variation", type=float, help="Widest to narrowest tail ratio")

    p.add_argument("--log-level", default="INFO")
    return p


def _load_toml(path: Path) -> dict:
    """
    Load a TOML config file.

    Raises:
        FileNotFoundError: If the file is missing.
        tomllib.TOMLDecodeError: On parse errors.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open("rb") as f:
        return tomllib.load(f)


def _dict_get_nested(data: dict, key: str, default=None):
    """Fetch a dotted-path value from a nested dict."""
    parts = key.split(".")
    current_level = data
    for part in parts[:-1]:
        current_level = current_level.get(part, {})
    return current_level.get(parts[-1], default)


def snap_to_units(joint_config: JointConfig, imperial: bool) -> JointConfig:
    """Round width and thickness to the nearest slider step for the unit system."""
    step = unit_step_mm(imperial)
    return replace(
        joint_config,
        width_mm=round_half_up(joint_config.width_mm / step) * step,
        thickness_mm=round_half_up(joint_config.thickness_mm / step) * step,
    )


def clamp_joint_config(joint_config: JointConfig, imperial: bool = False) -> JointConfig:
    """Clamp every field into SLIDER_RANGES; the thickness floor follows the unit step."""
    clamped = {}
    for name, (lo, hi) in SLIDER_RANGES.items():
        if name == "thickness_mm" and imperial:
            lo = IMPERIAL_STEP_MM
        value = getattr(joint_config, name)
        clamped[name] = min(max(value, lo), hi)
        if clamped[name] != value:
            log.info("Clamped %s from %s to %s", name, value, clamped[name])
    return replace(joint_config, **clamped)


def load_config_and_args(args: argparse.Namespace) -> RunConfig:
    """
    Merge CLI args with TOML config into a RunConfig.

    Precedence: built-in defaults < TOML file < CLI flags; then snapping and
    clamping unless --no-clamp.

    Raises:
        SystemExit: On missing/invalid config when explicitly requested.
    """
    cfg_data: dict = {}
    cfg_path: Path | None = args.config
    used_default = False

    # Default: try dovemark.toml if no explicit --config was provided
    if cfg_path is None:
        if DEFAULT_CONFIG_PATH.exists():
            cfg_path = DEFAULT_CONFIG_PATH
            used_default = True

    if cfg_path is not None:
        try:
            cfg_data = _load_toml(cfg_path)
        except FileNotFoundError:
            if not used_default:
                raise SystemExit(f"Config file not found: {cfg_path}")
        except Exception as e:  # TOML parse errors, permission issues, etc.
            raise SystemExit(f"Failed to load config file {cfg_path}: {e}") from e

    defaults = asdict(default_joint_config())
    joint_config = JointConfig(
        **{name: _dict_get_nested(cfg_data, f"joint.{name}", value) for name, value in defaults.items()}
    )

    # CLI overrides
    for name in defaults:
        override = getattr(args, name, None)
        if override is not None:
            setattr(joint_config, name, override)

    imperial = bool(_dict_get_nested(cfg_data, "display.imperial", False))
    if args.imperial is not None:
        imperial = bool(args.imperial)

    output_format = _dict_get_nested(cfg_data, "display.format", "table")
    if args.output_format is not None:
        output_format = args.output_format
    if output_format not in OUTPUT_FORMATS:
        raise SystemExit(
            f"Invalid output format '{output_format}'; expected one of {sorted(OUTPUT_FORMATS)}"
        )

    clamp = not getattr(args, "no_clamp", False)
    if clamp:
        joint_config = clamp_joint_config(snap_to_units(joint_config, imperial), imperial)

    log.debug("JointConfig: %s", asdict(joint_config))

    return RunConfig(
        joint_config=joint_config,
        imperial=imperial,
        output_format=output_format,
        clamp=clamp,
    )
