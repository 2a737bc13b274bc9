"""Tunable constants shared by the geometry builders."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Optional


@dataclass
class GeometryConfig:
    # sweeps this close to the bound are drawn as two arcs
    full_circle_epsilon: float = 1e-6
    # trimmed from the end angle of a split arc so start and end never coincide
    arc_epsilon: float = 1e-4
    stroke_arc_max_span: float = 359.999
    label_dead_zone: float = 0.1
    bar_fill_ratio: float = 0.8
    default_tick_count: int = 5
    headroom_factor: float = 1.1
    path_precision: int = 4
    radar_precision: int = 2
    marker_radius: float = 2.0
    gauge_start_angle: float = 135.0
    gauge_sweep: float = 270.0

    @property
    def gauge_end_angle(self) -> float:
        return self.gauge_start_angle + self.gauge_sweep


_GEOMETRY_CONFIG = GeometryConfig()


def get_geometry_config() -> GeometryConfig:
    return copy.deepcopy(_GEOMETRY_CONFIG)


def set_geometry_config(config: GeometryConfig) -> None:
    global _GEOMETRY_CONFIG
    _GEOMETRY_CONFIG = copy.deepcopy(config)


def resolve_config(config: Optional[GeometryConfig]) -> GeometryConfig:
    return config if config is not None else _GEOMETRY_CONFIG


__all__ = [
    "GeometryConfig",
    "get_geometry_config",
    "resolve_config",
    "set_geometry_config",
]
