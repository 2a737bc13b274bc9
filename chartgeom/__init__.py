from .types import (
    AxisSpec,
    ChartGeometryError,
    Domain,
    InvalidInputError,
    Series,
    Vec2,
    Zone,
    ZoneArc,
    StackLayout,
    StackSegment,
    RegressionResult,
)
from .diagnostics import Diagnostic, DiagnosticSink
from .config import GeometryConfig, get_geometry_config, set_geometry_config
from .coercion import coerce_number, coerce_optional_number, format_number, format_percentage, read_field
from .scales import axis_bounds, even_ticks, linear_scale, nice_round_up, nice_step, nice_ticks, normalize, padded_domain
from .paths import area_path, fmt, line_layout, line_path
from .polar import (
    describe_arc,
    describe_semi_arc,
    describe_stroke_arc,
    gauge_layout,
    pie_slices,
    polar_to_cartesian,
    value_to_angle,
    zone_arcs,
)
from .radar import (
    axis_angle,
    grid_ring_path,
    label_anchor,
    point_in_polygon,
    polygon_centroid,
    polygon_path,
    radar_axes,
    radar_grid,
    radar_point,
    radar_series,
)
from .stack import bar_layout, stack_layout
from .regression import linear_regression, trend_line
from .scatter import scatter_layout
from .cache import GeometryCache

__all__ = [
    'AxisSpec',
    'ChartGeometryError',
    'Domain',
    'InvalidInputError',
    'Series',
    'Vec2',
    'Zone',
    'ZoneArc',
    'StackLayout',
    'StackSegment',
    'RegressionResult',
    'Diagnostic',
    'DiagnosticSink',
    'GeometryConfig',
    'get_geometry_config',
    'set_geometry_config',
    'read_field',
    'coerce_number',
    'coerce_optional_number',
    'format_number',
    'format_percentage',
    'linear_scale',
    'normalize',
    'nice_step',
    'nice_round_up',
    'nice_ticks',
    'even_ticks',
    'axis_bounds',
    'padded_domain',
    'fmt',
    'line_path',
    'area_path',
    'line_layout',
    'polar_to_cartesian',
    'describe_arc',
    'describe_semi_arc',
    'describe_stroke_arc',
    'value_to_angle',
    'zone_arcs',
    'pie_slices',
    'gauge_layout',
    'axis_angle',
    'radar_point',
    'polygon_path',
    'grid_ring_path',
    'radar_grid',
    'label_anchor',
    'point_in_polygon',
    'polygon_centroid',
    'radar_axes',
    'radar_series',
    'stack_layout',
    'bar_layout',
    'linear_regression',
    'trend_line',
    'scatter_layout',
    'GeometryCache',
]
