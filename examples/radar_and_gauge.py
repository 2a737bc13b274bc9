"""Example: radar polygons for two series and a zoned gauge."""

from chartgeom import AxisSpec, Series, Zone, gauge_layout, radar_axes, radar_grid, radar_series

AXES = [
    AxisSpec("speed", "Speed"),
    AxisSpec("power", "Power"),
    AxisSpec("range", "Range", min=0, max=600),
    AxisSpec("comfort", "Comfort"),
    AxisSpec("price", "Price"),
]
SERIES = [
    Series("a", "Model A", {"speed": 180, "power": "320", "range": 450, "comfort": 7, "price": 42}),
    Series("b", "Model B", {"speed": 210, "power": 280, "range": 390, "comfort": 9, "price": 55}),
]


def main() -> None:
    cx, cy, radius = 150, 150, 110
    axes = radar_axes(AXES, SERIES, cx, cy, radius, label_offset=14)
    for axis in axes:
        print(f"{axis.label}: domain=({axis.domain.min}, {axis.domain.max}) anchor={axis.label_anchor.text_anchor}")
    for ring in radar_grid(cx, cy, radius, levels=4, sides=len(AXES)):
        print("grid:", ring)
    for shape in radar_series(SERIES, axes, cx, cy, radius):
        print(f"{shape.name}: {shape.path}")

    gauge = gauge_layout(
        72, 0, 100, 100, 100, 80, 12,
        zones=[Zone(0, 60, "#2e7d32"), Zone(60, 85, "#f9a825"), Zone(85, 100, "#c62828")],
    )
    print("Gauge angle:", gauge.value_angle)
    print("Active zone:", gauge.active_zone.color if gauge.active_zone else None)
    print("Progress:", gauge.progress_path)


if __name__ == "__main__":
    main()
