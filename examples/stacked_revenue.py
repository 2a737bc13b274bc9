"""Example: stacked bars with mixed signs and a nice-tick value axis."""

from chartgeom import nice_ticks, stack_layout

DATA = [
    {"quarter": "Q1", "product": "$12,400", "services": 8300, "refunds": -2100},
    {"quarter": "Q2", "product": "$15,900", "services": 9100, "refunds": -3400},
    {"quarter": "Q3", "product": "n/a", "services": 10200, "refunds": -1800},
]


def main() -> None:
    diagnostics = []
    layout = stack_layout(
        DATA,
        ["product", "services", "refunds"],
        width=480,
        height=320,
        label_key="quarter",
        diagnostics=diagnostics,
    )
    print("Baseline y:", layout.baseline)
    print("Ticks:", nice_ticks(-layout.max_abs_value, layout.max_abs_value))
    for bar in layout.bars:
        print(f"{bar.label}: total={bar.total:.0f}")
        for seg in bar.segments:
            print(f"  {seg.key:<9} x={seg.x:.1f} y={seg.y:.1f} w={seg.width:.1f} h={seg.height:.1f}")
    for diagnostic in diagnostics:
        print("warning:", diagnostic.message)


if __name__ == "__main__":
    main()
