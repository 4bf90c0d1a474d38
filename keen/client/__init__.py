from keen.client.chart import ChartSpec, build_chart
from keen.client.derivation import DerivedPoint, compact_magnitude, derive_change, drop_absent
from keen.client.selection import ChartMode, Selection, SelectionStateMachine

__all__ = [
    "ChartSpec",
    "build_chart",
    "DerivedPoint",
    "compact_magnitude",
    "derive_change",
    "drop_absent",
    "ChartMode",
    "Selection",
    "SelectionStateMachine",
]
