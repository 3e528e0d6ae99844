from typing import Dict


def init_metrics() -> Dict[str, int | float]:
    return {
        'rooms': 0,
        'doors': 0,
        'walls': 0,
        'unused_edges': 0,
        'backtracks': 0,
        'size_draws': 0,
        'placement_failures': 0,
        'swallowed_targets': 0,
        'unreachable_rooms': 0,
        'runtime_ms': 0.0,
    }
