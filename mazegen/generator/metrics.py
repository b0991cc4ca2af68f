from typing import Dict


def init_metrics() -> Dict[str, int | float | dict]:
    return {
        'rooms_requested': 0,
        'rooms_placed': 0,
        'rooms_dropped': 0,
        'placement_attempts': 0,
        'connections': 0,
        'connections_skipped': 0,
        'unreachable_rooms': 0,
        'corridor_cells': 0,
        'doors_created': 0,
        'doors_rejected': 0,
        'runtime_ms': 0.0,
        'phase_ms': {},
    }
