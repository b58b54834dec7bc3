"""
Output helpers for the ED scripts: JSON dumps and console formatting.
"""

import json
from pathlib import Path
from typing import Any

import numpy as np

HAMILTONIAN_STR = 'H = Σ h_i X_i + Σ J_i Z_i Z_{i+1} (open chain)'

# Differences below this are reported as zero.
ERROR_FLOOR = 1e-14


def _jsonable(obj: Any) -> Any:
    # numpy scalars and arrays become plain floats/lists; nan and inf become null
    if isinstance(obj, (np.floating, np.integer, float)):
        val = float(obj)
        return val if np.isfinite(val) else None
    if isinstance(obj, np.ndarray):
        return _jsonable(obj.tolist())
    if isinstance(obj, (list, tuple)):
        return [_jsonable(v) for v in obj]
    if isinstance(obj, dict):
        return {k: _jsonable(v) for k, v in obj.items()}
    return obj


def save_results_json(results: dict | list, filename: str | Path,
                      description: str = "TFIM results") -> None:
    """
    Write ED results to a JSON file.

    A list of result rows is stored under 'results'; a dict is merged into
    the top level next to 'description' and 'hamiltonian'.
    """
    output = {
        'description': description,
        'hamiltonian': HAMILTONIAN_STR,
    }

    if isinstance(results, list):
        output['results'] = _jsonable(results)
    else:
        output.update(_jsonable(results))

    with open(filename, 'w') as f:
        json.dump(output, f, indent=2)


def format_energy_error(E: float, E_exact: float) -> str:
    err = abs(E - E_exact)
    return f"< {ERROR_FLOOR:.0e}" if err < ERROR_FLOOR else f"{err:.2e}"


def print_header(title: str, width: int = 80) -> None:
    rule = "=" * width
    print(f"{rule}\n{title}\n{rule}")
