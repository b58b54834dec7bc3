#!/usr/bin/env python3
"""
Exact diagonalization of open TFIM chains, checked against free fermions.

Usage:
    python scripts/run_ed.py --sites 2 4 6 8 10
    python scripts/run_ed.py --sites 8 --field 0.5 1.0 0.5 1.0 0.5 1.0 0.5 1.0 --coupling 1.0
    python scripts/run_ed.py --sites 12 --dmrg --chi 16
"""

import argparse
import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from isingchain.config import ConfigurationError, make_config
from isingchain.ed import exact_diagonalization
from isingchain.exact import free_fermion_energy
from isingchain.dmrg import run_finite_dmrg, check_tenpy
from isingchain.utils import save_results_json, print_header, format_energy_error


def run_ed_scan(sites: list[int], field: list[float], coupling: list[float],
                n_states: int = 4, dmrg_chi: int | None = None) -> list[dict]:
    """Run ED (and optionally DMRG) for each chain length."""
    results = []

    print_header("Open-chain TFIM: ED vs free-fermion solution")

    for N in sites:
        config = make_config(N, field, coupling)
        E_exact = free_fermion_energy(config)

        print(f"  N={N:>2}...", end=" ", flush=True)
        ed = exact_diagonalization(N, config.field_strength, config.coupling_strength,
                                   n_states=n_states)
        print(f"E = {ed.energy:.10f} (err={format_energy_error(ed.energy, E_exact)}), "
              f"gap = {ed.gap:.6f}")

        result = {
            'num_sites': N,
            'field_strength': config.field_strength,
            'coupling_strength': config.coupling_strength,
            'energy': ed.energy,
            'energy_per_site': ed.energy_per_site,
            'energy_exact': E_exact,
            'gap': ed.gap,
            'eigenvalues': ed.eigenvalues,
        }

        if dmrg_chi is not None and N >= 2:
            dm = run_finite_dmrg(config, chi_max=dmrg_chi)
            print(f"        DMRG D={dmrg_chi}: E = {dm.energy:.10f} "
                  f"(err={format_energy_error(dm.energy, E_exact)})")
            result['energy_dmrg'] = dm.energy

        results.append(result)

    return results


def main():
    parser = argparse.ArgumentParser(description='Open-chain TFIM exact diagonalization')
    parser.add_argument('--sites', type=int, nargs='+', default=[2, 4, 6, 8, 10],
                        help='Chain lengths')
    parser.add_argument('--field', type=float, nargs='+', default=[1.0],
                        help='Transverse field h_i (one value or one per site)')
    parser.add_argument('--coupling', type=float, nargs='+', default=[1.0],
                        help='Ising coupling J_i (one value or one per site)')
    parser.add_argument('--n-states', type=int, default=4,
                        help='Number of low-lying states')
    parser.add_argument('--dmrg', action='store_true', help='Also run finite DMRG')
    parser.add_argument('--chi', type=int, default=32, help='DMRG bond dimension')
    parser.add_argument('--output', type=str, default='ed_results.json',
                        help='Output JSON file')
    args = parser.parse_args()

    if args.dmrg and not check_tenpy():
        print("Error: TenPy is not installed. Install with: pip install physics-tenpy")
        sys.exit(1)

    try:
        results = run_ed_scan(args.sites, args.field, args.coupling, args.n_states,
                              dmrg_chi=args.chi if args.dmrg else None)
    except (ConfigurationError, OverflowError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    save_results_json(results, args.output, description="Open-chain TFIM ED")
    print(f"\nResults saved to {args.output}")


if __name__ == "__main__":
    main()
