"""
isingchain: brute-force matrix elements of the 1D transverse field Ising chain.

Builds the (row, col, value) list of the open-chain Hamiltonian in the
computational basis, assembles it with scipy.sparse, and diagonalizes it.

Hamiltonian: H = Σ h_i X_i + Σ J_i Z_i Z_{i+1}

References:
    [1] P. Pfeuty, Ann. Phys. 57, 79 (1970) - Exact 1D solution
    [2] TenPy: https://tenpy.readthedocs.io/
"""

from .config import ConfigurationError, ModelConfig, make_config
from .basis import (
    MAX_SITES,
    enumerate_states,
    state_bits,
    bits_to_state,
    flip_bit,
)
from .triplets import (
    build_ising_triplets,
    build_ising_coo,
    iter_triplets,
    state_triplets,
    expected_triplet_count,
)
from .ed import (
    build_hamiltonian,
    sparse_from_triplets,
    is_hermitian,
    reference_hamiltonian,
    smallest_eigenpair,
    lowest_eigenpairs,
    exact_diagonalization,
    evolve_state,
    compute_expectation,
    compute_correlator,
    IsingHamiltonian,
    EDResult,
)
from .exact import free_fermion_energy, exact_energy_density
from .constants import SIGMA_X, SIGMA_Y, SIGMA_Z, IDENTITY

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "ConfigurationError",
    "ModelConfig",
    "make_config",
    # Basis
    "MAX_SITES",
    "enumerate_states",
    "state_bits",
    "bits_to_state",
    "flip_bit",
    # Matrix elements
    "build_ising_triplets",
    "build_ising_coo",
    "iter_triplets",
    "state_triplets",
    "expected_triplet_count",
    # Exact diagonalization
    "build_hamiltonian",
    "sparse_from_triplets",
    "is_hermitian",
    "reference_hamiltonian",
    "smallest_eigenpair",
    "lowest_eigenpairs",
    "exact_diagonalization",
    "evolve_state",
    "compute_expectation",
    "compute_correlator",
    "IsingHamiltonian",
    "EDResult",
    # Exact analytical
    "free_fermion_energy",
    "exact_energy_density",
    # Constants
    "SIGMA_X",
    "SIGMA_Y",
    "SIGMA_Z",
    "IDENTITY",
]
