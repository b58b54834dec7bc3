"""
Sparse assembly and exact diagonalization for finite TFIM chains.

Uses scipy sparse eigensolvers for systems up to N ~ 18-20 sites.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np
from scipy import sparse
from scipy.sparse.linalg import eigsh, expm_multiply

from .config import ModelConfig, make_config
from .constants import SIGMA_X, SIGMA_Z, IDENTITY
from .triplets import Triplet, build_ising_coo, build_ising_triplets

logger = logging.getLogger(__name__)

# Matrices up to this dimension are diagonalized densely.
DENSE_CUTOFF = 64


@dataclass
class IsingHamiltonian:
    """Assembled Hamiltonian together with the configuration it came from."""
    config: ModelConfig
    matrix: sparse.csr_matrix
    hermitian: bool

    @property
    def dim(self) -> int:
        return self.config.dim


@dataclass
class EDResult:
    """Result from exact diagonalization."""
    num_sites: int
    field_strength: tuple[float, ...]
    coupling_strength: tuple[float, ...]
    energy: float
    energy_per_site: float
    gap: float
    eigenvalues: np.ndarray
    ground_state: np.ndarray


def sparse_from_triplets(triplets: Iterable[Triplet], dim: int) -> sparse.csr_matrix:
    """
    Assemble 1-based (row, col, value) entries into a dim x dim matrix.

    Entries sharing a coordinate are summed.
    """
    triplets = list(triplets)
    if triplets:
        rows, cols, values = zip(*triplets)
    else:
        rows, cols, values = (), (), ()
    return _sparse_from_arrays(np.asarray(rows, dtype=np.int64),
                               np.asarray(cols, dtype=np.int64),
                               np.asarray(values, dtype=np.complex128), dim)


def _sparse_from_arrays(rows: np.ndarray, cols: np.ndarray, values: np.ndarray,
                        dim: int) -> sparse.csr_matrix:
    H = sparse.coo_matrix((values, (rows - 1, cols - 1)), shape=(dim, dim),
                          dtype=np.complex128)
    # tocsr sums duplicate coordinates
    return H.tocsr()


def is_hermitian(matrix, atol: float = 1e-12) -> bool:
    """Check H == H^dagger to within atol (sparse or dense input)."""
    diff = matrix - matrix.conj().T
    if sparse.issparse(diff):
        if diff.nnz == 0:
            return True
        return bool(np.max(np.abs(diff.data)) <= atol)
    return bool(np.allclose(diff, 0, atol=atol))


def build_hamiltonian(num_sites: int, field_strength: Sequence[float],
                      coupling_strength: Sequence[float],
                      vectorized: bool = False) -> IsingHamiltonian:
    """
    Build sparse TFIM Hamiltonian.

    H = Σ h_i X_i + Σ J_i Z_i Z_{i+1}   (open chain)

    Args:
        num_sites: Number of sites
        field_strength: Transverse field h_i (length 1 or N)
        coupling_strength: Ising coupling J_i (length 1 or N)
        vectorized: Use the numpy triplet builder instead of the per-state loop

    Returns:
        IsingHamiltonian wrapping a (2^N x 2^N) CSR matrix
    """
    config = make_config(num_sites, field_strength, coupling_strength)

    if vectorized:
        H = _sparse_from_arrays(*build_ising_coo(config), config.dim)
    else:
        triplets = build_ising_triplets(config.num_sites, config.field_strength,
                                        config.coupling_strength)
        H = sparse_from_triplets(triplets, config.dim)

    return IsingHamiltonian(config=config, matrix=H, hermitian=is_hermitian(H))


def _site_operator(ops: dict, num_sites: int) -> sparse.csr_matrix:
    # Site i is bit i of the state index, so it is the (N-1-i)-th kron factor.
    factors = [sparse.csr_matrix(IDENTITY) for _ in range(num_sites)]
    for site, op in ops.items():
        factors[num_sites - 1 - site] = sparse.csr_matrix(op)
    result = factors[0]
    for k in range(1, num_sites):
        result = sparse.kron(result, factors[k], format='csr')
    return result


def single_site_operator(op: np.ndarray, site: int, num_sites: int) -> sparse.csr_matrix:
    """Embed a 2x2 operator acting on one site."""
    return _site_operator({site: op}, num_sites)


def two_site_operator(op1: np.ndarray, site1: int,
                      op2: np.ndarray, site2: int, num_sites: int) -> sparse.csr_matrix:
    """Embed a product of 2x2 operators acting on two distinct sites."""
    return _site_operator({site1: op1, site2: op2}, num_sites)


def reference_hamiltonian(config: ModelConfig) -> sparse.csr_matrix:
    """Same Hamiltonian built from Kronecker products of Pauli matrices."""
    N = config.num_sites
    H = sparse.csr_matrix((config.dim, config.dim), dtype=complex)

    for i in range(N):
        H += config.field_strength[i] * single_site_operator(SIGMA_X, i, N)

    for i in range(N - 1):
        H += config.coupling_strength[i] * two_site_operator(SIGMA_Z, i, SIGMA_Z, i + 1, N)

    return H


def lowest_eigenpairs(matrix, k: int = 1) -> tuple[np.ndarray, np.ndarray]:
    """
    Lowest k eigenvalues and eigenvectors of a Hermitian matrix, sorted.

    Small or nearly-full requests go through dense eigh; otherwise ARPACK.
    """
    dim = matrix.shape[0]
    if k < 1:
        raise ValueError(f"k must be >= 1, got {k}")
    k = min(k, dim)

    if dim <= DENSE_CUTOFF or k >= dim - 1:
        logger.debug("dense eigh, dim=%d, k=%d", dim, k)
        dense = matrix.toarray() if sparse.issparse(matrix) else np.asarray(matrix)
        eigenvalues, eigenvectors = np.linalg.eigh(dense)
        return eigenvalues[:k], eigenvectors[:, :k]

    logger.debug("eigsh, dim=%d, k=%d", dim, k)
    eigenvalues, eigenvectors = eigsh(matrix, k=k, which='SA', return_eigenvectors=True)

    # Sort by energy
    idx = np.argsort(eigenvalues)
    return eigenvalues[idx], eigenvectors[:, idx]


def smallest_eigenpair(matrix) -> tuple[float, np.ndarray]:
    """Ground-state energy and vector."""
    eigenvalues, eigenvectors = lowest_eigenpairs(matrix, k=1)
    return float(np.real(eigenvalues[0])), eigenvectors[:, 0]


def exact_diagonalization(num_sites: int, field_strength: Sequence[float],
                          coupling_strength: Sequence[float],
                          n_states: int = 4) -> EDResult:
    """
    Compute ground state via exact diagonalization.

    Args:
        num_sites: Number of sites
        field_strength: Transverse field h_i
        coupling_strength: Ising coupling J_i
        n_states: Number of low-lying states to compute

    Returns:
        EDResult with energy, gap, and ground state vector
    """
    if n_states < 1:
        raise ValueError(f"n_states must be >= 1, got {n_states}")

    ham = build_hamiltonian(num_sites, field_strength, coupling_strength)
    eigenvalues, eigenvectors = lowest_eigenpairs(ham.matrix, k=n_states)
    eigenvalues = np.real(eigenvalues)

    E0 = float(eigenvalues[0])
    gap = float(eigenvalues[1] - E0) if len(eigenvalues) > 1 else np.nan

    return EDResult(
        num_sites=ham.config.num_sites,
        field_strength=ham.config.field_strength,
        coupling_strength=ham.config.coupling_strength,
        energy=E0,
        energy_per_site=E0 / ham.config.num_sites,
        gap=gap,
        eigenvalues=eigenvalues,
        ground_state=eigenvectors[:, 0],
    )


def evolve_state(matrix, psi0: np.ndarray, t: float) -> np.ndarray:
    """
    Real-time evolution |psi(t)> = exp(-i H t) |psi0>.

    Uses scipy's expm_multiply, which never forms the full exponential.
    """
    psi0 = np.asarray(psi0, dtype=np.complex128)
    return expm_multiply(-1j * t * matrix, psi0)


def compute_expectation(psi: np.ndarray, num_sites: int, op: np.ndarray,
                        site: int) -> complex:
    """
    Compute single-site expectation <psi| O |psi>.

    Args:
        psi: State vector (2^N)
        num_sites: Number of sites
        op: Single-site operator (2x2 matrix)
        site: Site index

    Returns:
        Complex expectation value
    """
    O = single_site_operator(op, site, num_sites)
    return np.vdot(psi, O @ psi)


def compute_correlator(psi: np.ndarray, num_sites: int, op1: np.ndarray,
                       site1: int, op2: np.ndarray, site2: int) -> complex:
    """Compute two-point correlator <psi| O_1 O_2 |psi> for site1 != site2."""
    O = two_site_operator(op1, site1, op2, site2, num_sites)
    return np.vdot(psi, O @ psi)
