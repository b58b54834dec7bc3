"""
Matrix elements of the open-chain TFIM in the computational basis.

H = Σ h_i X_i + Σ_{i<N-1} J_i Z_i Z_{i+1}

Every basis state s contributes N off-diagonal entries (one X_i bit flip per
site) followed by one diagonal entry (the sum of its bond energies). Entries
are (row, col, value) with 1-based row/col. Duplicate coordinates are left
for the sparse assembler to sum.

The number of entries is 2^N (N + 1), so this is only practical for small
chains (N <~ 20).
"""

import logging
import warnings
from typing import Iterable, Iterator, Optional, Sequence

import numpy as np

from .basis import check_num_sites, enumerate_states, flip_bit, state_bits
from .config import ModelConfig, make_config

logger = logging.getLogger(__name__)

Triplet = tuple[int, int, complex]

# Above this many sites a RuntimeWarning is issued.
LARGE_CHAIN_SITES = 20


def expected_triplet_count(num_sites: int) -> int:
    return 2**num_sites * (num_sites + 1)


def _warn_if_large(num_sites: int) -> None:
    if num_sites > LARGE_CHAIN_SITES:
        warnings.warn(
            f"Building the TFIM for {num_sites} sites produces "
            f"{expected_triplet_count(num_sites)} matrix elements; "
            "cost grows exponentially with chain length.",
            RuntimeWarning,
            stacklevel=3,
        )


def state_triplets(config: ModelConfig, state: int) -> list[Triplet]:
    """
    Matrix elements generated by a single basis state.

    Args:
        config: Validated configuration (strengths already of length N)
        state: Basis state in [0, 2^N)

    Returns:
        N field entries (row=state+1, col=flipped+1, h_i) followed by one
        diagonal entry (state+1, state+1, Σ ±J_i)
    """
    N = config.num_sites
    bits = state_bits(state, N)
    row = state + 1

    out = []
    for i in range(N):
        out.append((row, flip_bit(state, i) + 1, complex(config.field_strength[i])))

    # Z_i Z_{i+1} is +1 for aligned bits and -1 for anti-aligned ones
    diag = 0.0
    for site in range(N - 1):
        if bits[site] == bits[site + 1]:
            diag += config.coupling_strength[site]
        else:
            diag -= config.coupling_strength[site]
    out.append((row, row, complex(diag)))

    return out


def iter_triplets(config: ModelConfig,
                  states: Optional[Iterable[int]] = None) -> Iterator[Triplet]:
    """
    Lazily yield matrix elements for a range of basis states.

    Passing disjoint sub-ranges of the basis shards the work; the
    concatenation of all shards assembles to the full Hamiltonian.
    """
    if states is None:
        states = enumerate_states(config.num_sites)
    for s in states:
        yield from state_triplets(config, s)


def build_ising_triplets(num_sites: int, field_strength: Sequence[float],
                         coupling_strength: Sequence[float]) -> list[Triplet]:
    """
    Build the full (row, col, value) list of the TFIM Hamiltonian.

    Args:
        num_sites: Number of sites N
        field_strength: h_i, length 1 or N
        coupling_strength: J_i, length 1 or N

    Returns:
        List of 2^N (N + 1) triplets with 1-based indices and complex values

    Raises:
        ConfigurationError: If a strength has the wrong length
        OverflowError: If 2^N does not fit the int64 index range
    """
    config = make_config(num_sites, field_strength, coupling_strength)
    states = enumerate_states(config.num_sites)
    _warn_if_large(config.num_sites)

    triplets = list(iter_triplets(config, states))
    logger.debug("built %d triplets for N=%d", len(triplets), config.num_sites)
    return triplets


def build_ising_coo(config: ModelConfig) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Vectorized version of the triplet builder.

    Returns the same entries, in the same order, as three arrays:
    rows and cols (int64, 1-based) and values (complex128).
    """
    N = config.num_sites
    check_num_sites(N)
    _warn_if_large(N)

    h = np.asarray(config.field_strength, dtype=float)
    J = np.asarray(config.coupling_strength, dtype=float)

    states = np.arange(config.dim, dtype=np.int64)
    masks = np.left_shift(np.int64(1), np.arange(N, dtype=np.int64))
    bits = (states[:, None] & masks) != 0

    flipped = states[:, None] ^ masks
    aligned = bits[:, :-1] == bits[:, 1:]
    diag = np.where(aligned, 1.0, -1.0) @ J[:N - 1]

    rows = np.repeat(states + 1, N + 1)
    cols = np.concatenate([flipped, states[:, None]], axis=1).ravel() + 1
    values = np.concatenate(
        [np.broadcast_to(h, (config.dim, N)), diag[:, None]], axis=1
    ).ravel().astype(np.complex128)

    logger.debug("built %d triplets for N=%d (vectorized)", len(values), N)
    return rows, cols, values
