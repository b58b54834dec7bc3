"""
Computational basis of an N-site spin-1/2 chain.

A basis state is an integer whose bit i is the Z configuration of site i
(0 -> Z=+1, 1 -> Z=-1), i.e. little-endian in the site index.
"""

# Sparse indices are int64; the 1-based index 2^N must stay below 2^63.
MAX_SITES = 62


def check_num_sites(num_sites: int) -> None:
    """Raise OverflowError if 2^num_sites states cannot be indexed."""
    if num_sites > MAX_SITES:
        raise OverflowError(
            f"2^{num_sites} basis states exceed the int64 index range "
            f"(at most {MAX_SITES} sites)")


def enumerate_states(num_sites: int) -> range:
    """All basis states 0 .. 2^N - 1 in ascending order."""
    check_num_sites(num_sites)
    return range(2**num_sites)


def state_bits(state: int, num_sites: int) -> tuple[int, ...]:
    """Bit vector of a basis state; entry i is the bit of site i."""
    return tuple((state >> i) & 1 for i in range(num_sites))


def bits_to_state(bits) -> int:
    """Inverse of state_bits."""
    state = 0
    for i, b in enumerate(bits):
        state |= (b & 1) << i
    return state


def flip_bit(state: int, site: int) -> int:
    return state ^ (1 << site)
