import numpy as np

from wigner.core._status import Domain, ErrorKind, Result, allocate, failure, success


def fill_legendre(out: np.ndarray, lmin: int, lmax: int, x: float) -> None:
    """Write ``P_l(x)`` for ``l = lmin, ..., lmax`` into ``out``.

    Bonnet's recursion ``l P_l = (2l - 1) x P_{l-1} - (l - 1) P_{l-2}``
    started from ``P_0 = 1``.
    """
    p_prev, p = 0.0, 1.0
    if lmin == 0:
        out[0] = p
    for l in range(1, lmax + 1):
        p_prev, p = p, ((2 * l - 1) * x * p - (l - 1) * p_prev) / l
        if l >= lmin:
            out[l - lmin] = p


def legendre(lmin: int, lmax: int, x: float) -> Result:
    if lmin < 0 or lmax < lmin:
        return failure(ErrorKind.INVALID_RANGE)

    domain = Domain(float(lmin), float(lmax))
    buf = allocate(lmax - lmin + 1)
    if buf is None:
        return failure(ErrorKind.ALLOCATION_FAILURE, domain)

    fill_legendre(buf.data, lmin, lmax, x)
    return success(domain, buf)
