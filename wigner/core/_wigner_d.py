"""Wigner small-d matrix elements by upward recursion in ``l``.

For fixed ``m1``, ``m2`` and ``theta`` the elements satisfy

    l sqrt(((l+1)^2 - m1^2) ((l+1)^2 - m2^2)) d^{l+1}
        = (2l + 1) (l (l+1) cos(theta) - m1 m2) d^l
          - (l+1) sqrt((l^2 - m1^2) (l^2 - m2^2)) d^{l-1}

The last term vanishes at ``l0 = max(|m1|, |m2|)``, so the recursion needs a
single start value, ``d^{l0}_{m1 m2}``, for which the explicit Wigner sum has
exactly one term.
"""

from math import cos, exp, lgamma, sin, sqrt

from wigner.core._legendre import fill_legendre
from wigner.core._status import Domain, ErrorKind, Result, allocate, failure, success


def _lfact(n: int) -> float:
    return lgamma(n + 1.0)


def _start_value(l0: int, m1: int, m2: int, c: float, s: float) -> float:
    """``d^{l0}_{m1 m2}`` with ``c = cos(theta/2)``, ``s = sin(theta/2)``."""
    k = max(0, m2 - m1)
    log_pref = 0.5 * (_lfact(l0 + m1) + _lfact(l0 - m1) + _lfact(l0 + m2) + _lfact(l0 - m2)) - (
        _lfact(l0 + m2 - k) + _lfact(k) + _lfact(m1 - m2 + k) + _lfact(l0 - m1 - k)
    )
    sign = -1.0 if (k + m1 - m2) % 2 else 1.0
    return sign * exp(log_pref) * c ** (2 * l0 + m2 - m1 - 2 * k) * s ** (m1 - m2 + 2 * k)


def wigner_d(lmin: int, lmax: int, m1: int, m2: int, theta: float) -> Result:
    """``d^l_{m1 m2}(theta)`` for ``l = lmin, ..., lmax``.

    Entries with ``l < max(|m1|, |m2|)`` are zero.
    """
    if lmin < 0 or lmax < lmin:
        return failure(ErrorKind.INVALID_RANGE)

    domain = Domain(float(lmin), float(lmax))
    buf = allocate(lmax - lmin + 1)
    if buf is None:
        return failure(ErrorKind.ALLOCATION_FAILURE, domain)
    d = buf.data

    x = cos(theta)
    if m1 == 0 and m2 == 0:
        fill_legendre(d, lmin, lmax, x)
        return success(domain, buf)

    l0 = max(abs(m1), abs(m2))
    if l0 > lmax:
        return success(domain, buf)

    mm = m1 * m2
    m1sq = m1 * m1
    m2sq = m2 * m2

    d_prev = 0.0
    d_cur = _start_value(l0, m1, m2, cos(0.5 * theta), sin(0.5 * theta))
    if l0 >= lmin:
        d[l0 - lmin] = d_cur
    for l in range(l0, lmax):
        lp1sq = (l + 1) * (l + 1)
        d_next = (
            (2 * l + 1) * (l * (l + 1) * x - mm) * d_cur
            - (l + 1) * sqrt((l * l - m1sq) * (l * l - m2sq)) * d_prev
        ) / (l * sqrt((lp1sq - m1sq) * (lp1sq - m2sq)))
        d_prev, d_cur = d_cur, d_next
        if l + 1 >= lmin:
            d[l + 1 - lmin] = d_cur
    return success(domain, buf)
