import logging
import operator

import torch

from wigner import core
from wigner.core import ErrorKind

logger = logging.getLogger(__name__)


class WignerError(ValueError):
    """Invalid quantum numbers; ``kind`` tells which check failed."""

    def __init__(self, kind, message):
        super().__init__(message)
        self.kind = kind


_MESSAGES = {
    "wigner_3j_l": {
        ErrorKind.MAGNITUDE_EXCEEDS_L: "either `l2 < abs(m2)` or `l3 < abs(m3)`",
        ErrorKind.NON_INTEGER_PARITY: "either `l2+abs(m2)` or `l3+abs(m3)` non-integer",
        ErrorKind.NON_INTEGER_RANGE: "`l1max-l1min` not an integer",
        ErrorKind.EMPTY_RANGE: "`l1max` less than `l1min`",
    },
    "wigner_3j_m": {
        ErrorKind.MAGNITUDE_EXCEEDS_L: "`l1 < abs(m1)`",
        ErrorKind.NON_INTEGER_PARITY: "`l1+abs(m1)` non-integer",
        ErrorKind.TRIANGLE_VIOLATION: "`abs(l1-l2) <= l3 <= l1+l2` not satisfied",
        ErrorKind.NON_INTEGER_SUM: "`l1+l2+l3` not an integer",
        ErrorKind.NON_INTEGER_RANGE: "`m2max-m2min` not an integer",
        ErrorKind.EMPTY_RANGE: "`m2max` less than `m2min`",
    },
    "wigner_d_l": {
        ErrorKind.INVALID_RANGE: "requires 0 <= lmin <= lmax",
    },
    "legendre_p_l": {
        ErrorKind.INVALID_RANGE: "requires 0 <= lmin <= lmax",
    },
}


def _take(name, result, as_tensor):
    """Turn a core result into the caller's array, or raise."""
    if result.error is not None:
        logger.debug("%s rejected input: %s", name, result.error.name)
        if result.error is ErrorKind.ALLOCATION_FAILURE:
            raise MemoryError(f"{name}: cannot allocate {result.domain.size} coefficients")
        raise WignerError(result.error, _MESSAGES[name][result.error])

    values = result.buffer.release()
    if as_tensor:
        # shares memory with the released array
        return torch.from_numpy(values)
    return values


def wigner_3j_l(l2, l3, m2, m3, *, as_tensor=False):
    """
    wigner_3j_l(l2, l3, m2, m3)

    Returns
    -------
    l1min : float
        Smallest allowable l1 in 3j symbol.
    l1max : float
        Largest allowable l1 in 3j symbol.
    thrcof : numpy.ndarray or torch.Tensor
        Set of 3j coefficients generated by evaluating the 3j symbol
        for all allowed values of l1.
    """
    result = core.threej_l(float(l2), float(l3), float(m2), float(m3))
    thrcof = _take("wigner_3j_l", result, as_tensor)
    return result.domain.lo, result.domain.hi, thrcof


def wigner_3j_m(l1, l2, l3, m1, *, as_tensor=False):
    """
    wigner_3j_m(l1, l2, l3, m1)

    Returns
    -------
    m2min : float
        Smallest allowable m2 in 3j symbol.
    m2max : float
        Largest allowable m2 in 3j symbol.
    thrcof : numpy.ndarray or torch.Tensor
        Set of 3j coefficients generated by evaluating the 3j symbol
        for all allowed values of m2.
    """
    result = core.threej_m(float(l1), float(l2), float(l3), float(m1))
    thrcof = _take("wigner_3j_m", result, as_tensor)
    return result.domain.lo, result.domain.hi, thrcof


def wigner_d_l(lmin, lmax, m1, m2, theta, *, as_tensor=False):
    """
    wigner_d_l(lmin, lmax, m1, m2, theta)

    Returns
    -------
    numpy.ndarray or torch.Tensor
        Values `d^{l}_{m1, m2}(theta)` where `l = lmin, ..., lmax`.
    """
    lmin, lmax = operator.index(lmin), operator.index(lmax)
    m1, m2 = operator.index(m1), operator.index(m2)
    # theta is only read once the range check has passed
    result = core.wigner_d(lmin, lmax, m1, m2, theta)
    return _take("wigner_d_l", result, as_tensor)


def legendre_p_l(lmin, lmax, x, *, as_tensor=False):
    """
    legendre_p_l(lmin, lmax, x)

    Returns
    -------
    numpy.ndarray or torch.Tensor
        Values `P_l(x)` where `l = lmin, ..., lmax`.
    """
    lmin, lmax = operator.index(lmin), operator.index(lmax)
    result = core.legendre(lmin, lmax, float(x))
    return _take("legendre_p_l", result, as_tensor)
