"""Wigner 3j symbols by three-term recursion.

The recursions follow K. Schulten and R. G. Gordon, J. Math. Phys. 16, 1961
(1975) and Comp. Phys. Comm. 11, 269 (1976), in the form used by the SLATEC
routines DRC3JJ and DRC3JM.

A recursion started at one end of the domain is stable only while the
coefficients grow. Both routines therefore recurse forward from the lower
end until the coefficients stop growing, recurse backward from the upper end
to meet the forward values at three points, and join the two pieces with the
least-squares ratio of the overlapping values. Start values are ``SRTINY``
and partial sequences are rescaled by ``SRHUGE`` when they grow too large, so
that nothing overflows before the final normalisation.
"""

import logging
from math import sqrt

import numpy as np

from wigner.core._status import (
    EPS,
    HUGE,
    SRHUGE,
    SRTINY,
    TINY,
    Domain,
    ErrorKind,
    Result,
    allocate,
    failure,
    is_integral,
    parity,
    success,
)

logger = logging.getLogger(__name__)


def _rescale(part: np.ndarray) -> None:
    part[np.abs(part) < SRTINY] = 0.0
    part /= SRHUGE


def _three_term(thrcof, forward, backward, weight):
    """Fill ``thrcof`` with unnormalised solutions of a three-term recursion.

    ``forward(i, oldfac)`` returns ``(c1, c2, newfac)``, the coefficients that
    give entry ``i`` from entries ``i-1`` and ``i-2`` and the normalising
    factor of this step, which is passed back as ``oldfac`` on the next step.
    ``backward(j, oldfac)`` does the same for entry ``j`` from entries ``j+1``
    and ``j+2``. On the first step of either direction ``oldfac`` is None and
    ``c2`` is not used. ``weight(i)`` is the weight of entry ``i`` in the
    normalisation sum. Returns that (weighted) sum of squares.
    """
    nfin = thrcof.shape[0]

    thrcof[0] = SRTINY
    sum1 = weight(0) * TINY
    sumfor = 0.0
    c1 = 0.0
    fac = None
    i = 0
    while True:
        i += 1
        c1old = abs(c1)
        c1, c2, fac = forward(i, fac)
        x = c1 * thrcof[i - 1]
        if i > 1:
            x += c2 * thrcof[i - 2]
        thrcof[i] = x
        sumfor = sum1
        sum1 += weight(i) * x * x
        if i == nfin - 1:
            # forward recursion stayed stable over the whole domain
            return sum1
        if i == 1:
            continue

        if abs(x) >= SRHUGE:
            logger.debug("rescaling forward recursion at index %d", i)
            _rescale(thrcof[: i + 1])
            sum1 /= HUGE
            sumfor /= HUGE
            x /= SRHUGE

        if c1old <= abs(c1):
            break

    # forward values around the matching point
    x1, x2, x3 = x, thrcof[i - 1], thrcof[i - 2]
    match = i - 2
    logger.debug("switching to backward recursion, matching at index %d of %d", match, nfin)

    thrcof[nfin - 1] = SRTINY
    sum2 = weight(nfin - 1) * TINY
    sumbac = 0.0
    fac = None
    j = nfin - 1
    while True:
        j -= 1
        c1, c2, fac = backward(j, fac)
        y = c1 * thrcof[j + 1]
        if j < nfin - 2:
            y += c2 * thrcof[j + 2]
        if j == match:
            break
        thrcof[j] = y
        sumbac = sum2
        sum2 += weight(j) * y * y

        if abs(y) >= SRHUGE:
            logger.debug("rescaling backward recursion at index %d", j)
            _rescale(thrcof[j:])
            sum2 /= HUGE
            sumbac /= HUGE

    y1, y2, y3 = thrcof[i], thrcof[i - 1], y

    # least-squares ratio y = ratio * x over the three overlapping points
    ratio = (x1 * y1 + x2 * y2 + x3 * y3) / (x1 * x1 + x2 * x2 + x3 * x3)
    if abs(ratio) >= 1.0:
        thrcof[: match + 1] *= ratio
        return ratio * ratio * sumfor + sumbac

    thrcof[match + 1 :] /= ratio
    return sumfor + sumbac / (ratio * ratio)


def _normalize(thrcof: np.ndarray, cnorm: float, sign: float) -> None:
    # overall phase is fixed by the sign of the last coefficient
    if (1.0 if thrcof[-1] >= 0.0 else -1.0) * sign <= 0.0:
        cnorm = -cnorm
    if abs(cnorm) < 1.0:
        thrcof[np.abs(thrcof) < TINY / abs(cnorm)] = 0.0
    thrcof *= cnorm


def threej_l(l2: float, l3: float, m2: float, m3: float) -> Result:
    """3j symbols ``(l1 l2 l3; m1 m2 m3)`` for all allowed ``l1``.

    ``m1 = -m2 - m3``. On success the domain is ``(l1min, l1max)`` and the
    buffer holds one coefficient per ``l1`` in increasing order.
    """
    m1 = -m2 - m3

    if l2 - abs(m2) + EPS < 0.0 or l3 - abs(m3) + EPS < 0.0:
        return failure(ErrorKind.MAGNITUDE_EXCEEDS_L)
    if not (is_integral(l2 + abs(m2)) and is_integral(l3 + abs(m3))):
        return failure(ErrorKind.NON_INTEGER_PARITY)

    l1min = max(abs(l2 - l3), abs(m1))
    l1max = l2 + l3
    domain = Domain(l1min, l1max)

    if not is_integral(l1max - l1min):
        return failure(ErrorKind.NON_INTEGER_RANGE, domain)
    if l1min >= l1max + EPS:
        return failure(ErrorKind.EMPTY_RANGE, domain)

    buf = allocate(domain.size)
    if buf is None:
        return failure(ErrorKind.ALLOCATION_FAILURE, domain)
    thrcof = buf.data

    sign = parity(l2 + m2 - l3 + m3)
    if l1min >= l1max - EPS:
        # l1 can take only one value
        thrcof[0] = sign / sqrt(l1min + l2 + l3 + 1.0)
        return success(domain, buf)

    def a(l1):
        return sqrt(
            (l1 + l2 + l3 + 1.0)
            * (l1 - l2 + l3)
            * (l1 + l2 - l3)
            * (-l1 + l2 + l3 + 1.0)
            * (l1 + m1)
            * (l1 - m1)
        )

    def dv(l1):
        return -l2 * (l2 + 1.0) * m1 + l3 * (l3 + 1.0) * m1 + l1 * (l1 - 1.0) * (m3 - m2)

    nfin = thrcof.shape[0]

    def forward(i, oldfac):
        l1 = l1min + i
        newfac = a(l1)
        if l1 < 1.0 + EPS:
            # l1min = 0, the factor (l1 - 1) cancels
            return -(l1 + l1 - 1.0) * l1 * (m3 - m2) / newfac, 0.0, newfac
        denom = (l1 - 1.0) * newfac
        c2 = 0.0 if oldfac is None else -l1 * oldfac / denom
        return -(l1 + l1 - 1.0) * dv(l1) / denom, c2, newfac

    def backward(j, oldfac):
        # counted down from l1max so that l1 never passes l1max + 1
        l1 = l1max + 1.0 - (nfin - 2 - j)
        newfac = a(l1 - 1.0)
        denom = l1 * newfac
        c2 = 0.0 if oldfac is None else -(l1 - 1.0) * oldfac / denom
        return -(l1 + l1 - 1.0) * dv(l1) / denom, c2, newfac

    def weight(i):
        return 2.0 * (l1min + i) + 1.0

    sumuni = _three_term(thrcof, forward, backward, weight)
    _normalize(thrcof, 1.0 / sqrt(sumuni), sign)
    return success(domain, buf)


def threej_m(l1: float, l2: float, l3: float, m1: float) -> Result:
    """3j symbols ``(l1 l2 l3; m1 m2 m3)`` for all allowed ``m2``.

    ``m3 = -m1 - m2``. On success the domain is ``(m2min, m2max)`` and the
    buffer holds one coefficient per ``m2`` in increasing order.
    """
    if l1 - abs(m1) + EPS < 0.0:
        return failure(ErrorKind.MAGNITUDE_EXCEEDS_L)
    if not is_integral(l1 + abs(m1)):
        return failure(ErrorKind.NON_INTEGER_PARITY)
    if l1 + l2 - l3 < -EPS or l1 - l2 + l3 < -EPS or -l1 + l2 + l3 < -EPS:
        return failure(ErrorKind.TRIANGLE_VIOLATION)
    if not is_integral(l1 + l2 + l3):
        return failure(ErrorKind.NON_INTEGER_SUM)

    m2min = max(-l2, -l3 - m1)
    m2max = min(l2, l3 - m1)
    domain = Domain(m2min, m2max)

    if not is_integral(m2max - m2min):
        return failure(ErrorKind.NON_INTEGER_RANGE, domain)
    if m2min >= m2max + EPS:
        return failure(ErrorKind.EMPTY_RANGE, domain)

    buf = allocate(domain.size)
    if buf is None:
        return failure(ErrorKind.ALLOCATION_FAILURE, domain)
    thrcof = buf.data

    sign = parity(l2 - l3 - m1)
    if m2min >= m2max - EPS:
        # m2 and m3 can take only one value
        thrcof[0] = sign / sqrt(l1 + l2 + l3 + 1.0)
        return success(domain, buf)

    def c(m2):
        m3 = -m1 - m2
        return sqrt((l2 - m2 + 1.0) * (l2 + m2) * (l3 + m3 + 1.0) * (l3 - m3))

    def dv(m2):
        m3 = -m1 - m2
        return (
            (l1 + l2 + l3 + 1.0) * (l2 + l3 - l1)
            - (l2 - m2 + 1.0) * (l3 + m3 + 1.0)
            - (l2 + m2 - 1.0) * (l3 - m3 - 1.0)
        )

    nfin = thrcof.shape[0]

    def forward(i, oldfac):
        m2 = m2min + i
        newfac = c(m2)
        c2 = 0.0 if oldfac is None else -oldfac / newfac
        return -dv(m2) / newfac, c2, newfac

    def backward(j, oldfac):
        # counted down from m2max so that m2 never passes m2max + 1
        m2 = m2max + 1.0 - (nfin - 2 - j)
        newfac = c(m2 - 1.0)
        c2 = 0.0 if oldfac is None else -oldfac / newfac
        return -dv(m2) / newfac, c2, newfac

    def weight(i):
        return 1.0

    sumuni = _three_term(thrcof, forward, backward, weight)
    _normalize(thrcof, 1.0 / sqrt((l1 + l1 + 1.0) * sumuni), sign)
    return success(domain, buf)
