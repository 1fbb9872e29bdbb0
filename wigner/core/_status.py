import enum
import logging
import sys
from typing import NamedTuple, Optional

from wigner.core._buffer import CoefficientBuffer

logger = logging.getLogger(__name__)

# tolerance for "is this an integer / half-integer" checks
EPS = 0.01

HUGE = sys.float_info.max ** 0.5
SRHUGE = HUGE ** 0.5
TINY = 1.0 / HUGE
SRTINY = 1.0 / SRHUGE


class ErrorKind(enum.IntEnum):
    MAGNITUDE_EXCEEDS_L = 1
    NON_INTEGER_PARITY = 2
    NON_INTEGER_RANGE = 3
    EMPTY_RANGE = 4
    TRIANGLE_VIOLATION = 5
    NON_INTEGER_SUM = 6
    INVALID_RANGE = 7
    ALLOCATION_FAILURE = 8


class Domain(NamedTuple):
    """Inclusive range of the free index."""

    lo: float
    hi: float

    @property
    def size(self) -> int:
        return int(self.hi - self.lo + 1.1)


class Result(NamedTuple):
    """Outcome of a core evaluation.

    Exactly one of ``error`` and ``buffer`` is set. ``domain`` is filled in
    whenever the domain solver got far enough to compute it.
    """

    error: Optional[ErrorKind]
    domain: Optional[Domain]
    buffer: Optional[CoefficientBuffer]

    @property
    def ok(self) -> bool:
        return self.error is None


def failure(kind: ErrorKind, domain: Optional[Domain] = None) -> Result:
    return Result(kind, domain, None)


def success(domain: Domain, buffer: CoefficientBuffer) -> Result:
    return Result(None, domain, buffer)


def is_integral(x: float) -> bool:
    return (x + EPS) % 1.0 < EPS + EPS


def parity(x: float) -> float:
    """(-1)^x for a float that holds an integer."""
    return -1.0 if int(abs(x) + EPS) % 2 else 1.0


def allocate(n: int) -> Optional[CoefficientBuffer]:
    try:
        return CoefficientBuffer(n)
    except MemoryError:
        logger.debug("could not allocate %d coefficients", n)
        return None
