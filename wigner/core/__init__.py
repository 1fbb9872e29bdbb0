from ._buffer import CoefficientBuffer
from ._legendre import legendre
from ._status import EPS, Domain, ErrorKind, Result
from ._threej import threej_l, threej_m
from ._wigner_d import wigner_d

__all__ = [
    "CoefficientBuffer",
    "Domain",
    "EPS",
    "ErrorKind",
    "Result",
    "legendre",
    "threej_l",
    "threej_m",
    "wigner_d",
]
