from ._bindings import WignerError, legendre_p_l, wigner_3j_l, wigner_3j_m, wigner_d_l
from .core import ErrorKind

__version__ = "1.0.0"

__all__ = [
    "ErrorKind",
    "WignerError",
    "legendre_p_l",
    "wigner_3j_l",
    "wigner_3j_m",
    "wigner_d_l",
]
