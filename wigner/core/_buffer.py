import numpy as np


class CoefficientBuffer:
    """Output buffer with a single owner.

    The core fills the buffer and hands it over with :meth:`release`, which
    returns the underlying array and leaves the buffer empty. Nothing inside
    the core keeps a reference to a released array.
    """

    __slots__ = ("_data",)

    def __init__(self, n: int):
        self._data = np.zeros(n, dtype=np.float64)

    def __len__(self) -> int:
        if self._data is None:
            return 0
        return self._data.shape[0]

    def __repr__(self) -> str:
        state = "released" if self._data is None else f"n={len(self)}"
        return f"CoefficientBuffer({state})"

    @property
    def released(self) -> bool:
        return self._data is None

    @property
    def data(self) -> np.ndarray:
        if self._data is None:
            raise RuntimeError("buffer has already been released")
        return self._data

    def release(self) -> np.ndarray:
        data = self.data
        self._data = None
        return data
