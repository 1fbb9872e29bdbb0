import math

import numpy as np
import pytest
import torch

from wigner import ErrorKind, WignerError, legendre_p_l, wigner_d_l
from wigner._naive_impl import wigner_small_d


def test_legendre_literals():
    np.testing.assert_array_equal(legendre_p_l(0, 4, 1.0), [1.0, 1.0, 1.0, 1.0, 1.0])
    np.testing.assert_array_equal(legendre_p_l(0, 2, 0.0), [1.0, 0.0, -0.5])


def test_legendre_slice():
    x = 0.3
    full = legendre_p_l(0, 10, x)
    np.testing.assert_array_equal(legendre_p_l(4, 10, x), full[4:])
    np.testing.assert_array_equal(legendre_p_l(7, 7, x), full[7:8])
    # P_3(x) = (5x^3 - 3x) / 2
    assert full[3] == pytest.approx(0.5 * (5 * x**3 - 3 * x))


def test_legendre_parity():
    p = legendre_p_l(0, 12, 0.42)
    q = legendre_p_l(0, 12, -0.42)
    np.testing.assert_allclose(q, p * (-1.0) ** np.arange(13), rtol=1e-14, atol=1e-15)


def test_d_reduces_to_legendre():
    np.testing.assert_array_equal(wigner_d_l(0, 2, 0, 0, 0.0), legendre_p_l(0, 2, 1.0))
    theta = 1.1
    np.testing.assert_allclose(wigner_d_l(0, 20, 0, 0, theta), legendre_p_l(0, 20, math.cos(theta)))


def test_d_against_naive():
    rng = np.random.default_rng(0)
    # the closed form is only trusted for small degrees
    lmax = 8
    for theta in rng.uniform(0.0, np.pi, size=4):
        for m1 in range(-lmax, lmax + 1):
            for m2 in range(-lmax, lmax + 1):
                d = wigner_d_l(0, lmax, m1, m2, theta, as_tensor=True)
                d_naive = torch.tensor(
                    [wigner_small_d(l, m1, m2, theta) for l in range(lmax + 1)], dtype=torch.float64
                )
                torch.testing.assert_close(d, d_naive, atol=1e-12, rtol=1e-10)


def test_d_below_lowest_degree_is_zero():
    d = wigner_d_l(0, 5, 3, -2, 0.7)
    assert d.shape == (6,)
    assert np.all(d[:3] == 0.0)
    assert np.all(d[3:] != 0.0)

    # whole range below max(|m1|, |m2|)
    np.testing.assert_array_equal(wigner_d_l(1, 3, -4, 0, 0.7), np.zeros(3))


def test_d_theta_zero_is_identity():
    for m1 in range(-3, 4):
        for m2 in range(-3, 4):
            d = wigner_d_l(3, 9, m1, m2, 0.0)
            np.testing.assert_allclose(d, np.full(7, float(m1 == m2)), atol=1e-13)


def test_d_symmetries():
    theta = 0.93
    for m1, m2 in [(1, 2), (-3, 1), (2, -2), (0, 4), (5, 5)]:
        a = wigner_d_l(0, 15, m1, m2, theta)
        np.testing.assert_allclose(a, (-1.0) ** (m1 - m2) * wigner_d_l(0, 15, m2, m1, theta), atol=1e-12)
        np.testing.assert_allclose(a, wigner_d_l(0, 15, -m2, -m1, theta), atol=1e-12)
        np.testing.assert_allclose(a, wigner_d_l(0, 15, m2, m1, -theta), atol=1e-12)


def test_d_unitary_at_high_degree():
    l = 40
    theta = 2.3
    for m1 in (-40, -17, 0, 3, 39):
        row = [wigner_d_l(l, l, m1, m2, theta)[0] for m2 in range(-l, l + 1)]
        assert math.fsum(v * v for v in row) == pytest.approx(1.0, abs=1e-10)


def test_tensor_output():
    t = wigner_d_l(2, 6, 1, -1, 0.5, as_tensor=True)
    assert isinstance(t, torch.Tensor)
    assert t.dtype == torch.float64
    torch.testing.assert_close(t, torch.from_numpy(wigner_d_l(2, 6, 1, -1, 0.5)))

    p = legendre_p_l(0, 3, 0.5, as_tensor=True)
    torch.testing.assert_close(p, torch.tensor([1.0, 0.5, -0.125, -0.4375], dtype=torch.float64))


@pytest.mark.parametrize("lmin, lmax", [(-1, 2), (3, 2), (-2, -3)])
def test_invalid_range(lmin, lmax):
    with pytest.raises(WignerError, match="requires 0 <= lmin <= lmax") as e:
        wigner_d_l(lmin, lmax, 0, 0, 0.1)
    assert e.value.kind is ErrorKind.INVALID_RANGE

    with pytest.raises(ValueError):
        legendre_p_l(lmin, lmax, 0.1)


def test_integer_arguments_required():
    with pytest.raises(TypeError):
        wigner_d_l(0.5, 2, 0, 0, 0.1)
    with pytest.raises(TypeError):
        legendre_p_l(0, 2.0, 0.1)


def test_repeatable():
    a = wigner_d_l(0, 30, 2, -5, 1.234)
    b = wigner_d_l(0, 30, 2, -5, 1.234)
    assert a.tobytes() == b.tobytes()
    assert a is not b


def test_d_lowest_degree_matches_closed_form():
    # a single term of the explicit sum survives at l0 = max(|m1|, |m2|)
    theta = 1.9
    for m1, m2 in [(0, 3), (4, -1), (-6, -6), (7, 7), (-2, 30), (30, -29)]:
        l0 = max(abs(m1), abs(m2))
        d = wigner_d_l(l0, l0, m1, m2, theta)
        assert d[0] == pytest.approx(wigner_small_d(l0, m1, m2, theta), rel=1e-10, abs=1e-300)
