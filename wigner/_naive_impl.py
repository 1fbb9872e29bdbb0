import math


def _twice(x, name):
    """Return 2*x as an int, checking that x is an integer or half-integer."""
    t = int(round(2.0 * x))
    if abs(2.0 * x - t) > 1e-9:
        raise ValueError(f"{name} must be an integer or half-integer, got {x!r}")
    return t


def _lfact(n2):
    """log((n2/2)!) for an even n2 >= 0."""
    return math.lgamma(n2 // 2 + 1)


def wigner_small_d(j, m_prime, m, beta):
    """
    Compute the Wigner small-d matrix element d^{(j)}_{m',m}(beta).

    Parameters
    ----------
    j : int or float
        The total angular momentum quantum number, integer or half-integer.
    m_prime : int or float
        The m' quantum number (between -j and j).
    m : int or float
        The m quantum number (between -j and j).
    beta : float
        The Euler angle beta (in radians).

    Returns
    -------
    float
        The d^{(j)}_{m',m}(beta) element, zero if |m| or |m'| exceeds j.
    """
    # Work with doubled quantum numbers so that half-integers stay exact.
    j2 = _twice(j, "j")
    mp2 = _twice(m_prime, "m_prime")
    m2 = _twice(m, "m")

    if abs(m2) > j2 or abs(mp2) > j2:
        return 0.0
    if (j2 + m2) % 2 or (j2 + mp2) % 2:
        return 0.0

    # Factorials are taken in log space so that large j does not overflow.
    # For large j the alternating sum still loses precision to cancellation.
    log_prefactor = 0.5 * (
        _lfact(j2 + mp2) + _lfact(j2 - mp2) + _lfact(j2 + m2) + _lfact(j2 - m2)
    )

    # The summation index k must keep all factorial arguments non-negative:
    #  (j - m' - k)! => k <= j - m'
    #  (j + m - k)!  => k <= j + m
    #  (k - m + m')! => k >= m - m'
    #  (k)!          => k >= 0
    k_min = max(0, (m2 - mp2) // 2)
    k_max = min((j2 - mp2) // 2, (j2 + m2) // 2)

    half_beta = beta / 2.0
    c = math.cos(half_beta)
    s = math.sin(half_beta)

    d_val = 0.0
    for k in range(k_min, k_max + 1):
        sign = -1.0 if (k + (mp2 - m2) // 2) % 2 else 1.0
        log_denom = (
            _lfact(j2 - mp2 - 2 * k)
            + _lfact(j2 + m2 - 2 * k)
            + _lfact(2 * k - m2 + mp2)
            + _lfact(2 * k)
        )
        d_val += (
            sign
            * math.exp(log_prefactor - log_denom)
            * c ** ((2 * j2 + m2 - mp2) // 2 - 2 * k)
            * s ** ((mp2 - m2) // 2 + 2 * k)
        )

    return d_val


def wigner_3j(j1, j2, j3, m1, m2, m3):
    """
    Compute the Wigner 3j symbol from the Racah formula.

    Parameters
    ----------
    j1, j2, j3 : int or float
        Angular momenta, integer or half-integer.
    m1, m2, m3 : int or float
        Projections, with the same parity as the matching j.

    Returns
    -------
    float
        The 3j symbol (j1 j2 j3; m1 m2 m3), zero where selection rules
        forbid it.
    """
    a = _twice(j1, "j1")
    b = _twice(j2, "j2")
    c = _twice(j3, "j3")
    al = _twice(m1, "m1")
    be = _twice(m2, "m2")
    ga = _twice(m3, "m3")

    if al + be + ga != 0:
        return 0.0
    if abs(al) > a or abs(be) > b or abs(ga) > c:
        return 0.0
    if (a + al) % 2 or (b + be) % 2 or (c + ga) % 2:
        return 0.0
    if (a + b + c) % 2 or c < abs(a - b) or c > a + b:
        return 0.0

    # triangle coefficient and projection factorials
    log_norm = 0.5 * (
        _lfact(a + b - c)
        + _lfact(a - b + c)
        + _lfact(-a + b + c)
        - _lfact(a + b + c + 2)
        + _lfact(a + al)
        + _lfact(a - al)
        + _lfact(b + be)
        + _lfact(b - be)
        + _lfact(c + ga)
        + _lfact(c - ga)
    )

    # Summation limits (in units of 1, all arguments below are even).
    t_min = max(0, (b - c - al) // 2, (a - c + be) // 2)
    t_max = min((a + b - c) // 2, (a - al) // 2, (b + be) // 2)

    s = 0.0
    for t in range(t_min, t_max + 1):
        t2 = 2 * t
        log_denom = (
            _lfact(t2)
            + _lfact(c - b + al + t2)
            + _lfact(c - a - be + t2)
            + _lfact(a + b - c - t2)
            + _lfact(a - al - t2)
            + _lfact(b + be - t2)
        )
        term = math.exp(log_norm - log_denom)
        s += -term if t % 2 else term

    # overall phase (-1)^(j1 - j2 - m3)
    if ((a - b - ga) // 2) % 2:
        s = -s
    return s
