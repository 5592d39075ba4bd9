import dataclasses
import logging
from collections.abc import Iterable
from typing import Any

import numpy as np
import numpy.polynomial.polynomial as npp

from zerofind.optimize.exceptions import IllConditionedError, PreconditionError
from zerofind.polynomial import Polynomial

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True, slots=True)
class MultRootResult:
    """Output of :func:`find_roots_with_multiplicity` when `full_output` is ``True``.

    Attributes
    ----------
    roots : dict[float | complex, int]
        Distinct roots and their multiplicities, sorted by real part.
    backward_error : float
        Weighted relative distance between the coefficients of `p` and those
        reconstructed from `roots`.
    condition : float
        Structure-preserving condition number of the roots.
    """

    roots: dict[Any, int]
    backward_error: float
    condition: float


def _convmatrix(p: np.ndarray, k: int) -> np.ndarray:
    # C @ v == np.convolve(p, v) for every v of length k
    result = np.zeros((len(p) + k - 1, k), dtype=p.dtype)

    for i in range(k):
        result[i : i + len(p), i] = p

    return result


def _refine(f, g, u, v, w, maxiters: int = 10):
    """Polish ``f = u * v`` and ``g = u * w`` by the Gauss-Newton method."""
    r = u.conj() / np.vdot(u, u).real
    target = np.concatenate(([1], f, g))
    ku, kv, kw = len(u), len(v), len(w)

    def residual(u, v, w):
        tmp = np.concatenate(([r @ u], np.convolve(u, v), np.convolve(u, w)))
        return tmp - target

    res = residual(u, v, w)
    norm = np.linalg.norm(res)

    for _ in range(maxiters):
        dtype = np.result_type(u, v, w, r)
        jac = np.zeros((len(target), ku + kv + kw), dtype=dtype)
        jac[0, :ku] = r
        jac[1 : 1 + len(f), :ku] = _convmatrix(v, ku)
        jac[1 : 1 + len(f), ku : ku + kv] = _convmatrix(u, kv)
        jac[1 + len(f) :, :ku] = _convmatrix(w, ku)
        jac[1 + len(f) :, ku + kv :] = _convmatrix(u, kw)
        delta = np.linalg.lstsq(jac, res, rcond=None)[0]
        u1, v1, w1 = u - delta[:ku], v - delta[ku : ku + kv], w - delta[ku + kv :]
        res1 = residual(u1, v1, w1)

        if not np.linalg.norm(res1) < norm:
            break

        u, v, w, res, norm = u1, v1, w1, res1, np.linalg.norm(res1)

    return u, v, w, np.linalg.norm(res[1:]) / np.linalg.norm(target[1:])


def agcd(
    f: Iterable, g: Iterable, theta: float = 1e-8, rho: float = 1e-10
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Return an approximate greatest common divisor and the cofactors.

    Parameters
    ----------
    f : Iterable
        Coefficients of a polynomial of degree `n` in ascending order of powers.
    g : Iterable
        Coefficients of a polynomial of degree ``n - 1``.
    theta : float, default=1e-8
        Relative threshold of singular values regarded as zero.
    rho : float, default=1e-10
        Relative residual below which a candidate is accepted.

    Returns
    -------
    u, v, w : numpy.ndarray
        Coefficients of polynomials such that ``f ~ u * v`` and ``g ~ u * w``. The
        degree of `v` is the smallest one for which a candidate is accepted, so that
        `u` has the largest possible degree.

    Notes
    -----
    The degree `j` of `v` is found as the smallest one for which the matrix
    ``[C_{j+1}(g) | -C_j(f)]`` has a singular value at most ``theta * ||f||``, where
    ``C_k(p)`` is the convolution matrix. The cofactors are read from the
    corresponding right singular vector, and `u` is obtained by least squares and
    polished by the Gauss-Newton method.

    Examples
    --------
    >>> u, v, w = agcd([-3, 7, -5, 1], [7, -10, 3])
    >>> len(u), len(v)
    (2, 3)
    >>> print(format(-u[0] / u[1], ".12f"))
    1.000000000000
    """
    f = np.asarray(f)
    g = np.asarray(g)
    f = f.astype(np.result_type(f, g, float))
    g = g.astype(f.dtype)
    n = len(f) - 1

    if n < 1:
        raise ValueError("f must have degree at least one")

    if len(g) != n:
        raise ValueError("g must have degree one less than f")

    threshold = theta * np.linalg.norm(f)

    for j in range(1, n):
        s = np.hstack((_convmatrix(g, j + 1), -_convmatrix(f, j)))
        _, sigma, vh = np.linalg.svd(s)

        if sigma[-1] > threshold:
            continue

        y = vh[-1].conj()
        v, w = y[: j + 1], y[j + 1 :]
        u = np.linalg.lstsq(_convmatrix(v, n - j + 1), f, rcond=None)[0]
        u, v, w, res = _refine(f, g, u, v, w)
        logger.debug("agcd: degree %d, residual %g", n - j, res)

        if res <= rho:
            return u, v, w

    return np.ones(1, dtype=f.dtype), f.copy(), g.copy()


def _expand(z: np.ndarray, mult: list[int]) -> np.ndarray:
    # coefficients of the monic polynomial except the leading one
    return npp.polyfromroots(np.repeat(z, mult))[:-1]


def _jacobian(z: np.ndarray, mult: list[int]) -> np.ndarray:
    columns = []

    for j, (zj, mj) in enumerate(zip(z, mult)):
        tmp = list(mult)
        tmp[j] -= 1
        columns.append(-mj * npp.polyfromroots(np.repeat(z, tmp)))

    return np.column_stack(columns)


def _pejorative(b, z, mult, maxiters: int):
    """Refine roots on the pejorative manifold by the Gauss-Newton method."""
    weights = 1 / np.maximum(1, np.abs(b))
    res = weights * (_expand(z, mult) - b)
    eps = np.finfo(float).eps

    for _ in range(maxiters):
        jac = weights[:, None] * _jacobian(z, mult)
        dz = np.linalg.lstsq(jac, res, rcond=None)[0]
        z1 = z - dz
        res1 = weights * (_expand(z1, mult) - b)

        if not np.linalg.norm(res1) <= np.linalg.norm(res):
            break

        z, res = z1, res1

        if np.linalg.norm(dz) <= eps * np.linalg.norm(z):
            break

    jac = weights[:, None] * _jacobian(z, mult)
    sigma = np.linalg.svd(jac, compute_uv=False)[-1]
    cond = 1 / sigma if sigma > 0 else np.inf
    berr = np.linalg.norm(res) / max(1, np.linalg.norm(weights * b))
    return z, cond, berr


def _multiplicities(p: np.ndarray, theta: float, rho: float, phi: float):
    """Return the distinct roots and their multiplicities by the GCD chain."""
    u = p
    tol = rho
    degrees: list[int] = []
    roots: np.ndarray = np.empty(0)
    mult: list[int] = []

    while len(u) > 1:
        u, v, _ = agcd(u, npp.polyder(u), theta, tol)
        u = u / np.linalg.norm(u)
        degree = len(v) - 1

        if degrees and degree > degrees[-1]:
            msg = "degrees of the GCD chain are not monotone"
            raise IllConditionedError(msg, _estimate(roots, mult))

        degrees.append(degree)
        zs = npp.polyroots(v)

        if len(degrees) == 1:
            roots = zs.astype(complex)
            mult = [1] * len(roots)
            tol *= phi
            continue

        # roots of the k-th cofactor have multiplicity at least k
        level = len(degrees)
        eligible = [i for i, m in enumerate(mult) if m == level - 1]

        for z in zs:
            if not eligible:
                msg = "multiplicities cannot be assigned"
                raise IllConditionedError(msg, _estimate(roots, mult))

            i = min(eligible, key=lambda i: abs(roots[i] - z))
            eligible.remove(i)
            mult[i] += 1

        tol *= phi

    return roots, mult


def _real_if_close(z: complex, theta: float) -> Any:
    if abs(z.imag) <= theta * max(1, abs(z)):
        return float(z.real)

    return complex(z)


def _estimate(roots, mult, theta: float = 1e-8) -> dict[Any, int]:
    pairs = sorted(zip(roots, mult), key=lambda x: (x[0].real, x[0].imag))
    return {_real_if_close(z, theta): m for z, m in pairs}


def find_roots_with_multiplicity(
    p: Polynomial | Iterable,
    *,
    theta: float = 1e-8,
    rho: float = 1e-10,
    phi: float = 100.0,
    maxiters: int = 50,
    full_output: bool = False,
) -> dict[Any, int] | MultRootResult:
    """Find the roots of the polynomial together with their multiplicities.

    Parameters
    ----------
    p : Polynomial | Iterable
        Polynomial, or its coefficients in ascending order of powers.
    theta : float, default=1e-8
        Zero singular value threshold of the rank decisions. This is also the largest
        acceptable backward error, and ``1 / theta`` is the largest acceptable
        condition number.
    rho : float, default=1e-10
        Residual tolerance of the approximate GCD at the first level.
    phi : float, default=100.0
        Growth factor of the residual tolerance from one level to the next.
    maxiters : int, default=50
        Maximum number of Gauss-Newton iterations of the final refinement.
    full_output : bool, default=False
        If ``True``, return :class:`MultRootResult` instead of the mapping.

    Returns
    -------
    dict | MultRootResult
        Mapping from the distinct roots to their multiplicities, sorted by real part.
        Roots with negligible imaginary parts are reported as floats.

    Raises
    ------
    PreconditionError
        If the degree of `p` is less than one.
    IllConditionedError
        If the multiplicities cannot be determined reliably.

    Notes
    -----
    This implements Zeng's algorithm [#Ze04]_. The chain of approximate GCDs
    ``u_k = gcd(u_{k-1}, u_{k-1}')`` with ``u_0 = p`` reveals the multiplicity
    structure, and the roots are then refined by the Gauss-Newton method on the
    pejorative manifold, on which multiple roots are well-conditioned.

    References
    ----------
    .. [#Ze04] Z. Zeng, Computing multiple roots of inexact polynomials, *Math.
        Comp.*, **74**(250) (2005), pp. 869--903.

    Examples
    --------
    >>> r = find_roots_with_multiplicity([-3, 7, -5, 1])
    >>> [(round(z, 10), m) for z, m in r.items()]
    [(1.0, 2), (3.0, 1)]
    """
    coeffs = list(p.coeffs) if isinstance(p, Polynomial) else list(p)

    while coeffs and coeffs[-1] == 0:
        coeffs.pop()

    if len(coeffs) < 2:
        raise PreconditionError("polynomial must have degree at least one")

    if any(isinstance(c, complex) for c in coeffs):
        a = np.array([complex(c) for c in coeffs])
    else:
        a = np.array([float(c) for c in coeffs])

    a = a / a[-1]
    b = a[:-1]
    roots, mult = _multiplicities(a / np.linalg.norm(a), theta, rho, phi)

    if sum(mult) != len(b):
        msg = "multiplicities do not sum up to the degree"
        raise IllConditionedError(msg, _estimate(roots, mult, theta))

    roots, cond, berr = _pejorative(b, roots, mult, maxiters)
    logger.debug("multiplicities %r, condition %g, backward error %g", mult, cond, berr)
    estimate = _estimate(roots, mult, theta)

    if cond > 1 / theta:
        msg = f"condition number {cond:.3g} exceeds 1/theta"
        raise IllConditionedError(msg, estimate)

    if berr > theta:
        msg = f"backward error {berr:.3g} exceeds theta"
        raise IllConditionedError(msg, estimate)

    if full_output:
        return MultRootResult(estimate, float(berr), float(cond))

    return estimate
