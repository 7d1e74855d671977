# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0
"""
Uncertainty carrying scalars and the helpers to treat them and plain numbers alike.

The uncertainties package propagates first order uncertainty for real numbers only, hence complex
quantities are represented by UComplex: a pair of (correlated) uncertain real and imaginary parts.
Plain float / complex numbers go through every helper untouched.
"""
from __future__ import annotations

from typing import Any, Callable, Iterable, Union
import cmath
import numpy as np
import uncertainties
from uncertainties import umath, UFloat

from LineCableEngine.enumerations import NumericKind


class UComplex:
    """
    Complex number whose real and imaginary parts are floats or UFloat
    """
    __slots__ = ('real', 'imag')

    def __init__(self, real: Any = 0.0, imag: Any = 0.0):
        """

        :param real: real part (float or UFloat)
        :param imag: imaginary part (float or UFloat)
        """
        self.real = real
        self.imag = imag

    @property
    def nominal_value(self) -> complex:
        """
        Nominal complex value
        :return: complex
        """
        return complex(nominal(self.real), nominal(self.imag))

    @property
    def std_dev(self) -> complex:
        """
        Standard deviation of the real and imaginary parts packed as a complex number
        :return: complex
        """
        return complex(std_dev(self.real), std_dev(self.imag))

    def conjugate(self) -> "UComplex":
        return UComplex(self.real, -self.imag)

    def __add__(self, other):
        p = _parts(other)
        if p is None:
            return NotImplemented
        return UComplex(self.real + p[0], self.imag + p[1])

    __radd__ = __add__

    def __sub__(self, other):
        p = _parts(other)
        if p is None:
            return NotImplemented
        return UComplex(self.real - p[0], self.imag - p[1])

    def __rsub__(self, other):
        p = _parts(other)
        if p is None:
            return NotImplemented
        return UComplex(p[0] - self.real, p[1] - self.imag)

    def __mul__(self, other):
        p = _parts(other)
        if p is None:
            return NotImplemented
        c, d = p
        return UComplex(self.real * c - self.imag * d, self.real * d + self.imag * c)

    __rmul__ = __mul__

    def __truediv__(self, other):
        p = _parts(other)
        if p is None:
            return NotImplemented
        return _divide(self.real, self.imag, p[0], p[1])

    def __rtruediv__(self, other):
        p = _parts(other)
        if p is None:
            return NotImplemented
        return _divide(p[0], p[1], self.real, self.imag)

    def __neg__(self):
        return UComplex(-self.real, -self.imag)

    def __pos__(self):
        return self

    def __pow__(self, n):
        if isinstance(n, (int, np.integer)):
            if n < 0:
                return 1.0 / self.__pow__(-n)
            result = UComplex(1.0, 0.0)
            for _ in range(int(n)):
                result = result * self
            return result
        return exp(n * log(self))

    def __abs__(self):
        return umath.hypot(self.real, self.imag)

    def __repr__(self):
        return f"UComplex({self.real!r}, {self.imag!r})"

    def __str__(self):
        return f"({self.real}) + ({self.imag})j"


def _parts(x):
    """
    Split a scalar into real and imaginary parts, None if it is not a scalar we know
    """
    if isinstance(x, UComplex):
        return x.real, x.imag
    if isinstance(x, UFloat):
        return x, 0.0
    if isinstance(x, (complex, np.complexfloating)):
        return float(x.real), float(x.imag)
    if isinstance(x, (int, float, np.integer, np.floating)):
        return float(x), 0.0
    return None


def _divide(a, b, c, d) -> UComplex:
    den = c * c + d * d
    return UComplex((a * c + b * d) / den, (b * c - a * d) / den)


def is_uncertain(x: Any) -> bool:
    """
    Is the scalar carrying uncertainty?
    :param x: scalar
    :return: bool
    """
    return isinstance(x, (UFloat, UComplex))


def nominal(x: Any) -> Union[float, complex]:
    """
    Nominal value of any supported scalar
    :param x: scalar
    :return: float or complex
    """
    if isinstance(x, (UFloat, UComplex)):
        return x.nominal_value
    return x


def std_dev(x: Any) -> Union[float, complex]:
    """
    Standard deviation of any supported scalar (0 for plain numbers)
    :param x: scalar
    :return: float or complex
    """
    if isinstance(x, (UFloat, UComplex)):
        return x.std_dev
    if isinstance(x, (complex, np.complexfloating)):
        return 0j
    return 0.0


def to_nominal(a: np.ndarray) -> np.ndarray:
    """
    Nominal values of an array
    :param a: numeric or object array
    :return: float or complex array
    """
    a = np.asarray(a)
    if a.dtype != object:
        return a
    return np.array([nominal(v) for v in a.ravel()]).reshape(a.shape)


def to_std(a: np.ndarray) -> np.ndarray:
    """
    Standard deviations of an array
    :param a: numeric or object array
    :return: float or complex array (complex packs the real and imaginary deviations)
    """
    a = np.asarray(a)
    if a.dtype != object:
        return np.zeros_like(a)
    return np.array([std_dev(v) for v in a.ravel()]).reshape(a.shape)


def has_uncertainty(value: Any) -> bool:
    """
    Recursively check if a value, array or sequence holds any uncertain scalar
    :param value: anything
    :return: bool
    """
    if isinstance(value, (UFloat, UComplex)):
        return True
    if isinstance(value, np.ndarray):
        if value.dtype == object:
            return any(has_uncertainty(v) for v in value.ravel())
        return False
    if isinstance(value, (list, tuple)):
        return any(has_uncertainty(v) for v in value)
    return False


def resolve_numeric_kind(*values: Any) -> NumericKind:
    """
    Decide the numeric representation of a whole computation by inspecting all its inputs
    :param values: scalars, arrays or sequences
    :return: NumericKind
    """
    for value in values:
        if has_uncertainty(value):
            return NumericKind.Uncertain
    return NumericKind.Float


def as_kind(values: Iterable[Any], kind: NumericKind) -> np.ndarray:
    """
    Build a real valued array of the given numeric kind
    :param values: sequence of scalars
    :param kind: NumericKind
    :return: float array, or object array holding UFloat for the uncertain values and float for the exact ones
    """
    values = list(values) if not isinstance(values, np.ndarray) else values.ravel().tolist()
    if kind == NumericKind.Float:
        return np.array([float(nominal(v)) for v in values], dtype=float)

    arr = np.empty(len(values), dtype=object)
    for i, v in enumerate(values):
        arr[i] = v if isinstance(v, UFloat) else float(v)
    return arr


def zeros(shape, kind: NumericKind, cx: bool = True) -> np.ndarray:
    """
    Allocate an array of zeros of the given numeric kind
    :param shape: array shape
    :param kind: NumericKind
    :param cx: complex (True) or real (False) for the Float kind
    :return: array
    """
    if kind == NumericKind.Float:
        return np.zeros(shape, dtype=complex if cx else float)
    arr = np.empty(shape, dtype=object)
    arr.fill(0.0)
    return arr


def lift(x: Any) -> Any:
    """
    Promote an uncertain real to UComplex so that it can be mixed with complex constants
    :param x: scalar
    :return: same scalar, or UComplex(x, 0) if x is UFloat
    """
    if isinstance(x, UFloat):
        return UComplex(x, 0.0)
    return x


def real(z: Any) -> Any:
    if isinstance(z, UComplex):
        return z.real
    if isinstance(z, UFloat):
        return z
    return np.real(z)


def imag(z: Any) -> Any:
    if isinstance(z, UComplex):
        return z.imag
    if isinstance(z, UFloat):
        return 0.0
    return np.imag(z)


def fabs(x: Any) -> Any:
    """
    Absolute value of a real scalar, uncertain or not
    """
    if isinstance(x, UFloat):
        return umath.fabs(x)
    return abs(x)


def _holomorphic(z: UComplex, f: Callable, df: Callable) -> UComplex:
    """
    First order propagation of a holomorphic function through the Cauchy-Riemann equations
    :param z: UComplex argument
    :param f: nominal function
    :param df: nominal derivative
    :return: UComplex
    """
    x, y = z.real, z.imag
    x0, y0 = nominal(x), nominal(y)
    z0 = complex(x0, y0)
    w0 = f(z0)
    d = df(z0)
    dx = x - x0
    dy = y - y0
    return UComplex(w0.real + d.real * dx - d.imag * dy,
                    w0.imag + d.imag * dx + d.real * dy)


def sqrt(z: Any) -> Any:
    """
    Principal square root
    """
    if isinstance(z, UComplex):
        return _holomorphic(z, cmath.sqrt, lambda w: 0.5 / cmath.sqrt(w))
    if isinstance(z, UFloat):
        return umath.sqrt(z)
    return np.sqrt(z)


def exp(z: Any) -> Any:
    """
    Exponential
    """
    if isinstance(z, UComplex):
        return _holomorphic(z, cmath.exp, cmath.exp)
    if isinstance(z, UFloat):
        return umath.exp(z)
    return np.exp(z)


def log(z: Any) -> Any:
    """
    Principal natural logarithm
    """
    if isinstance(z, UComplex):
        return _holomorphic(z, cmath.log, lambda w: 1.0 / w)
    if isinstance(z, UFloat):
        return umath.log(z)
    return np.log(z)


def isapprox(a: Any, b: Any, atol: float = 0.0, rtol: float = 1e-9) -> bool:
    """
    Approximate equality of the nominal values
    """
    a0 = nominal(a)
    b0 = nominal(b)
    return abs(a0 - b0) <= max(atol, rtol * max(abs(a0), abs(b0)))


def _strip_exact(args):
    """
    Replace uncertain arguments with null deviation by their nominal value, they contribute nothing
    """
    return [a.nominal_value if isinstance(a, UFloat) and a.std_dev == 0.0 else a for a in args]


def wrap_complex(f: Callable) -> Callable:
    """
    Wrap a function of real arguments returning a complex number so that it accepts UFloat arguments.
    The real and imaginary parts are linearized with the numerical partial derivatives of
    uncertainties.wrap with respect to every uncertain argument.
    :param f: function(*floats) -> complex
    :return: function(*floats or UFloat) -> complex or UComplex
    """

    def _re(*args):
        return float(np.real(f(*args)))

    def _im(*args):
        return float(np.imag(f(*args)))

    f_re = uncertainties.wrap(_re)
    f_im = uncertainties.wrap(_im)

    def wrapped(*args):
        args = _strip_exact(args)
        if not any(isinstance(a, UFloat) for a in args):
            return f(*args)
        return UComplex(f_re(*args), f_im(*args))

    wrapped.__doc__ = f.__doc__
    wrapped.__name__ = getattr(f, '__name__', 'wrapped')
    return wrapped


def is_object(a: np.ndarray) -> bool:
    return a.dtype == object


def inv(M: np.ndarray) -> np.ndarray:
    """
    Matrix inverse for float and uncertain (object) matrices.
    Object matrices are inverted by Gauss-Jordan elimination with partial pivoting on the nominal values
    :param M: square matrix
    :return: inverse
    """
    if M.dtype != object:
        return np.linalg.inv(M)

    n = M.shape[0]
    A = np.empty((n, 2 * n), dtype=object)
    A[:, :n] = M
    A[:, n:] = 0.0
    for i in range(n):
        A[i, n + i] = 1.0

    for col in range(n):
        mags = [abs(nominal(A[r, col])) for r in range(col, n)]
        piv = col + int(np.argmax(mags))
        if mags[piv - col] == 0.0:
            raise np.linalg.LinAlgError("Singular matrix")
        if piv != col:
            A[[col, piv], :] = A[[piv, col], :]

        p = A[col, col]
        A[col, :] = A[col, :] / p
        for r in range(n):
            if r != col:
                f = A[r, col]
                if nominal(f) != 0.0 or is_uncertain(f):
                    A[r, :] = A[r, :] - f * A[col, :]

    return A[:, n:]
