'''
Fixed-size projective geometric algebra (PGA, R(3,0,1)) types used to describe rigid body motion.

Only the even subalgebra is needed, so only two types are defined:

* `Line`  - 6 bivector coefficients, ordered (e01, e02, e03, e12, e31, e23).
    Used for twists, momenta, forques and inertias.
    The ideal part (e01, e02, e03) holds linear quantities, the Euclidean part (e12, e31, e23) holds angular quantities about the z, y and x axes.
* `Motor` - 8 even coefficients, ordered (1, e01, e02, e03, e12, e31, e23, e0123).
    Used for poses (rigid transformations).

Basis: e0 squares to 0, e1/e2/e3 square to 1.

Both types can be treated like scalars for addition / scaling, and multiplying two of them (with *) computes the geometric product.
The product of two even elements is always another even element, so it is always returned as a `Motor`.
'''

import re

import numpy as np

__all__ = [ "Line", "Motor", "geometricProduct", "dual", "commutator", "elementwiseMultiply", "elementwiseDivide", "zeroLine", "identityMotor" ]

#### Even subalgebra multiplication table ####
# (bitmask, sign) for each even basis element, bit i set <-> e_i present in the blade.
# Sign converts from the canonical (ascending index) blade to the basis element: e31 = -e13
EVEN_BASIS = (
    (0b0000, 1),    # 1
    (0b0011, 1),    # e01
    (0b0101, 1),    # e02
    (0b1001, 1),    # e03
    (0b0110, 1),    # e12
    (0b1010, -1),   # e31
    (0b1100, 1),    # e23
    (0b1111, 1),    # e0123
)
EVEN_BASIS_NAMES = ( "1", "e01", "e02", "e03", "e12", "e31", "e23", "e0123" )

# Positions of the Line coefficients inside a Motor's coefficient array
LINE_INDICES = slice(1, 7)

def _reorderingSign(bladeA: int, bladeB: int) -> int:
    ''' Sign picked up by sorting the concatenated basis vectors of two canonical blades into ascending order '''
    bladeA >>= 1
    nSwaps = 0
    while bladeA != 0:
        nSwaps += bin(bladeA & bladeB).count("1")
        bladeA >>= 1

    return -1 if (nSwaps % 2) else 1

def _buildEvenProductTable():
    '''
        Returns table[i,j,k], the coefficient of even basis element k in the product (basis element i)*(basis element j)
        The geometric product of two even coefficient arrays a and b is then: einsum('i,j,ijk->k', a, b, table)
    '''
    table = np.zeros((8, 8, 8))
    maskToIndex = { mask: k for k, (mask, _) in enumerate(EVEN_BASIS) }

    for i, (maskA, signA) in enumerate(EVEN_BASIS):
        for j, (maskB, signB) in enumerate(EVEN_BASIS):
            if maskA & maskB & 1:
                continue # e0*e0 = 0

            k = maskA ^ maskB
            resultIndex = maskToIndex[k]
            table[i, j, resultIndex] = signA * signB * _reorderingSign(maskA, maskB) * EVEN_BASIS[resultIndex][1]

    return table

EVEN_PRODUCT_TABLE = _buildEvenProductTable()

def _parseCoefficients(args, nCoefficients, typeName):
    ''' Accepts n numbers, a single iterable of n numbers, or a single string like "(0 0 0 1 0 0)" '''
    if len(args) == 1:
        arg = args[0]
        if isinstance(arg, str):
            # Strip brackets, accept space or comma separation
            stripped = re.sub(r"[\(\)\[\]]", " ", arg)
            args = [ float(x) for x in re.split(r"[\s,]+", stripped.strip()) if x != "" ]
        else:
            args = arg

    coefficients = np.array(args, dtype=np.float64).flatten()
    if coefficients.size != nCoefficients:
        raise ValueError("{} requires {} coefficients, got {}: {}".format(typeName, nCoefficients, coefficients.size, args))

    return coefficients

class _EvenElement():
    ''' Shared arithmetic for Line and Motor. Subclasses define nCoefficients and _toEven() '''
    __slots__ = [ "coefficients" ]
    nCoefficients = 0
    __array_ufunc__ = None # numpy scalars defer to __rmul__ instead of broadcasting over the coefficients

    def __init__(self, *args):
        self.coefficients = _parseCoefficients(args, self.nCoefficients, type(self).__name__)

    @classmethod
    def _fromArray(cls, coefficients):
        ''' Construct without copying / validating, coefficients must already be a float array of the correct length '''
        result = cls.__new__(cls)
        result.coefficients = coefficients
        return result

    #### Scalar-like arithmetic ####
    def __add__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._fromArray(self.coefficients + other.coefficients)

    def __sub__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._fromArray(self.coefficients - other.coefficients)

    def __neg__(self):
        return self._fromArray(-self.coefficients)

    def __mul__(self, other):
        if isinstance(other, _EvenElement):
            return geometricProduct(self, other)
        try:
            scalar = float(other)
        except (TypeError, ValueError):
            return NotImplemented
        return self._fromArray(self.coefficients * scalar)

    def __rmul__(self, scalar):
        # Only reached for scalar * element, element * element is handled by __mul__
        return self * scalar

    def __truediv__(self, scalar):
        return self._fromArray(self.coefficients / float(scalar))

    def __eq__(self, other):
        try:
            return type(other) is type(self) and np.array_equal(self.coefficients, other.coefficients)
        except AttributeError:
            return False

    def __hash__(self):
        return hash((type(self).__name__, tuple(self.coefficients)))

    #### Container-like behavior ####
    def __len__(self):
        return self.nCoefficients

    def __iter__(self):
        return iter(self.coefficients.tolist())

    def __getitem__(self, index):
        return self.coefficients[index]

    #### Elementwise ('Hadamard') operations ####
    def elementwiseMultiply(self, other):
        return elementwiseMultiply(self, other)

    def elementwiseDivide(self, other):
        return elementwiseDivide(self, other)

    ### String Functions ###
    def __format__(self, formatSpec):
        ''' Applies formatSpec to each coefficient: "{:>10.3f}".format(line) '''
        return " ".join([ format(x, formatSpec) for x in self.coefficients ])

    def __str__(self):
        return "({})".format(" ".join([ repr(float(x)) for x in self.coefficients ]))

    def __repr__(self):
        return "{}{}".format(type(self).__name__, tuple(float(x) for x in self.coefficients))

class Line(_EvenElement):
    '''
        PGA bivector: Line(e01, e02, e03, e12, e31, e23)
        Can also be created from an iterable of 6 numbers or a string: Line("(0 0 0 0.1 0.001 0)")
    '''
    __slots__ = []
    nCoefficients = 6

    def _toEven(self):
        even = np.zeros(8)
        even[LINE_INDICES] = self.coefficients
        return even

    def dual(self):
        return dual(self)

    def commutator(self, other):
        return commutator(self, other)

    def norm(self) -> float:
        ''' Euclidean norm - only the Euclidean (angular) part contributes '''
        e12, e31, e23 = self.coefficients[3:]
        return float(np.sqrt(e12*e12 + e31*e31 + e23*e23))

    def idealNorm(self) -> float:
        ''' Norm of the ideal (linear) part '''
        e01, e02, e03 = self.coefficients[:3]
        return float(np.sqrt(e01*e01 + e02*e02 + e03*e03))

    def getLogHeader(self, name="Line"):
        return " ".join([ "{}_{}".format(name, basisName) for basisName in EVEN_BASIS_NAMES[LINE_INDICES] ])

class Motor(_EvenElement):
    '''
        Even PGA element representing a rigid transformation: Motor(1, e01, e02, e03, e12, e31, e23, e0123)
        Can also be created from an iterable of 8 numbers or a string: Motor("(1 0 0 0 0 1 3 -2)")
    '''
    __slots__ = []
    nCoefficients = 8

    def _toEven(self):
        return self.coefficients

    def reverse(self):
        ''' Flips the sign of the bivector part '''
        result = self.coefficients.copy()
        result[LINE_INDICES] *= -1
        return Motor._fromArray(result)

    def norm(self) -> float:
        ''' Euclidean norm sqrt(|<M ~M>_0|) - the ideal (translational) coefficients do not contribute '''
        s, e12, e31, e23 = self.coefficients[[0, 4, 5, 6]]
        return float(np.sqrt(s*s + e12*e12 + e31*e31 + e23*e23))

    def normalize(self):
        ''' Returns a new, unit-norm Motor '''
        norm = self.norm()
        if norm == 0:
            raise ValueError("Unable to normalize Motor with zero Euclidean norm: {}".format(self))
        return self / norm

    def bivectorPart(self) -> Line:
        return Line._fromArray(self.coefficients[LINE_INDICES].copy())

    def getLogHeader(self, name="Motor"):
        return " ".join([ "{}_{}".format(name, basisName) for basisName in EVEN_BASIS_NAMES ])

#### Free functions ####
def geometricProduct(a, b) -> Motor:
    ''' Geometric product of two even elements (Lines or Motors) '''
    product = np.einsum('i,j,ijk->k', a._toEven(), b._toEven(), EVEN_PRODUCT_TABLE)
    return Motor._fromArray(product)

def dual(line: Line) -> Line:
    ''' Poincare dual of a line: e01 <-> e23, e02 <-> e31, e03 <-> e12 (reverses the coefficient order) '''
    return Line._fromArray(line.coefficients[::-1].copy())

def commutator(a: Line, b: Line) -> Line:
    ''' Antisymmetric commutator product (ab - ba)/2. The commutator of two lines is a line '''
    ab = geometricProduct(a, b).coefficients
    ba = geometricProduct(b, a).coefficients
    return Line._fromArray((ab[LINE_INDICES] - ba[LINE_INDICES]) * 0.5)

def elementwiseMultiply(a, b):
    ''' Coefficient-by-coefficient product of two elements of the same type '''
    _checkSameType(a, b)
    return a._fromArray(a.coefficients * b.coefficients)

def elementwiseDivide(a, b):
    ''' Coefficient-by-coefficient division of two elements of the same type. Zero coefficients in b produce non-finite results '''
    _checkSameType(a, b)
    with np.errstate(divide='ignore', invalid='ignore'):
        return a._fromArray(a.coefficients / b.coefficients)

def _checkSameType(a, b):
    if type(a) is not type(b):
        raise TypeError("Elementwise operations require two elements of the same type, got {} and {}".format(type(a).__name__, type(b).__name__))

def zeroLine() -> Line:
    return Line._fromArray(np.zeros(6))

def identityMotor() -> Motor:
    coefficients = np.zeros(8)
    coefficients[0] = 1.0
    return Motor._fromArray(coefficients)
