import unittest
from math import cos, sin, sqrt
from test.testUtilities import (assertIterablesAlmostEqual,
                                assertMotorsAlmostEqual)

import numpy as np

from PGARB.Motion import (Line, Motor, commutator, dual, elementwiseDivide,
                          elementwiseMultiply, geometricProduct, identityMotor,
                          zeroLine)


class TestConstruction(unittest.TestCase):
    def test_constructFromNumbers(self):
        line = Line(1, 2, 3, 4, 5, 6)
        assertIterablesAlmostEqual(self, line.coefficients, [1, 2, 3, 4, 5, 6])

        motor = Motor(1, 0, 0, 0, 0, 1, 3, -2)
        assertIterablesAlmostEqual(self, motor.coefficients, [1, 0, 0, 0, 0, 1, 3, -2])

    def test_constructFromIterable(self):
        self.assertEqual(Line([1, 2, 3, 4, 5, 6]), Line(1, 2, 3, 4, 5, 6))
        self.assertEqual(Motor(np.arange(8)), Motor(0, 1, 2, 3, 4, 5, 6, 7))

    def test_constructFromString(self):
        self.assertEqual(Line("(0 0 0 0.1 0.001 0)"), Line(0, 0, 0, 0.1, 0.001, 0))
        self.assertEqual(Motor("(1, 0, 0, 0, 0, 1, 3, -2)"), Motor(1, 0, 0, 0, 0, 1, 3, -2))

    def test_strRoundTrip(self):
        line = Line(0.1, -2.5, 3e-7, 4, 5, 6)
        self.assertEqual(Line(str(line)), line)

    def test_wrongLength(self):
        with self.assertRaises(ValueError):
            Line(1, 2, 3)
        with self.assertRaises(ValueError):
            Motor(1, 2, 3, 4, 5, 6)
        with self.assertRaises(ValueError):
            Line("(1 2 3 4 5 6 7)")

    def test_factories(self):
        self.assertEqual(zeroLine(), Line(0, 0, 0, 0, 0, 0))
        self.assertEqual(identityMotor(), Motor(1, 0, 0, 0, 0, 0, 0, 0))

class TestScalarArithmetic(unittest.TestCase):
    def setUp(self):
        self.l1 = Line(1, 2, 3, 4, 5, 6)
        self.l2 = Line(6, 5, 4, 3, 2, 1)

    def test_addSubtract(self):
        self.assertEqual(self.l1 + self.l2, Line(7, 7, 7, 7, 7, 7))
        self.assertEqual(self.l1 - self.l2, Line(-5, -3, -1, 1, 3, 5))
        self.assertEqual(-self.l1, Line(-1, -2, -3, -4, -5, -6))

    def test_scale(self):
        self.assertEqual(self.l1 * 2, Line(2, 4, 6, 8, 10, 12))
        self.assertEqual(2 * self.l1, Line(2, 4, 6, 8, 10, 12))
        self.assertEqual(self.l1 / 2, Line(0.5, 1, 1.5, 2, 2.5, 3))

        scaled = np.float64(2.0) * self.l1
        self.assertIsInstance(scaled, Line)
        self.assertEqual(scaled, Line(2, 4, 6, 8, 10, 12))

    def test_mixedTypesNotAddable(self):
        with self.assertRaises(TypeError):
            self.l1 + identityMotor()

    def test_resultsAreNewObjects(self):
        original = Line(1, 2, 3, 4, 5, 6)
        result = original * 3
        result.coefficients[0] = 100
        self.assertEqual(original, Line(1, 2, 3, 4, 5, 6))

    def test_format(self):
        self.assertEqual("{:.1f}".format(self.l1), "1.0 2.0 3.0 4.0 5.0 6.0")

class TestGeometricProduct(unittest.TestCase):
    def test_euclideanBivectorSquaresToMinusOne(self):
        e12 = Line(0, 0, 0, 1, 0, 0)
        self.assertEqual(e12 * e12, Motor(-1, 0, 0, 0, 0, 0, 0, 0))

    def test_idealBivectorSquaresToZero(self):
        e01 = Line(1, 0, 0, 0, 0, 0)
        self.assertEqual(e01 * e01, Motor(0, 0, 0, 0, 0, 0, 0, 0))

    def test_basisProducts(self):
        e12 = Line(0, 0, 0, 1, 0, 0)
        e02 = Line(0, 1, 0, 0, 0, 0)
        e03 = Line(0, 0, 1, 0, 0, 0)
        e31 = Line(0, 0, 0, 0, 1, 0)
        e23 = Line(0, 0, 0, 0, 0, 1)

        # e12 * e02 = e01
        self.assertEqual(geometricProduct(e12, e02), Motor(0, 1, 0, 0, 0, 0, 0, 0))
        # e23 * e31 = -e12
        self.assertEqual(e23 * e31, Motor(0, 0, 0, 0, -1, 0, 0, 0))
        # e12 * e03 = e0123
        self.assertEqual(e12 * e03, Motor(0, 0, 0, 0, 0, 0, 0, 1))

    def test_rotorTimesReverse(self):
        angle = 0.3
        rotor = Motor(cos(angle), 0, 0, 0, sin(angle), 0, 0, 0)
        assertMotorsAlmostEqual(self, rotor * rotor.reverse(), identityMotor())

    def test_identity(self):
        motor = Motor(1, 2, 3, 4, 5, 6, 7, 8)
        self.assertEqual(identityMotor() * motor, motor)
        self.assertEqual(motor * identityMotor(), motor)

    def test_reverse(self):
        motor = Motor(1, 2, 3, 4, 5, 6, 7, 8)
        self.assertEqual(motor.reverse(), Motor(1, -2, -3, -4, -5, -6, -7, 8))

class TestLineOperations(unittest.TestCase):
    def test_dual(self):
        line = Line(1, 2, 3, 4, 5, 6)
        self.assertEqual(dual(line), Line(6, 5, 4, 3, 2, 1))
        self.assertEqual(line.dual().dual(), line)

    def test_commutator(self):
        e12 = Line(0, 0, 0, 1, 0, 0)
        e23 = Line(0, 0, 0, 0, 0, 1)
        self.assertEqual(commutator(e12, e23), Line(0, 0, 0, 0, -1, 0))

    def test_commutatorAntisymmetric(self):
        a = Line(0.3, -1, 2, 0.5, 0.25, -4)
        b = Line(1, 2, -0.5, 3, -1, 0.75)
        assertIterablesAlmostEqual(self, commutator(a, b).coefficients, (-commutator(b, a)).coefficients)
        self.assertEqual(a.commutator(a), zeroLine())

    def test_elementwise(self):
        a = Line(1, 2, 3, 4, 5, 6)
        b = Line(2, 2, 2, 4, 4, 4)
        self.assertEqual(elementwiseMultiply(a, b), Line(2, 4, 6, 16, 20, 24))
        self.assertEqual(a.elementwiseDivide(b), Line(0.5, 1, 1.5, 1, 1.25, 1.5))

        with self.assertRaises(TypeError):
            elementwiseMultiply(a, identityMotor())

    def test_divideByZeroIsNonFinite(self):
        result = elementwiseDivide(Line(1, 1, 1, 1, 1, 1), Line(0, 1, 1, 1, 1, 1))
        self.assertTrue(np.isinf(result[0]))
        self.assertTrue(np.all(np.isfinite(result.coefficients[1:])))

class TestNorms(unittest.TestCase):
    def test_motorNorm(self):
        motor = Motor(1, 0, 0, 0, 0, 1, 3, -2)
        self.assertAlmostEqual(motor.norm(), sqrt(11))

        normalized = motor.normalize()
        self.assertAlmostEqual(normalized.norm(), 1.0)
        assertIterablesAlmostEqual(self, normalized.coefficients, motor.coefficients / sqrt(11))

    def test_idealPartDoesNotContribute(self):
        self.assertEqual(Motor(1, 5, 5, 5, 0, 0, 0, 5).norm(), 1.0)

    def test_lineNorms(self):
        line = Line(5, 5, 5, 0, 3, 4)
        self.assertAlmostEqual(line.norm(), 5.0)
        self.assertAlmostEqual(line.idealNorm(), sqrt(75))

    def test_normalizeZeroMotor(self):
        with self.assertRaises(ValueError):
            Motor(0, 1, 1, 1, 0, 0, 0, 1).normalize()

    def test_bivectorPart(self):
        motor = Motor(1, 2, 3, 4, 5, 6, 7, 8)
        self.assertEqual(motor.bivectorPart(), Line(2, 3, 4, 5, 6, 7))

    def test_logHeaders(self):
        self.assertEqual(zeroLine().getLogHeader("Twist"), "Twist_e01 Twist_e02 Twist_e03 Twist_e12 Twist_e31 Twist_e23")
        self.assertEqual(len(identityMotor().getLogHeader().split()), 8)

#If this file is run by itself, run the tests above
if __name__ == '__main__':
    unittest.main()
