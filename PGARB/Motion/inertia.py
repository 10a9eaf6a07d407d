# Maps between twist-space and momentum-space

'''
    The inertia of a rigid body is stored as a `PGARB.Motion.PGA.Line` with 6 coefficients.
    It acts as a diagonal operator on the dual of a twist:

        momentum = dual(twist) .* inertia
        twist = dual(momentum ./ inertia)

    For a body with principal moments of inertia Ixx, Iyy, Izz and mass m, the inertia line is (Ixx, Iyy, Izz, m, m, m)
'''

import numpy as np

from PGARB.Motion.PGA import Line, dual, elementwiseDivide, elementwiseMultiply

__all__ = [ "inertiaMap", "invInertiaMap", "principalInertia", "checkInertia" ]

def inertiaMap(twist: Line, inertia: Line) -> Line:
    '''
        Computes the momentum of a twist.

        Example:
            twist = Line(0.0, 0.0, 0.0, 0.1, 0.001, 0.0)
            inertia = Line(2, 1, 3, 1, 1, 1)
            inertiaMap(twist, inertia) -> Line(0.0, 0.001, 0.3, 0.0, 0.0, 0.0)
    '''
    return elementwiseMultiply(dual(twist), inertia)

def invInertiaMap(momentum: Line, inertia: Line) -> Line:
    '''
        Computes the twist (linear + angular velocity) that corresponds to a momentum.
        Inverse of `inertiaMap`. Zero inertia coefficients produce non-finite results - use `checkInertia` to catch those up front.
    '''
    return dual(elementwiseDivide(momentum, inertia))

def principalInertia(Ixx, Iyy, Izz, mass) -> Line:
    ''' Inertia line of a body with principal moments of inertia (Ixx, Iyy, Izz) about its CG, aligned with its body axes '''
    return Line(Ixx, Iyy, Izz, mass, mass, mass)

def checkInertia(inertia: Line) -> None:
    '''
        Raises a ValueError if any inertia coefficient is zero or non-finite.
        An axis with no resistance to changes in twist makes `invInertiaMap` undefined.
    '''
    coefficients = inertia.coefficients
    if not np.all(np.isfinite(coefficients)):
        raise ValueError("Inertia coefficients must be finite: {}".format(inertia))

    if np.any(coefficients == 0):
        raise ValueError("Inertia coefficients must be nonzero: {}".format(inertia))
