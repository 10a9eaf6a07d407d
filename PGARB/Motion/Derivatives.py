'''
    Rigid body equations of motion in PGA form.

    The pose (`PGARB.Motion.PGA.Motor`) evolves according to the current twist:
        dPose/dt = -0.5 * pose * twist

    The twist (`PGARB.Motion.PGA.Line`) evolves according to the external forque and the gyroscopic coupling between twist and momentum:
        dTwist/dt = I^-1[ forque + commutator(twist, I[twist]) ]

    Where I[] is `PGARB.Motion.inertia.inertiaMap` and I^-1[] is `PGARB.Motion.inertia.invInertiaMap`.
    Both laws are pure functions. The coefficient-vector versions at the bottom of this file are the ones passed to ODE solvers.
'''

import numpy as np

from PGARB.Motion.inertia import inertiaMap, invInertiaMap
from PGARB.Motion.PGA import Line, Motor, commutator, zeroLine

__all__ = [ "poseDerivative", "twistDerivative", "zeroForque", "RigidBodyMotionParameters", "twistDerivativeVector", "poseDerivativeVector" ]

def poseDerivative(twist: Line, pose: Motor) -> Motor:
    ''' Rate of change of a pose moving with the given (body-frame) twist. The result is not renormalized '''
    return pose * twist * -0.5

def twistDerivative(twist: Line, inertia: Line, forque: Line=None) -> Line:
    '''
        Rate of change of a twist, given the body's inertia and the external forque acting on it.
        The gyroscopic term is always included, even when the forque is zero.
    '''
    momentum = inertiaMap(twist, inertia)
    gyroscopicTerm = commutator(twist, momentum)

    if forque is not None:
        gyroscopicTerm = forque + gyroscopicTerm

    return invInertiaMap(gyroscopicTerm, inertia)

def zeroForque(twistVector, poseVector, time) -> Line:
    ''' Default forque function - no external forces or torques '''
    return zeroLine()

class RigidBodyMotionParameters():
    '''
        Parameters shared by the twist and pose derivative functions during an ODE solve
            inertia:    (`PGARB.Motion.PGA.Line`)
            forque:     function(twistVector, poseVector, time) -> `PGARB.Motion.PGA.Line`
    '''
    __slots__ = [ "inertia", "forque" ]

    def __init__(self, inertia: Line, forque=zeroForque):
        self.inertia = inertia
        self.forque = forque

#### Coefficient-vector forms ####
def twistDerivativeVector(twistVector, poseVector, parameters: RigidBodyMotionParameters, time) -> np.ndarray:
    twist = Line(twistVector)
    forque = parameters.forque(twistVector, poseVector, time)
    return twistDerivative(twist, parameters.inertia, forque).coefficients

def poseDerivativeVector(twistVector, poseVector, parameters: RigidBodyMotionParameters, time) -> np.ndarray:
    return poseDerivative(Line(twistVector), Motor(poseVector)).coefficients
