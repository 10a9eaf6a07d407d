'''
Rigid body state: a twist (`PGARB.Motion.PGA.Line`) and a pose (`PGARB.Motion.PGA.Motor`).
Defined in such a way that states can be treated like scalars: added, subtracted, scaled, and compared by magnitude.
'''

import numpy as np

from PGARB.Motion.PGA import Line, Motor, identityMotor, zeroLine

__all__ = [ "RigidBodyState" ]

class RigidBodyState():
    """ Class created to be able to treat rigidBody states like scalars
            Twist is expected to be a Line - linear velocity in the ideal part, angular velocity in the Euclidean part
            Pose is expected to be a Motor - should have unit norm

        Adding / subtracting rigidBodyStates adds / subtracts the coefficients of the twists and poses
        Multiplying a rigidBodyState by a scalar scales all coefficients
            The result of these operations is not renormalized, call normalizePose() for that
    """
    __slots__ = [ "twist", "pose" ]

    def __init__(self, twist=None, pose=None):
        self.twist = twist if twist is not None else zeroLine()
        self.pose = pose if pose is not None else identityMotor()

    def __add__(self, rigidBodyState2):
        return RigidBodyState(self.twist + rigidBodyState2.twist, self.pose + rigidBodyState2.pose)

    def __sub__(self, rigidBodyState2):
        return RigidBodyState(self.twist - rigidBodyState2.twist, self.pose - rigidBodyState2.pose)

    def __mul__(self, scalar):
        scalar = float(scalar)
        return RigidBodyState(self.twist * scalar, self.pose * scalar)

    def __abs__(self):
        ''' Used to quantify the difference between two RigidBodyStates as a scalar value: abs(state1 - state2) '''
        return float(np.sqrt(np.sum(self.twist.coefficients**2) + np.sum(self.pose.coefficients**2)))

    def __eq__(self, state2):
        try:
            return self.twist == state2.twist and self.pose == state2.pose
        except AttributeError:
            return False

    def normalizePose(self):
        ''' Returns a new state with the same twist and a unit-norm pose '''
        return RigidBodyState(self.twist, self.pose.normalize())

    def copy(self):
        return RigidBodyState(Line(self.twist.coefficients), Motor(self.pose.coefficients))

    ### String Functions ###
    def getLogHeader(self):
        return " {} {}".format(self.twist.getLogHeader("Twist"), self.pose.getLogHeader("Pose"))

    def __str__(self):
        ''' Called by print function '''
        return " {:>12.7f} {:>12.9f}".format(self.twist, self.pose)

    def __repr__(self):
        return "RigidBodyState({!r}, {!r})".format(self.twist, self.pose)

    ### Wrapper/Thin functions ###
    def __rmul__(self, scalar):
        return self * scalar

    def __neg__(self):
        return self * -1
