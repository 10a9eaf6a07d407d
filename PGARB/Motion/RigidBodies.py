"""
Mutable rigid body record.
All of the physics lives in `PGARB.Motion.Derivatives` and `PGARB.Motion.Integration`, this class just keeps track of the current state and time
"""

from PGARB.Motion.Derivatives import zeroForque
from PGARB.Motion.inertia import checkInertia
from PGARB.Motion.Integration import eulerStep, getSolverMethod, rbmPhysicsStep
from PGARB.Motion.PGA import Line, Motor
from PGARB.Motion.RigidBodyStates import RigidBodyState

__all__ = [ "RigidBody" ]

class RigidBody():
    """
        Interface:
            Properties:
                .state = RigidBodyState (twist, pose)
                .twist / .pose = shortcuts to the current state's values
                .inertia = Line (Ixx, Iyy, Izz, m, m, m)
                .time = currentSimTime

            External functions wrapped by this class
                .forqueFunc(twistVector, poseVector, time) -> Line

            Methods
                .timeStep(deltaT) -> advances the rigid body by deltaT, returns the new RigidBodyState
    """

    def __init__(self, rigidBodyState, inertia, forqueFunc=zeroForque, startTime=0, integrationMethod="RK45Adaptive", renormalizePose=True, eulerStepCount=1000, solverOptions=None):
        '''
            integrationMethod:  "Euler" for `PGARB.Motion.Integration.eulerStep`, otherwise any method accepted by `PGARB.Motion.Integration.getSolverMethod`
            renormalizePose:    Only affects adaptive integration - Euler steps always renormalize the pose
            eulerStepCount:     Number of sub-steps per Euler time step
            solverOptions:      dict of options passed to scipy.integrate.solve_ivp (rtol, atol, max_step, ...)
        '''
        checkInertia(inertia)

        if integrationMethod == "Euler":
            if eulerStepCount < 1 or int(eulerStepCount) != eulerStepCount:
                raise ValueError("Euler step count must be an integer >= 1, got: {}".format(eulerStepCount))
        else:
            getSolverMethod(integrationMethod) # Raises ValueError for unknown methods

        self.state = rigidBodyState
        self.inertia = inertia
        self.forqueFunc = forqueFunc
        self.time = startTime

        self.integrationMethod = integrationMethod
        self.renormalizePose = renormalizePose
        self.eulerStepCount = int(eulerStepCount)
        self.solverOptions = dict(solverOptions) if solverOptions is not None else {}

    @property
    def twist(self) -> Line:
        return self.state.twist

    @property
    def pose(self) -> Motor:
        return self.state.pose

    def timeStep(self, deltaT):
        if self.integrationMethod == "Euler":
            twist, pose = eulerStep(self.twist, self.pose, self.inertia, self.eulerStepCount, deltaT, forque=self.forqueFunc, startTime=self.time)
        else:
            twistVector, poseVector = rbmPhysicsStep(
                self.twist.coefficients,
                self.pose.coefficients,
                self.inertia,
                deltaT,
                forque=self.forqueFunc,
                method=self.integrationMethod,
                renormalizePose=self.renormalizePose,
                startTime=self.time,
                **self.solverOptions
            )
            twist, pose = Line(twistVector), Motor(poseVector)

        # This is where the simulation time and state are kept track of
        self.time += deltaT
        self.state = RigidBodyState(twist, pose)

        return self.state
