'''
    Time integration of the rigid body equations of motion defined in `PGARB.Motion.Derivatives`.

    Two strategies are available:

    * `eulerStep` - N equal semi-implicit Euler sub-steps on the PGA values. First-order, cheap, pose renormalized at the end.
    * `rbmPhysicsStep` / `rbmPhysicsStepPGA` - a single adaptive step over deltaT, computed by `scipy.integrate.solve_ivp`.
        The twist and pose are treated as a partitioned ODE problem (two state vectors, two derivative functions), see `RigidBodyMotionProblem`

    See `PGARB.Motion.RigidBodies.RigidBody.timeStep` for an example of how these are used to advance a rigid body.

    Adaptive method names accepted in simulation definition files:
        RK45Adaptive:   Dormand-Prince 5(4) (default)
        RK23Adaptive:   Bogacki-Shampine 3(2)
        RK78Adaptive:   Dormand-Prince 8(5,3) (scipy's DOP853)
    Any other scipy.integrate.solve_ivp method name ("Radau", "BDF", "LSODA", ...) or OdeSolver subclass can also be passed directly.
'''

import numpy as np
from scipy.integrate import OdeSolver, solve_ivp

from PGARB.Motion.Derivatives import (RigidBodyMotionParameters,
                                      poseDerivative,
                                      poseDerivativeVector, twistDerivative,
                                      twistDerivativeVector, zeroForque)
from PGARB.Motion.PGA import Line, Motor

__all__ = [ "eulerStep", "initRigidBodyMotion", "RigidBodyMotionProblem", "RigidBodyMotionSolution", "rbmPhysicsStep", "rbmPhysicsStepPGA", "SolverConvergenceError", "getSolverMethod" ]

ADAPTIVE_METHODS = {
    "RK45Adaptive": "RK45",
    "RK23Adaptive": "RK23",
    "RK78Adaptive": "DOP853",
}
SCIPY_METHODS = ( "RK45", "RK23", "DOP853", "Radau", "BDF", "LSODA" )

DEFAULT_RELATIVE_TOLERANCE = 1e-6
DEFAULT_ABSOLUTE_TOLERANCE = 1e-9

class SolverConvergenceError(RuntimeError):
    ''' Raised when the adaptive ODE solver is unable to complete a time step '''

    def __init__(self, status, solverMessage, lastTime):
        self.status = status
        self.solverMessage = solverMessage
        self.lastTime = lastTime
        super().__init__("ODE solver failed at t = {} (status {}): {}".format(lastTime, status, solverMessage))

def getSolverMethod(method):
    ''' Translates a PGARB integration method name into something scipy.integrate.solve_ivp accepts '''
    if isinstance(method, type) and issubclass(method, OdeSolver):
        return method

    if method in ADAPTIVE_METHODS:
        return ADAPTIVE_METHODS[method]
    elif method in SCIPY_METHODS:
        return method

    raise ValueError("Integration method: {} not implemented. Options are: {}".format(method, list(ADAPTIVE_METHODS.keys()) + list(SCIPY_METHODS)))

#### Fixed step ####
def eulerStep(twist: Line, pose: Motor, inertia: Line, stepCount: int, deltaT: float, forque=None, startTime=0):
    '''
        Advances (twist, pose) by deltaT using stepCount equal Euler sub-steps.
        Each sub-step updates the twist first, then uses the updated twist to update the pose.
        The pose is renormalized once, after the last sub-step.

        Inputs:
            forque: (optional) function(twistVector, poseVector, time) -> `PGARB.Motion.PGA.Line`. Zero if omitted

        Returns:
            (Line, Motor): twist and pose at startTime + deltaT
    '''
    if isinstance(stepCount, bool) or int(stepCount) != stepCount or stepCount < 1:
        raise ValueError("Euler step count must be an integer >= 1, got: {}".format(stepCount))

    stepCount = int(stepCount)
    dt = deltaT / stepCount

    for i in range(stepCount):
        forqueValue = None
        if forque is not None:
            forqueValue = forque(twist.coefficients, pose.coefficients, startTime + i*dt)

        twist = twist + twistDerivative(twist, inertia, forqueValue) * dt
        pose = pose + poseDerivative(twist, pose) * dt

    return twist, pose.normalize()

#### Adaptive ####
class RigidBodyMotionSolution():
    '''
        Trajectory computed by `RigidBodyMotionProblem.solve`
            times:                      (n,) array
            twistHistory:               (n, 6) array, one row per time
            poseHistory:                (n, 8) array, one row per time
            nDerivativeEvaluations:     Number of times the (combined) derivative function was evaluated
    '''
    __slots__ = [ "times", "twistHistory", "poseHistory", "nDerivativeEvaluations" ]

    def __init__(self, times, twistHistory, poseHistory, nDerivativeEvaluations=0):
        self.times = times
        self.twistHistory = twistHistory
        self.poseHistory = poseHistory
        self.nDerivativeEvaluations = nDerivativeEvaluations

    def finalState(self):
        ''' Returns (twistVector, poseVector) at the last time reached '''
        return self.twistHistory[-1].copy(), self.poseHistory[-1].copy()

class RigidBodyMotionProblem():
    '''
        Partitioned ODE problem: the twist and pose each have their own state vector and derivative function.
        Both derivative functions have the signature f(twistVector, poseVector, parameters, time) -> np.ndarray
    '''

    def __init__(self, twistDerivativeFunc, poseDerivativeFunc, twist0, pose0, timeSpan, parameters: RigidBodyMotionParameters):
        self.twistDerivativeFunc = twistDerivativeFunc
        self.poseDerivativeFunc = poseDerivativeFunc
        self.twist0 = np.array(twist0, dtype=np.float64)
        self.pose0 = np.array(pose0, dtype=np.float64)
        self.timeSpan = (float(timeSpan[0]), float(timeSpan[1]))
        self.parameters = parameters

        self.nTwist = len(self.twist0)

    def _stateDerivative(self, time, state):
        twistVector = state[:self.nTwist]
        poseVector = state[self.nTwist:]

        twistRate = self.twistDerivativeFunc(twistVector, poseVector, self.parameters, time)
        poseRate = self.poseDerivativeFunc(twistVector, poseVector, self.parameters, time)
        return np.concatenate((twistRate, poseRate))

    def solve(self, method="RK45Adaptive", **options) -> RigidBodyMotionSolution:
        '''
            Integrates over self.timeSpan. options are passed through to scipy.integrate.solve_ivp (rtol, atol, max_step, first_step, ...)
            Raises `SolverConvergenceError` if the solver does not reach the end of the time span
        '''
        options.setdefault("rtol", DEFAULT_RELATIVE_TOLERANCE)
        options.setdefault("atol", DEFAULT_ABSOLUTE_TOLERANCE)

        initState = np.concatenate((self.twist0, self.pose0))
        result = solve_ivp(self._stateDerivative, self.timeSpan, initState, method=getSolverMethod(method), **options)

        if not result.success:
            lastTime = result.t[-1] if len(result.t) > 0 else self.timeSpan[0]
            raise SolverConvergenceError(result.status, result.message, lastTime)

        twistHistory = result.y[:self.nTwist].T
        poseHistory = result.y[self.nTwist:].T
        return RigidBodyMotionSolution(result.t, twistHistory, poseHistory, result.nfev)

def initRigidBodyMotion(twistVector, poseVector, inertia: Line, deltaT, forque=zeroForque, startTime=0) -> RigidBodyMotionProblem:
    ''' Normalizes the initial pose and packages both derivative laws into a problem spanning [startTime, startTime + deltaT] '''
    pose0 = Motor(poseVector).normalize().coefficients
    twist0 = Line(twistVector).coefficients
    parameters = RigidBodyMotionParameters(inertia, forque)

    return RigidBodyMotionProblem(twistDerivativeVector, poseDerivativeVector, twist0, pose0, (startTime, startTime + deltaT), parameters)

def rbmPhysicsStep(twistVector, poseVector, inertia: Line, deltaT, forque=zeroForque, method="RK45Adaptive", renormalizePose=False, startTime=0, **solverOptions):
    '''
        Advances a rigid body by deltaT with an adaptive ODE solver.
        The input pose is normalized before integration. The output pose is only renormalized if renormalizePose is True.
        Input arrays are not modified.

        Returns:
            (twistVector, poseVector): numpy arrays at startTime + deltaT
    '''
    problem = initRigidBodyMotion(twistVector, poseVector, inertia, deltaT, forque, startTime)
    solution = problem.solve(method, **solverOptions)
    twistVector, poseVector = solution.finalState()

    if renormalizePose:
        poseVector = Motor(poseVector).normalize().coefficients

    return twistVector, poseVector

def rbmPhysicsStepPGA(twist: Line, pose: Motor, inertia: Line, deltaT, forque=zeroForque, method="RK45Adaptive", renormalizePose=False, startTime=0, **solverOptions):
    ''' Same as `rbmPhysicsStep`, on PGA values. Returns (Line, Motor) '''
    twistVector, poseVector = rbmPhysicsStep(twist.coefficients, pose.coefficients, inertia, deltaT, forque, method, renormalizePose, startTime, **solverOptions)
    return Line(twistVector), Motor(poseVector)
