import sys
from math import log

import matplotlib.pyplot as plt
import numpy as np

from PGARB.IO import Logging
from PGARB.Motion import RigidBodyState, eulerStep, rbmPhysicsStepPGA
from PGARB.SimulationRunners.SingleSimulations import Simulation

__all__ = [ "ConvergenceSimRunner" ]

class ConvergenceSimRunner(Simulation):
    '''
        Integrates a single time step (SimControl.timeStep) of the rigid body defined in a simulation definition several different ways, comparing the results
        If silent, the results are returned but not printed
    '''
    def __init__(self, simDefinitionFilePath=None, simDefinition=None, silent=False):
        Simulation.__init__(self, simDefinitionFilePath=simDefinitionFilePath, simDefinition=simDefinition, silent=silent)

    def _silenceConsole(self):
        if self.silent:
            self.logger = Logging.Logger([], continueWritingToTerminal=False)
            sys.stdout = self.logger

    def compareStepSplitting(self, nSplits=2):
        '''
            Advances one copy of the rigid body by a single time step, and another by nSplits time steps of 1/nSplits the size.
            For an accurate integrator, the two results should match closely.

            Returns:
                (twistDifference, poseDifference): Norms of the differences between the two results' coefficients
        '''
        if nSplits < 1:
            raise ValueError("nSplits must be >= 1, got: {}".format(nSplits))

        self._silenceConsole()
        try:
            return self._compareStepSplitting(nSplits)
        finally:
            self._removeConsoleLogging()

    def _compareStepSplitting(self, nSplits):
        deltaT = float(self.simDefinition.getValue("SimControl.timeStep"))

        singleStepBody = self.createRigidBody()
        singleStepBody.timeStep(deltaT)

        splitStepBody = self.createRigidBody()
        for _ in range(nSplits):
            splitStepBody.timeStep(deltaT / nSplits)

        twistDifference = float(np.linalg.norm((singleStepBody.twist - splitStepBody.twist).coefficients))
        poseDifference = float(np.linalg.norm((singleStepBody.pose - splitStepBody.pose).coefficients))

        print("Integration method: {}".format(singleStepBody.integrationMethod))
        print("Time step: {}, split into {} steps".format(deltaT, nSplits))
        print("Single step:  twist: ({:>14.10f}) pose: ({:>14.10f})".format(singleStepBody.twist, singleStepBody.pose))
        print("Split steps:  twist: ({:>14.10f}) pose: ({:>14.10f})".format(splitStepBody.twist, splitStepBody.pose))
        print("Twist difference: {:1.3e}, Pose difference: {:1.3e}".format(twistDifference, poseDifference))

        return twistDifference, poseDifference

    def convergeEulerStepCount(self, initialStepCount=10, refinementRatio=2, simLimit=5, plot=False, showPlot=True):
        '''
            Runs eulerStep over a single time step (SimControl.timeStep) repeatedly, multiplying the number of sub-steps by refinementRatio each time.
            Each result is compared to a tight-tolerance adaptive (RK78) reference solution.

            Parameters:
                initialStepCount        int, number of Euler sub-steps in the first simulation
                refinementRatio         int, each time the sim is run, the step count is multiplied by this number
                simLimit                int, number of simulations to run (takes exponentially more time to run more simulations)
                plot                    True/False, whether to plot the error vs step count
                showPlot                True/False, if True, calls plt.show()

            Returns:
                stepCounts (list[int]), errors (list[float]), observedOrders (list[float], one shorter than errors)
        '''
        self._silenceConsole()
        try:
            return self._convergeEulerStepCount(initialStepCount, refinementRatio, simLimit, plot, showPlot)
        finally:
            self._removeConsoleLogging()

    def _convergeEulerStepCount(self, initialStepCount, refinementRatio, simLimit, plot, showPlot):
        rigidBody = self.createRigidBody()
        deltaT = float(self.simDefinition.getValue("SimControl.timeStep"))
        initState = rigidBody.state
        startTime = rigidBody.time

        refTwist, refPose = rbmPhysicsStepPGA(initState.twist, initState.pose, rigidBody.inertia, deltaT, rigidBody.forqueFunc, method="RK78Adaptive",
            renormalizePose=True, startTime=startTime, rtol=1e-12, atol=1e-14)
        referenceState = RigidBodyState(refTwist, refPose)

        print("Starting Euler step count convergence study")
        stepCounts = []
        errors = []
        observedOrders = []

        stepCount = initialStepCount
        for simCount in range(simLimit):
            twist, pose = eulerStep(initState.twist, initState.pose, rigidBody.inertia, stepCount, deltaT, forque=rigidBody.forqueFunc, startTime=startTime)
            error = abs(RigidBodyState(twist, pose) - referenceState)

            stepCounts.append(stepCount)
            errors.append(error)

            printString = "Simulation {}, Step count: {:>8d}, Error: {:1.4e}".format(simCount+1, stepCount, error)
            if len(errors) > 1 and errors[-1] > 0 and errors[-2] > 0:
                observedOrders.append(log(errors[-2] / errors[-1]) / log(refinementRatio))
                printString += ", Observed order: {:>5.3f}".format(observedOrders[-1])
            print(printString)

            stepCount = int(stepCount * refinementRatio)

        if plot:
            plt.loglog(stepCounts, errors, ":D", label="Euler")
            plt.xlabel("Step count")
            plt.ylabel("Error (coefficient space)")
            plt.legend()
            plt.tight_layout()

            if showPlot:
                plt.show()

        return stepCounts, errors, observedOrders
