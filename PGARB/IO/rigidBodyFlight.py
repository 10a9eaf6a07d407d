'''
Temporarily holds simulation results.
Used for plotting and for writing the rigid body state log.
'''

import numpy as np

from PGARB.Motion import RigidBodyState

__all__ = [ "RigidBodyFlight" ]

class RigidBodyFlight():
    ''' Holds simulation results '''

    def __init__(self):
        ''' These arrays are filled in during a simulation '''
        self.times = []
        self.rigidBodyStates = []

    def appendState(self, time, rigidBodyState: RigidBodyState):
        self.times.append(time)
        self.rigidBodyStates.append(rigidBodyState)

    def getFlightTime(self):
        return self.times[-1]

    def getTwistHistory(self) -> np.ndarray:
        ''' (nTimes, 6) array '''
        return np.array([ state.twist.coefficients for state in self.rigidBodyStates ])

    def getPoseHistory(self) -> np.ndarray:
        ''' (nTimes, 8) array '''
        return np.array([ state.pose.coefficients for state in self.rigidBodyStates ])

    def getPoseNorms(self) -> np.ndarray:
        ''' Should stay close to 1 - used to monitor drift off the unit manifold '''
        return np.array([ state.pose.norm() for state in self.rigidBodyStates ])

    def getMaxPoseNormError(self) -> float:
        return float(np.max(np.abs(self.getPoseNorms() - 1.0)))

    def getLogHeader(self) -> str:
        return "Time(s)" + self.rigidBodyStates[0].getLogHeader() + " PoseNorm"

    def writeToFile(self, filePath):
        ''' Writes a whitespace-separated table (one row per time step) that can be loaded with `PGARB.IO.Plotting.getLoggedColumns` '''
        times = np.array(self.times).reshape(-1, 1)
        poseNorms = self.getPoseNorms().reshape(-1, 1)
        table = np.hstack((times, self.getTwistHistory(), self.getPoseHistory(), poseNorms))

        np.savetxt(filePath, table, fmt="%.12g", header=self.getLogHeader(), comments="")
        return filePath
