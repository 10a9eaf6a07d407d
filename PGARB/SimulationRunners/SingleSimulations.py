import os
import sys

import numpy as np
from tqdm import tqdm

from PGARB.IO import (RigidBodyFlight, SimDefinition, SubDictReader)
from PGARB.IO import Logging, Plotting
from PGARB.Motion import (RigidBody, RigidBodyState, SolverConvergenceError,
                          checkInertia, principalInertia, zeroForque)

__all__ = [ "Simulation", "loadSimDefinition", "createConstantForqueFunction" ]

def loadSimDefinition(simDefinitionFilePath=None, simDefinition=None, silent=False):
    ''' Loads a simulation definition file into a `PGARB.IO.SimDefinition` object - accepts either a file path or a `PGARB.IO.SimDefinition` object as input '''
    if simDefinition is None and simDefinitionFilePath is not None:
        return SimDefinition(simDefinitionFilePath, silent=silent) # Parse simulation definition file

    elif simDefinition is not None:
        return simDefinition # Use the SimDefinition that was passed in

    else:
        raise ValueError(""" Insufficient information to initialize a Simulation.
            Please provide either simDefinitionFilePath (string) or simDefinition (SimDefinition), which has been created from the desired Sim Definition file.
            If both are provided, the SimDefinition is used.""")

def createConstantForqueFunction(forque):
    ''' Returns a forque function that always returns forque (a `PGARB.Motion.PGA.Line`) '''
    if not np.any(forque.coefficients):
        return zeroForque

    def constantForque(twistVector, poseVector, time):
        return forque

    return constantForque

class Simulation():

    def __init__(self, simDefinitionFilePath=None, simDefinition=None, silent=False):
        '''
            Inputs:

                * simDefinitionFilePath:  (string) path to simulation definition file
                * simDefinition:          (`PGARB.IO.SimDefinition`) object that's already loaded and parsed the desired sim definition file
                * silent:                 (bool) toggles optional outputs to the console
        '''
        self.simDefinition = loadSimDefinition(simDefinitionFilePath, simDefinition, silent)
        ''' Instance of `PGARB.IO.SimDefinition`. Defines the current simulation '''

        self.silent = silent
        ''' (bool) '''

        self.loggingLevel = int(self.simDefinition.getValue("SimControl.loggingLevel"))
        self.logger = None
        self.consoleOutputLog = []

    #### Pre-sim ####
    def createRigidBody(self) -> RigidBody:
        '''
            Initializes a rigid body from the RigidBody and SimControl dictionaries of the simulation definition.
            Can be called by external classes to obtain a prepped rigid body (used a lot this way in test cases).
        '''
        rigidBodyReader = SubDictReader("RigidBody", self.simDefinition)
        simControlReader = SubDictReader("SimControl", self.simDefinition)

        twist = rigidBodyReader.getLine("twist")
        pose = rigidBodyReader.getMotor("pose").normalize()
        inertia = self._readInertia(rigidBodyReader)
        forqueFunc = createConstantForqueFunction(rigidBodyReader.getLine("forque"))

        solverOptions = {
            "rtol": simControlReader.getFloat("TimeStepAdaptation.relativeTolerance"),
            "atol": simControlReader.getFloat("TimeStepAdaptation.absoluteTolerance"),
        }

        return RigidBody(
            RigidBodyState(twist, pose),
            inertia,
            forqueFunc=forqueFunc,
            integrationMethod=simControlReader.getString("timeDiscretization"),
            renormalizePose=simControlReader.getBool("renormalizePose"),
            eulerStepCount=simControlReader.getInt("Euler.stepCount"),
            solverOptions=solverOptions
        )

    def _readInertia(self, rigidBodyReader):
        ''' RigidBody.inertia (6 values), if present, overrides RigidBody.MOI and RigidBody.mass '''
        inertia = rigidBodyReader.tryGetLine("inertia")

        if inertia is None:
            Ixx, Iyy, Izz = [ float(x) for x in rigidBodyReader.getString("MOI").strip("()").split() ]
            inertia = principalInertia(Ixx, Iyy, Izz, rigidBodyReader.getFloat("mass"))

        checkInertia(inertia)
        return inertia

    def _setUpConsoleLogging(self):
        if self.loggingLevel > 0:
            # Set up logging so that the output of any print calls after this point is captured in consoleOutputLog
            self.consoleOutputLog = []
            self.logger = Logging.Logger(self.consoleOutputLog, continueWritingToTerminal=not self.silent)
            sys.stdout = self.logger

            # Output system info to console and to log
            Logging.getSystemInfo(printToConsole=True)
            # Output sim definition file and default value dict to the log only
            self.consoleOutputLog += Logging.getSimDefinitionAndDefaultValueDictsForOutput(simDefinition=self.simDefinition, printToConsole=False)

            print("Starting Simulation:")

        elif self.silent:
            # No intention of writing things to a log file, just prevent them from being printed to the terminal
            self.logger = Logging.Logger([], continueWritingToTerminal=False)
            sys.stdout = self.logger

    def _removeConsoleLogging(self):
        if self.logger is not None:
            Logging.removeLogger()
            self.logger = None

    #### Main loop ####
    def run(self, rigidBody=None):
        '''
            Runs simulation defined by self.simDefinition (which has parsed a simulation definition file)
            Steps of SimControl.timeStep are taken until SimControl.endTime, the last one is shortened to end exactly at SimControl.endTime

            Returns:
                * flight: (`PGARB.IO.RigidBodyFlight`) States at each time step
                * logFilePaths: (list[string]) list of paths to all log files created by this simulation, None if logging is off
        '''
        if rigidBody is None:
            rigidBody = self.createRigidBody()

        progressBar = None
        self._setUpConsoleLogging()

        try:
            simControlReader = SubDictReader("SimControl", self.simDefinition)
            dt = simControlReader.getFloat("timeStep")
            endTime = simControlReader.getFloat("endTime")
            endTimeTolerance = 1e-12 * max(1.0, abs(endTime))

            flight = RigidBodyFlight()
            flight.appendState(rigidBody.time, rigidBody.state)

            if self.loggingLevel >= 2:
                print("Time(s)" + rigidBody.state.getLogHeader())

            if not self.silent:
                progressBar = tqdm(total=endTime - rigidBody.time, file=sys.__stdout__)
                if self.logger is not None:
                    self.logger.continueWritingToTerminal = False

            try:
                while endTime - rigidBody.time > endTimeTolerance:
                    stepSize = min(dt, endTime - rigidBody.time)
                    rigidBody.timeStep(stepSize)
                    flight.appendState(rigidBody.time, rigidBody.state)

                    if self.loggingLevel >= 2:
                        print("{:>10.4f}{}".format(rigidBody.time, rigidBody.state))

                    if progressBar is not None:
                        progressBar.update(stepSize)

            except SolverConvergenceError as e:
                self._closeProgressBar(progressBar)
                progressBar = None
                print("ERROR: {}".format(e))
                print("Attempting to save log files")
                self._postProcess(flight, plot=False)
                raise

            self._closeProgressBar(progressBar)
            progressBar = None
            print("Simulation Complete")

            logFilePaths = self._postProcess(flight)

        finally:
            # Also runs on errors: restores sys.stdout
            self._closeProgressBar(progressBar)
            self._removeConsoleLogging()

        return flight, logFilePaths

    def _closeProgressBar(self, progressBar):
        if progressBar is not None:
            progressBar.close()

            if self.logger is not None and not self.silent:
                self.logger.continueWritingToTerminal = True

    #### Post-sim ####
    def _postProcess(self, flight, plot=True):
        self.simDefinition.printDefaultValuesUsed() # Print these out before logging, to include them in the log

        logFilePaths = self._logSimulationResults(flight)

        if plot:
            self._plotSimulationResults(flight)

        # Printed after plotting so the plot key counts as used
        self.simDefinition.printUnusedKeys()

        return logFilePaths

    def _createResultsFolder(self):
        fileName = self.simDefinition.fileName if self.simDefinition.fileName is not None else "PGARB"
        periodIndex = fileName.rfind('.')
        resultsFolderBaseName = (fileName[:periodIndex] if periodIndex > 0 else fileName) + "_Run"

        for _ in range(50):
            resultsFolderName = Logging.findNextAvailableNumberedFileName(fileBaseName=resultsFolderBaseName, extension="")
            try:
                os.mkdir(resultsFolderName)
                return resultsFolderName
            except FileExistsError:
                # Another process created the same results folder between the two calls above
                continue

        raise ValueError("Repeated error (50x): unable to create a results folder: {}.".format(resultsFolderBaseName))

    def _logSimulationResults(self, flight):
        ''' Logs simulation results to file (as/if specified in sim definition) '''
        if self.loggingLevel <= 0:
            return None

        resultsFolder = self._createResultsFolder()

        rigidBodyLogPath = os.path.join(resultsFolder, "rigidBodyLog.txt")
        print("Writing log file: {}".format(rigidBodyLogPath))
        flight.writeToFile(rigidBodyLogPath)

        consoleOutputPath = os.path.join(resultsFolder, "consoleOutput.txt")
        print("Writing log file: {}".format(consoleOutputPath))
        self.logger.writeLogToFile(consoleOutputPath, overwrite=True)

        return [ rigidBodyLogPath, consoleOutputPath ]

    def _plotSimulationResults(self, flight):
        ''' Plot simulation results (as/if specified in sim definition) '''
        plotsToMake = self.simDefinition.getValue("SimControl.plot")

        if plotsToMake.split() != [ "None" ]:
            print("Plotting: {}".format(plotsToMake))
            Plotting.plotFlight(flight, plotsToMake, showPlot=not self.silent)
