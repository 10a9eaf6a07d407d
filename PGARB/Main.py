'''
Script to run rigid body simulations from the command line
If PGARB has been installed with pip, this script is accessible through the 'pgarb' command
'''

import argparse
import os
import time
from pathlib import Path

import PGARB.IO.Logging as Logging
import PGARB.IO.Plotting as Plotting
from PGARB.IO import SimDefinition
from PGARB.SimulationRunners import ConvergenceSimRunner, Simulation


def buildParser() -> argparse.ArgumentParser:
    ''' Builds the command-line argument parser using argparse '''
    parser = argparse.ArgumentParser(formatter_class=argparse.RawTextHelpFormatter, description="""
    Run individual PGARB rigid body simulations.
    Expects simulations to be defined by simulation definition files like those in ./PGARB/Examples/Simulations
    """)

    mutexGroup = parser.add_mutually_exclusive_group()
    mutexGroup.add_argument(
        "--compareStepSplitting",
        action='store_true',
        help="Integrates one time step of the current simulation in one piece and in two halves, and prints the difference"
    )
    mutexGroup.add_argument(
        "--convergeEuler",
        action='store_true',
        help="Integrates one time step of the current simulation with Euler's method, using successively larger step counts, and compares to an adaptive reference solution"
    )
    mutexGroup.add_argument(
        "--plotFromLog",
        nargs=2,
        default=[],
        metavar=("plotDefinition", "pathToLogFile"),
        help="plotDefinition is a column name (or part of one). Combine several with '&': Twist_e12&PoseNorm"
    )

    parser.add_argument(
        "--silent",
        action='store_true',
        help="If present, does not output to console"
    )
    parser.add_argument(
        "simDefinitionFile",
        nargs='?',
        default="TumblingBody.pgarb",
        help="Path to a simulation definition (.pgarb) file. Not required if using --plotFromLog"
    )

    return parser

def findSimDefinitionFile(providedPath):
    ''' Returns a path to an existing simulation definition file, or None if one can't be found '''
    if os.path.isfile(providedPath):
        return providedPath

    # Also check the example cases
    installationLocation = Path(__file__).parent.parent
    alternateLocation = installationLocation / "PGARB/Examples/Simulations/"

    possibleRelativePaths = [ providedPath ]
    if not providedPath.endswith(".pgarb"):
        # If it's just the case name (ex: 'TumblingBody') try also adding the file extension
        possibleRelativePaths.append(providedPath + ".pgarb")

    for path in possibleRelativePaths:
        absPath = alternateLocation / path
        if absPath.is_file():
            return str(absPath)

    print("ERROR: Unable to locate simulation definition file: {}! Checked whether the path was relative to the current command line location or one of the example cases. To be sure that your file will be found, try using an absolute path.".format(providedPath))
    return None

def main(argv=None) -> int:
    '''
        Main function to run a PGARB simulation.
        Expects to be called from the command line, usually using the `pgarb` command

        For testing purposes, can also pass a list of command line arguments into the argv parameter
    '''
    startTime = time.time()

    parser = buildParser()
    args = parser.parse_args(argv)

    if len(args.plotFromLog):
        # Just plot a column from a log file, and not run a whole simulation
        Plotting.plotFromLogFile(args.plotFromLog[1], args.plotFromLog[0])
        print("Exiting")
        return 0

    simDefPath = findSimDefinitionFile(args.simDefinitionFile)
    if simDefPath is None:
        return 1
    simDef = SimDefinition(simDefPath, silent=args.silent)

    if args.compareStepSplitting or args.convergeEuler:
        cSimRunner = ConvergenceSimRunner(simDefinition=simDef, silent=args.silent)
        if args.compareStepSplitting:
            cSimRunner.compareStepSplitting()
        else:
            cSimRunner.convergeEulerStepCount()

    else:
        sim = Simulation(simDefinition=simDef, silent=args.silent)
        sim.run()

    Logging.removeLogger()

    if not args.silent:
        print("Run time: {:1.2f} seconds".format(time.time() - startTime))
        print("Exiting")

    return 0

if __name__ == "__main__":
    main()
