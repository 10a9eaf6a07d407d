'''
Functions to create plots of simulation results.
'''

import re

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from PGARB.IO.rigidBodyFlight import RigidBodyFlight

__all__ = [ "plotFlight", "plotFromLogFile", "getLoggedColumns" ]

### Plot data from a RigidBodyFlight ###
def plotFlight(flight: RigidBodyFlight, plotDefinitionString="Twist Pose PoseNorm", showPlot=True):
    '''
        plotDefinitionString:   space-separated list of any of: "Twist", "Pose", "PoseNorm"
        Returns a list of the figures created
    '''
    figures = []
    times = flight.times
    initState = flight.rigidBodyStates[0]

    for plotName in plotDefinitionString.split():
        fig, ax = plt.subplots(figsize=(6,4))

        if plotName == "Twist":
            _plotColumns(ax, times, flight.getTwistHistory(), initState.twist.getLogHeader("Twist").split())
        elif plotName == "Pose":
            _plotColumns(ax, times, flight.getPoseHistory(), initState.pose.getLogHeader("Pose").split())
        elif plotName == "PoseNorm":
            ax.plot(times, flight.getPoseNorms(), label="PoseNorm")
            ax.legend()
        else:
            plt.close(fig)
            raise ValueError("Plot: {} not implemented. Options are: Twist, Pose, PoseNorm".format(plotName))

        ax.set_xlabel("Time(s)")
        ax.set_title(plotName)
        figures.append(fig)

    if showPlot:
        plt.show()

    return figures

def _plotColumns(ax, times, history, names):
    for i in range(len(names)):
        ax.plot(times, history[:,i], label=names[i])
    ax.legend()

### Plot data from log files ###
def plotFromLogFile(logPath, columnSpecs, showPlot=True):
    '''
        Plots any columns in the log file at logPath whose names a) contain any of the strings in columnSpecs, or b) match the regex defined by any of the strings in columnSpecs vs. time
        Multiple column specs can be combined in a single string with '&': "Twist_e12&PoseNorm"

        Returns the list of column names plotted
    '''
    if isinstance(columnSpecs, str):
        columnSpecs = columnSpecs.split('&')

    data, names = getLoggedColumns(logPath, list(columnSpecs) + [ "Time(s)" ])

    timeIndex = names.index("Time(s)")
    names.pop(timeIndex)
    x = data.pop(timeIndex)

    if len(names) == 0:
        print("ERROR: no column names containing {} were found in the log file {}".format(columnSpecs, logPath))
        return names

    fig, ax = plt.subplots(figsize=(6,4))
    for i in range(len(names)):
        ax.plot(x, data[i], label=names[i])

    ax.set_xlabel("Time(s)")
    ax.autoscale()
    ax.legend()

    if showPlot:
        plt.show()

    return names

def getLoggedColumns(logPath, columnSpecs, columnsToExclude=[], sep=r"\s+"):
    '''
        Inputs:
            logPath:            (string) path to a rigidBodyLog file
            columnSpecs:        (list (string)) list of partial/full column names and/or regex expressions, to identify the desired columns
            columnsToExclude:   (list (string)) list of full column names to exclude
            sep:                (string) controls the separator pandas.read_csv uses to load the file (whitespace for PGARB's log files, "," for .csv)

        Outputs:
            Returns: matchingColumnData (list (list (float))), matchingColumnNames (list (string))
    '''
    # Make sure columnSpecs is a list of strings - otherwise we will iterate over every character in the string and match everything
    if isinstance(columnSpecs, str):
        columnSpecs = [ columnSpecs ]

    df = pd.read_csv(logPath, sep=sep, dtype=np.float64)

    matchingColumnData = []
    matchingColumnNames = []

    for columnSpec in columnSpecs:
        for colName in df.columns:
            alreadyFound = colName in matchingColumnNames or colName in columnsToExclude
            if not alreadyFound and (columnSpec in colName or re.match(columnSpec, colName)):
                matchingColumnData.append(list(df[colName]))
                matchingColumnNames.append(colName)

    return matchingColumnData, matchingColumnNames
