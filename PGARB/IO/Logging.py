'''
Classes and functions for capturing console output and creating simulation logs
'''

import os
import sys
from datetime import datetime
from platform import platform
from pprint import pformat
from subprocess import DEVNULL, CalledProcessError, check_output

__all__ = [ "Logger", "removeLogger", "findNextAvailableNumberedFileName", "getSystemInfo", "getSimDefinitionAndDefaultValueDictsForOutput" ]

class Logger():
    '''
        Class intended to capture calls to print() and copy their contents to a list of strings, while still (optionally) printing them to the console

        Ex:
            logger = Logger(stringResultList)
            sys.stdout = logger

        Now anything passed into print() will be printed to the console and stored in stringResultList
    '''

    def __init__(self, stringListToCopyTo, continueWritingToTerminal=True):
        self.terminal = sys.__stdout__
        self.log = stringListToCopyTo
        self.continueWritingToTerminal = continueWritingToTerminal

    def write(self, msg):
        if self.continueWritingToTerminal:
            self.terminal.write(msg)
        self.log.append(msg)

    def flush(self):
        self.terminal.flush()

    def writeLogToFile(self, filePath, overwrite=False):
        if overwrite or not os.path.exists(filePath):
            with open(filePath, 'w+') as file:
                file.writelines(self.log)

def removeLogger():
    sys.stdout = sys.__stdout__

def findNextAvailableNumberedFileName(fileBaseName="simLog", extension=".txt"):
    '''
        If fileBaseName is simLog, returns the first of: simLog1, simLog2, simLog3, etc... that isn't already a file/folder.
        Returns a string of the form fileBaseName + Number + extension
    '''
    fileNumber = 0
    filePath = None
    while filePath is None or os.path.exists(filePath):
        fileNumber += 1
        filePath = fileBaseName + str(fileNumber) + extension

    return filePath

def getSystemInfo(printToConsole=False):
    ''' Returns string array containing info about git status, machine type, date, etc... '''
    result = []

    try:
        currentCommit = check_output(['git', 'rev-parse', 'HEAD'], stderr=DEVNULL).decode().strip()
        currentBranch = check_output(['git', 'rev-parse', '--abbrev-ref', 'HEAD'], stderr=DEVNULL).decode().strip()
        result.append("# PGARB, branch: {}, latest commit: {}".format(currentBranch, currentCommit))
    except (CalledProcessError, OSError):
        result.append("# Could not obtain current branch/commit info from git")

    now = datetime.now().strftime("%d/%m/%Y %H:%M:%S")
    result.append("# {}".format(now))
    result.append("# OS: {}".format(platform()))

    if printToConsole:
        for line in result:
            print(line)

    return result

def getSimDefinitionAndDefaultValueDictsForOutput(simDefinition, printToConsole=True):
    ''' Returns a string array '''
    from PGARB.IO.simDefinition import defaultConfigValues

    stringResultArray = [ "# Using sim definition file: {}\n".format(simDefinition.fileName) ]

    stringResultArray.append("\n---- Start Sim Definition File ----\n")
    stringResultArray.append(str(simDefinition))
    stringResultArray.append("\n---- End Sim Definition File ----\n\n")

    stringResultArray.append("\n---- Start Default Value Dictionary ----\n")
    stringResultArray.append(pformat(defaultConfigValues))
    stringResultArray.append("\n---- End Default Value Dictionary ----\n\n")

    if printToConsole:
        for line in stringResultArray:
            print(line)

    return stringResultArray
