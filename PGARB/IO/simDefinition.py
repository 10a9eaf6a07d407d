'''
Contains a class meant to read, write and modify simulation definition (.pgarb) files, the master dictionary of
default values for simulation definitions, and a few utility functions for working with string dictionary keys
'''
import re
from datetime import datetime
from pathlib import Path
from typing import List, Tuple

__all__ = [ "defaultConfigValues", "SimDefinition", "getAbsoluteFilePath" ]

#################### Default value dictionary  #########################
defaultConfigValues = {
    "SimControl.timeDiscretization":                        "RK45Adaptive",
    "SimControl.timeStep":                                  "1",
    "SimControl.endTime":                                   "100",
    "SimControl.renormalizePose":                           "True",
    "SimControl.Euler.stepCount":                           "1000",
    "SimControl.TimeStepAdaptation.relativeTolerance":      "1e-6",
    "SimControl.TimeStepAdaptation.absoluteTolerance":      "1e-9",
    "SimControl.loggingLevel":                              "0",
    "SimControl.plot":                                      "None",

    "RigidBody.twist":                                      "(0 0 0 0 0 0)",
    "RigidBody.pose":                                       "(1 0 0 0 0 0 0 0)",
    "RigidBody.MOI":                                        "(1 1 1)",
    "RigidBody.mass":                                       "1",
    "RigidBody.forque":                                     "(0 0 0 0 0 0)",
}

simDefinitionHelpMessage = \
"""
    All non-empty, non-comment lines are expected to end in either:
    {   (dictionary start)
    }   (dictionary end)
    Or to contain a space-separated key-value pair:
    key value
"""
class SimDefinition():

    #### Parsing / Initialization ####
    def __init__(self, fileName=None, dictionary=None, silent=False, defaultDict=None):
        '''
        Parse simulation definition files into a dictionary of string values accessible by string keys.

        Inputs:
            * fileName: (str) path to simulation definition file
            * dictionary: (dict[str,str]) if not providing a fileName, provide a pre-parsed dictionary equivalent to a simulation definition file
            * silent: (bool) Console output control
            * defaultDict: (dict[str,str] provide a custom dictionary of default values. If none is provided, defaultConfigValues is used.)

        Example:
            The file contents:
                'SimControl{
                    &nbsp;&nbsp;&nbsp;&nbsp;timeDiscretization Euler
                }'
            Would be parsed into a single-key Python dictionary, stored in self.dict:
            `{ "SimControl.timeDiscretization": "Euler"}`
        '''
        self.silent = silent
        ''' Boolean, controls console output '''

        self.dict = None
        ''' Main dictionary of values, usually populated from a simulation definition file '''

        self.defaultDict = defaultDict if defaultDict is not None else defaultConfigValues
        ''' Holds all of the defined default values. These will fill in for missing values in self.dict. Unless a different dictionary is specified, will hold a reference to `defaultConfigValues` '''

        # Parse/Assign main values dictionary
        if fileName is not None:
            self._parseSimDefinitionFile(fileName)
        elif dictionary is not None:
            self.dict = dictionary
            self.fileName = fileName
        else:
            raise ValueError("No fileName or dictionary provided to initialize the SimDefinition")

        # Initialize tracking of default values used and unaccessed keys
        self._resetUsedAndUnusedKeyTrackers()

    def _parseDictionaryContents(self, workingText, startLine, currDictName) -> int:
        '''
            Parses an individual subdictionary in a simdefinition file.
            Calls itself recursively to parse further sub dictionaries.
            Saves parsed key-value pairs to self.dict

            Returns index of next line to parse
        '''
        i = startLine

        while i < len(workingText):
            line = workingText[i].strip()

            if line[-1] == '{':
                subDictName = line[:-1].strip()

                if currDictName == "":
                    i = self._parseDictionaryContents(workingText, i+1, subDictName)
                else:
                    i = self._parseDictionaryContents(workingText, i+1, currDictName + "." + subDictName)

            elif line == '}':
                return i

            elif len(line.split()) > 1:
                keyVal = line.split()
                key = keyVal[0]
                value = " ".join(keyVal[1:])
                keyString = key if currDictName == "" else currDictName + "." + key

                if keyString in self.dict:
                    raise ValueError("Duplicate Key: {} in File: {}".format(keyString, self.fileName))
                self.dict[keyString] = value

            else:
                print(simDefinitionHelpMessage)
                raise ValueError("Problem reading line {}".format(line))

            i += 1

        return i

    def _parseSimDefinitionFile(self, fileName):
        self.fileName = str(fileName)
        self.dict = {}

        with open(fileName, "r") as file:
            workingText = file.read()

        # Remove comments and blank lines
        workingText = re.sub(re.compile("#.*"), "", workingText)
        workingText = [ line for line in workingText.split('\n') if line.strip() != '' ]

        # Start recursive parse by asking to parse the root-level dictionary
        self._parseDictionaryContents(workingText, 0, "")

    #### Normal Usage ####
    def getValue(self, key: str) -> str:
        """
            Input:
                Key should be a string of format "DictionaryName.SubdictionaryName.Key"
            Output:
                Always returns a string value
                Returns value from the default dictionary if key not present in current SimDefinition's dictionary
        """
        key = key.strip()

        if key in self.dict:
            self.unaccessedFields.discard(key)
            return self.dict[key]

        elif key in self.defaultDict:
            self.defaultValuesUsed.add(key)
            return self.defaultDict[key]

        raise KeyError("Key: " + key + " not found in {} or default config values".format(self.fileName))

    def setValue(self, key: str, value) -> None:
        ''' Will add the entry if it's not present '''
        self.dict[key.strip()] = value

    def removeKey(self, key: str):
        if key in self.dict:
            self.unaccessedFields.discard(key)
            return self.dict.pop(key)
        else:
            print("Warning: " + key + " not found, can't delete")
            return None

    def setIfAbsent(self, key: str, value):
        ''' Sets a value, only if it doesn't currently exist in the dictionary '''
        if key not in self.dict:
            self.setValue(key, value)

    def writeToFile(self, fileName: str, writeHeader=True) -> None:
        '''
            Write a (potentially modified) sim definition to file.
            Newly written file will not contain any comments!
        '''
        self.fileName = str(fileName)

        with open(fileName, 'w') as file:
            if writeHeader:
                file.write("# PGARB\n")
                file.write("# File: {}\n".format(fileName))
                file.write("# Autowritten on: " + str(datetime.now()) + "\n")

            # Sorting the keys ensures that dictionaries will be written together
            currDicts = []
            for key in sorted(self.dict.keys()):
                dicts = key.split('.')[:-1]

                if dicts != currDicts:
                    # Close dictionaries that don't contain this key
                    dictDepth = len(currDicts)
                    while dictDepth > 0:
                        if dictDepth > len(dicts) or currDicts[dictDepth-1] != dicts[dictDepth-1]:
                            file.write("\t"*(dictDepth-1) + "}\n")
                        else:
                            break
                        dictDepth -= 1

                    # Open the ones that do
                    openedNewDict = False
                    while dictDepth < len(dicts):
                        file.write("\n" + "\t"*dictDepth + dicts[dictDepth] + "{\n")
                        dictDepth += 1
                        openedNewDict = True

                    if not openedNewDict:
                        file.write("\n")

                    currDicts = dicts

                dictDepth = len(currDicts)
                realKey = key.split('.')[-1]
                file.write("\t"*dictDepth + realKey + "\t" + str(self.dict[key]) + "\n")

            # Close any open dictionaries
            dictDepth = len(currDicts)
            while dictDepth > 0:
                dictDepth -= 1
                file.write("\t"*dictDepth + "}\n")

    #### Introspection / Key Gymnastics ####
    def findKeysContaining(self, keyContains: List[str]) -> List[str]:
        '''
            Returns a list of all keys that contain all of the strings in keyContains, or None if there aren't any

            ## Example
                findKeysContaining(["Tolerance"]) ->
                [ "SimControl.TimeStepAdaptation.relativeTolerance", "SimControl.TimeStepAdaptation.absoluteTolerance" ]
        '''
        matchingKeys = [ key for key in self.dict.keys() if all(subString in key for subString in keyContains) ]

        if len(matchingKeys) > 0:
            return matchingKeys
        else:
            return None

    def getSubKeys(self, key: str) -> List[str]:
        '''
            Returns a list of all keys that are children of key

            ## Example
                getSubKeys("SimControl") ->
                [ "SimControl.timeStep", "SimControl.TimeStepAdaptation.relativeTolerance", etc... ]
        '''
        return [ currentKey for currentKey in self.dict.keys() if isSubKey(key, currentKey) ]

    def getImmediateSubKeys(self, key: str) -> List[str]:
        """
            Returns all keys that are immediate children of the parentKey (one 'level' lower)

            .. note:: Will also return the names of subdictionaries, since they are one level down too. Use self.getImmediateSubDicts() to only get sub-dictionaries

            ## Example:
                getImmediateSubKeys("RigidBody") ->
                [ "RigidBody.twist", "RigidBody.pose", etc...]
        """
        results = set()
        for potentialChildKey in self.dict.keys():
            if isSubKey(key, potentialChildKey):
                results.add(getImmediateSubKey(key, potentialChildKey))

        return list(results)

    def getImmediateSubDicts(self, key: str) -> List[str]:
        '''
            Returns list of names of immediate subdictionaries

            ## Example
                getImmediateSubDicts("SimControl") ->
                [ "SimControl.TimeStepAdaptation", "SimControl.Euler" ]
        '''
        keyLevel = getKeyLevel(key)

        subDictionaries = set()
        for subKey in self.getSubKeys(key):
            if getKeyLevel(subKey) - keyLevel > 1:
                # A subkey of a subdictionary is at least 2 levels down
                subDictionaries.add(getParentKeyAtLevel(subKey, keyLevel+1))

        return list(subDictionaries)

    #### Usage Reporting ####
    def printUnusedKeys(self):
        '''
            Checks which keys in the present simulation definition have not yet been accessed.
            Prints a list of those to the console.
        '''
        if len(self.unaccessedFields) > 0:
            print("\nWarning: The following keys were loaded from: {} but never accessed:".format(self.fileName))
            for key in sorted(self.unaccessedFields):
                print("{:<50}{}".format(key+":", self.dict[key]))
            print("")

    def printDefaultValuesUsed(self):
        ''' Checks which default values have been used since the creation of the current instance of SimDefinition. Prints those to the console. '''
        if len(self.defaultValuesUsed):
            print("\nWarning: The following default values were used in this simulation:")
            for key in sorted(self.defaultValuesUsed):
                print("{:<50}{}".format(key+":", self.defaultDict[key]))
            print("\nIf this was not intended, override the default values by adding the above information to your simulation definition file.\n")

    def _resetUsedAndUnusedKeyTrackers(self):
        self.unaccessedFields = set(self.dict.keys())
        self.defaultValuesUsed = set()

    #### Utilities ####
    def __str__(self):
        result = "File: {}\n".format(self.fileName)

        for key, value in self.dict.items():
            result += "{}: {}\n".format(key, value)

        return result + "\n"

    def __eq__(self, simDef2):
        try:
            return self.dict == simDef2.dict
        except AttributeError:
            return False

################### Functions for dealing with string keys ########################
def isSubKey(potentialParent: str, potentialChild: str) -> bool:
    """
        ## Example
        `isSubKey("RigidBody", "RigidBody.twist")` -> True
        `isSubKey("SimControl", "RigidBody.twist")` -> False
    """
    return len(potentialChild) > len(potentialParent) and potentialChild.startswith(potentialParent + ".")

def getKeyLevel(key: str) -> int:
    """
        Sums the number of dots in the key
        ## Example
            getKeyLevel("SimControl") -> 0
            getKeyLevel("SimControl.timeStep") -> 1
    """
    if len(key) == 0:
        return -1
    else:
        return len(key.split('.'))-1

def getParentKeyAtLevel(key: str, desiredLevel: int) -> str:
    """
        >>> getParentKeyAtLevel('SimControl.TimeStepAdaptation.relativeTolerance', 0)
        'SimControl'
        >>> getParentKeyAtLevel('SimControl.TimeStepAdaptation.relativeTolerance', 1)
        'SimControl.TimeStepAdaptation'
    """
    return '.'.join(key.split('.')[0:desiredLevel+1])

def getImmediateSubKey(parent, child):
    """
        Takes the parent key, adds one level of the child key:

        ## Example
        >>> getImmediateSubKey('SimControl', 'SimControl.Euler.stepCount')
        'SimControl.Euler'
    """
    if not isSubKey(parent, child):
        raise ValueError("{} is not a subkey of {}".format(child, parent))

    parentKeyPlusOneLevel, _ = splitKeyAtLevel(child, getKeyLevel(parent)+1)
    return parentKeyPlusOneLevel

def splitKeyAtLevel(key: str, prefixLevel: int) -> Tuple[str, str]:
    '''
        0 <= level <= getKeyLevel(key)
        ### Example
        >>> splitKeyAtLevel("RigidBody", 0)
        ('RigidBody', '')
        >>> splitKeyAtLevel("SimControl.Euler.stepCount", 1)
        ('SimControl.Euler', 'stepCount')
    '''
    n = prefixLevel + 1
    keyNames = key.split('.')
    return ".".join(keyNames[:n]), ".".join(keyNames[n:])

def getAbsoluteFilePath(relativePath: str) -> str:
    '''
        Takes a path defined relative to the PGARB repository and tries to return an absolute path for the current installation.
        Returns original relativePath if an absolute path is not found
    '''
    # This file is at PGARB/IO/simDefinition.py, so the install directory is three levels up
    pathToInstallation = Path(__file__).parent.parent.parent
    absolutePath = pathToInstallation / Path(relativePath)

    if absolutePath.exists():
        return str(absolutePath)
    else:
        return relativePath
