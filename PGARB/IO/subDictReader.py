'''
    Wrapper class to read from a specific sub-dictionary in a SimDefinition.
'''

from typing import List, Union

from PGARB.Motion import Line, Motor
from PGARB.Utilities import strtobool

__all__ = [ "SubDictReader" ]

class SubDictReader():

    def __init__(self, stringPathToThisItemsSubDictionary, simDefinition):
        '''
            Example stringPathToThisItemsSubDictionary = 'SimControl.TimeStepAdaptation' if we're reading solver tolerances
        '''
        self.simDefDictPathToReadFrom = stringPathToThisItemsSubDictionary
        self.simDefinition = simDefinition

    def getString(self, key):
        '''
            Pass in either relative key or absolute key:
                Ex 1 (Relative): If object subdictionary (self.simDefDictPathToReadFrom) is 'RigidBody', relative keys could be 'twist' or 'mass'
                    These would retrieve RigidBody.twist or RigidBody.mass from the sim definition
                Ex 2 (Absolute): Can also pass in full absolute key, like 'RigidBody.twist', and it will retrieve that value, as long as there isn't a 'path collision' with a relative path
        '''
        try:
            return self.simDefinition.getValue(self.simDefDictPathToReadFrom + "." + key)
        except KeyError:
            try:
                return self.simDefinition.getValue(key)
            except KeyError:
                attemptedKey1 = self.simDefDictPathToReadFrom + "." + key
                raise KeyError("{} and {} not found in {} or in default value dictionary".format(attemptedKey1, key, self.simDefinition.fileName))

    #### Get parsed values ####
    def getInt(self, key: str) -> int:
        return int(self.getString(key))

    def getFloat(self, key: str) -> float:
        return float(self.getString(key))

    def getBool(self, key: str) -> bool:
        return strtobool(self.getString(key))

    def getLine(self, key: str) -> Line:
        return Line(self.getString(key))

    def getMotor(self, key: str) -> Motor:
        return Motor(self.getString(key))

    #### Try get values (return specified default value if not found) ####
    def tryGetString(self, key: str, defaultValue: Union[None, str]=None):
        try:
            return self.getString(key)
        except KeyError:
            return defaultValue

    def tryGetInt(self, key: str, defaultValue: Union[None, int]=None):
        try:
            return self.getInt(key)
        except KeyError:
            return defaultValue

    def tryGetFloat(self, key: str, defaultValue: Union[None, float]=None):
        try:
            return self.getFloat(key)
        except KeyError:
            return defaultValue

    def tryGetBool(self, key: str, defaultValue: Union[None, bool]=None):
        try:
            return self.getBool(key)
        except KeyError:
            return defaultValue

    def tryGetLine(self, key: str, defaultValue: Union[None, Line]=None):
        try:
            return self.getLine(key)
        except KeyError:
            return defaultValue

    def tryGetMotor(self, key: str, defaultValue: Union[None, Motor]=None):
        try:
            return self.getMotor(key)
        except KeyError:
            return defaultValue

    #### Introspection ####
    def getImmediateSubDicts(self, key=None) -> List[str]:
        if key is None:
            key = self.simDefDictPathToReadFrom
        return self.simDefinition.getImmediateSubDicts(key)

    def getSubKeys(self, key=None) -> List[str]:
        if key is None:
            key = self.simDefDictPathToReadFrom
        return self.simDefinition.getSubKeys(key)

    def getImmediateSubKeys(self, key=None) -> List[str]:
        if key is None:
            key = self.simDefDictPathToReadFrom
        return self.simDefinition.getImmediateSubKeys(key)

    def getDictName(self) -> str:
        lastDotIndex = self.simDefDictPathToReadFrom.rfind('.')
        return self.simDefDictPathToReadFrom[lastDotIndex+1:]
