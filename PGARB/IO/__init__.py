'''
Input/Output functionality:

* Reading/Writing Simulation Definition Files
* Plotting/Logging results

PGARB.IO Relies on PGARB.Motion to implement a few convenience / parsing functions.
'''
# Make the classes in all submodules importable directly from PGARB.IO
from .rigidBodyFlight import *
from .simDefinition import *
from .subDictReader import *

subModules = [ rigidBodyFlight, simDefinition, subDictReader ]

__all__ = []

for subModule in subModules:
    __all__ += subModule.__all__
