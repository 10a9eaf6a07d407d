'''
Defines classes that manage simulations.
`Simulation` runs a single simulation, `ConvergenceSimRunner` compares the results of different ways of integrating the same time step.
'''

# Make the classes in all submodules importable directly from PGARB.SimulationRunners
from .SingleSimulations import *
from .Convergence import *

subModules = [ SingleSimulations, Convergence ]

__all__ = [ ]

for subModule in subModules:
    __all__ += subModule.__all__
