'''
Rigid body motion in projective geometric algebra (PGA). Main class is `PGARB.Motion.RigidBodies.RigidBody`.
Fundamental data types used throughout the package are defined in `PGA`:

* `Line` - twists, momenta, forques and inertias (6 coefficients)
* `Motor` - poses (8 coefficients)

The mapping between twists and momenta is defined in `inertia`, the equations of motion in `Derivatives`.
Rigid body states are defined in `RigidBodyStates`.

Fixed-step (Euler) and adaptive (scipy) time stepping integrators are defined in `Integration`
'''
# Make the classes in all submodules importable directly from PGARB.Motion
from .PGA import *
from .inertia import *
from .Derivatives import *
from .Integration import *
from .RigidBodyStates import *
from .RigidBodies import *

subModules = [ PGA, inertia, Derivatives, Integration, RigidBodyStates, RigidBodies ]

__all__ = []

for subModule in subModules:
    __all__ += subModule.__all__
