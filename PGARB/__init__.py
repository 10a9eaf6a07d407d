'''
PGARB: rigid body motion simulation using projective geometric algebra.

Simulation entry point: `PGARB.Main.main`.
`PGARB.Main.main` will initialize one of the classes in `PGARB.SimulationRunners` to drive the simulation.
The simulation runner creates a `PGARB.Motion.RigidBody` from a simulation definition file and advances it in time.

See README.md for info about installation and running simulations.
See `PGARB/Examples/Simulations/TumblingBody.pgarb` for an example simulation definition file.
'''

__version__ = "0.1.0"

__pdoc__ = {
    'Examples': False
}
