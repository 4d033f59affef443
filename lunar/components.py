from dataclasses import dataclass


@dataclass(frozen=True)
class Controls:
    """Per-tick control input: rotation keys and the main thruster."""
    left: bool = False
    right: bool = False
    thrust: bool = False


NO_CONTROLS = Controls()
