"""Top-level package for the ping / traceroute transcript simulator.

The simulation engine lives in `pingsim.simulator`; `pingsim.utils` holds the
settings file helpers shared by the CLI and tests.
"""

__version__ = "0.1.0"

__all__ = [
    "simulator",
    "__version__",
]
