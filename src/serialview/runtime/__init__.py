"""Runtime services (logging, profiling) shared by the viewer."""

from . import telemetry

__all__ = ["telemetry"]
