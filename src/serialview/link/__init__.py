"""Byte producers feeding the render thread."""

from .reader import ReplayReader, SerialReader, list_serial_ports

__all__ = ["SerialReader", "ReplayReader", "list_serial_ports"]
