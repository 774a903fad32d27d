"""Serial terminal viewer built on a streaming ANSI/control-character pipeline."""

__all__ = [
    "adapters",
    "config",
    "link",
    "parsers",
    "pipeline",
    "runtime",
    "text",
]

__version__ = "0.1.0"
