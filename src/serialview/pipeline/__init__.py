"""Pipeline driver, inbound queue, and renderer-side scroll-back."""

from .driver import StreamPipeline
from .inbound import InboundQueue
from .scrollback import Scrollback

__all__ = ["StreamPipeline", "InboundQueue", "Scrollback"]
