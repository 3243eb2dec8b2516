"""Interface definitions for simulator components"""

from .presentation_sink import IPresentationSink, SinkRelay

__all__ = [
    'IPresentationSink',
    'SinkRelay',
]
