"""
=============================================================================
CORE RESOURCES
=============================================================================

Low-level building blocks that own operating-system resources.

Right now that is a single component, ByteStream, which wraps an open
handle and is used as the body of every message. Unlike the value types
in httpmessage.http, a ByteStream is mutable and shared by reference.

=============================================================================
"""

from .stream import ByteStream, MEMORY, TEMP

__all__ = [
    "ByteStream",   # Handle wrapper used for message bodies
    "MEMORY",       # "memory:" locator - in-memory buffer
    "TEMP",         # "temp:" locator - anonymous temporary file
]
