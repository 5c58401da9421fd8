from __future__ import annotations


class OcptvError(RuntimeError):
    """Base error"""


class EmitError(OcptvError):
    """
    An artifact could not be emitted. The sequence number was not consumed.
    """


class SerializationFailure(EmitError):
    """
    The artifact could not be encoded to the wire format.
    Indicates a builder invariant violation.
    """


class SinkWriteFailure(EmitError):
    """The output sink rejected or failed the write (I/O error, closed resource)"""


class LifecycleError(OcptvError):
    """An operation was attempted on a run, step or series that already ended"""
