from __future__ import annotations


class ContractsError(RuntimeError):
    """Base error for contracts package failures"""


class ContractsResourceError(ContractsError):
    """
    A required contract resource file cannot be located or read.
    Signals a broken install, not a missing user path.
    """


class RecordValidationError(ContractsError):
    """An output record did not validate against the shipped JSON schema"""
