"""
Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
This is the main entry point for other modules to import error, event
and view definitions.
"""

# Error models and exceptions
from .errors import (
    EXCEPTIONS_BY_CODE,
    AccessControlError,
    AlreadyActiveError,
    AmountMismatchError,
    ClaimError,
    ConfigurationError,
    ErrorCodes,
    InsufficientAllowanceError,
    InsufficientBalanceError,
    InvalidAmountError,
    InvalidDurationError,
    InvalidOperatorError,
    InvalidProofError,
    InvalidRootError,
    InvalidTimeError,
    InvalidTokenError,
    InvalidTotalAmountError,
    NativeNotAcceptedError,
    NativeSendFailedError,
    NoRootError,
    NoTokensError,
    OnlyOperatorError,
    OnlyOwnerError,
    ReentrantCallError,
    RevertedError,
    StartNotSetError,
    TooEarlyError,
    TooLateError,
    TransferError,
    TransferFailedError,
    UnexpectedNativeError,
    UnknownContractError,
    VaultAlreadyExistsError,
    VaultError,
    VaultException,
)

# Events
from .events import (
    Approval,
    ChainEvent,
    Claimed,
    LogEntry,
    RootUpdated,
    Transfer,
    VaultCreated,
    WindowConfigured,
    Withdrawn,
)

# Vault views
from .vault import (
    ClaimReceipt,
    VaultPhase,
    VaultSnapshot,
)

__all__ = [
    # Errors
    "EXCEPTIONS_BY_CODE",
    "AccessControlError",
    "AlreadyActiveError",
    "AmountMismatchError",
    "ClaimError",
    "ConfigurationError",
    "ErrorCodes",
    "InsufficientAllowanceError",
    "InsufficientBalanceError",
    "InvalidAmountError",
    "InvalidDurationError",
    "InvalidOperatorError",
    "InvalidProofError",
    "InvalidRootError",
    "InvalidTimeError",
    "InvalidTokenError",
    "InvalidTotalAmountError",
    "NativeNotAcceptedError",
    "NativeSendFailedError",
    "NoRootError",
    "NoTokensError",
    "OnlyOperatorError",
    "OnlyOwnerError",
    "ReentrantCallError",
    "RevertedError",
    "StartNotSetError",
    "TooEarlyError",
    "TooLateError",
    "TransferError",
    "TransferFailedError",
    "UnexpectedNativeError",
    "UnknownContractError",
    "VaultAlreadyExistsError",
    "VaultError",
    "VaultException",
    # Events
    "Approval",
    "ChainEvent",
    "Claimed",
    "LogEntry",
    "RootUpdated",
    "Transfer",
    "VaultCreated",
    "WindowConfigured",
    "Withdrawn",
    # Vault views
    "ClaimReceipt",
    "VaultPhase",
    "VaultSnapshot",
]
