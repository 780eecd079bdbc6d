"""
Error Taxonomy
File: errors.py

Purpose: Closed error taxonomy for vaults, the factory and the ledger model.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Every failure is signaled by kind: callers match on the exception class or
on its stable ``code``, never on the message text.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Access control
    ONLY_OPERATOR = "ONLY_OPERATOR"
    ONLY_OWNER = "ONLY_OWNER"

    # Configuration validity
    INVALID_TOKEN = "INVALID_TOKEN"
    INVALID_OPERATOR = "INVALID_OPERATOR"
    INVALID_TOTAL_AMOUNT = "INVALID_TOTAL_AMOUNT"
    INVALID_ROOT = "INVALID_ROOT"
    INVALID_DURATION = "INVALID_DURATION"
    INVALID_TIME = "INVALID_TIME"
    ALREADY_ACTIVE = "ALREADY_ACTIVE"
    AMOUNT_MISMATCH = "AMOUNT_MISMATCH"
    UNEXPECTED_NATIVE = "UNEXPECTED_NATIVE"
    VAULT_ALREADY_EXISTS = "VAULT_ALREADY_EXISTS"

    # Claim-time validity
    START_NOT_SET = "START_NOT_SET"
    TOO_EARLY = "TOO_EARLY"
    TOO_LATE = "TOO_LATE"
    NO_ROOT = "NO_ROOT"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    INVALID_PROOF = "INVALID_PROOF"

    # Transfers
    TRANSFER_FAILED = "TRANSFER_FAILED"
    NATIVE_SEND_FAILED = "NATIVE_SEND_FAILED"
    NATIVE_NOT_ACCEPTED = "NATIVE_NOT_ACCEPTED"

    # Resources
    NO_TOKENS = "NO_TOKENS"

    # Reentrancy guard
    REENTRANT_CALL = "REENTRANT_CALL"

    # Ledger model
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"
    INSUFFICIENT_ALLOWANCE = "INSUFFICIENT_ALLOWANCE"
    UNKNOWN_CONTRACT = "UNKNOWN_CONTRACT"
    REVERTED = "REVERTED"


# =============================================================================
# Pydantic Error Model (Structured Communication)
# =============================================================================

class VaultError(BaseModel):
    """
    Error model for structured error communication.

    Used by the API and CLI to serialize a failed call without
    losing its machine-readable kind.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INVALID_PROOF],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    category: str = Field(
        default="platform",
        description="Taxonomy group the error belongs to",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether resubmitting the same call may succeed later",
    )

    def to_exception(self) -> "VaultException":
        """Convert this error model back into the matching exception."""
        cls = EXCEPTIONS_BY_CODE.get(self.code, VaultException)
        exc = cls(self.message, details=self.details)
        exc.retryable = self.retryable
        return exc


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class VaultException(Exception):
    """
    Base exception for every failed call.

    Raising any subclass out of an external call reverts all state
    mutated during that call.
    """

    code: str = ErrorCodes.REVERTED
    category: str = "platform"
    default_message: str = "Call reverted"
    retryable: bool = False

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)
        self.details = details or {}

    def to_error_model(self) -> VaultError:
        """Convert this exception to a VaultError model."""
        return VaultError(
            code=self.code,
            message=self.message,
            category=self.category,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


# --- Access control ---------------------------------------------------------

class AccessControlError(VaultException):
    category = "access"


class OnlyOperatorError(AccessControlError):
    code = ErrorCodes.ONLY_OPERATOR
    default_message = "Caller is not the operator"


class OnlyOwnerError(AccessControlError):
    code = ErrorCodes.ONLY_OWNER
    default_message = "Caller is not the owner"


# --- Configuration validity -------------------------------------------------

class ConfigurationError(VaultException):
    category = "config"


class InvalidTokenError(ConfigurationError):
    code = ErrorCodes.INVALID_TOKEN
    default_message = "Asset must not be the zero address"


class InvalidOperatorError(ConfigurationError):
    code = ErrorCodes.INVALID_OPERATOR
    default_message = "Operator must not be the zero address"


class InvalidTotalAmountError(ConfigurationError):
    code = ErrorCodes.INVALID_TOTAL_AMOUNT
    default_message = "Total amount must be positive"


class InvalidRootError(ConfigurationError):
    code = ErrorCodes.INVALID_ROOT
    default_message = "Root must not be zero"


class InvalidDurationError(ConfigurationError):
    code = ErrorCodes.INVALID_DURATION
    default_message = "Window duration out of bounds"


class InvalidTimeError(ConfigurationError):
    code = ErrorCodes.INVALID_TIME
    default_message = "Invalid time for this operation"


class AlreadyActiveError(ConfigurationError):
    code = ErrorCodes.ALREADY_ACTIVE
    default_message = "Distribution window is currently active"
    retryable = True


class AmountMismatchError(ConfigurationError):
    code = ErrorCodes.AMOUNT_MISMATCH
    default_message = "Attached value does not match total amount"


class UnexpectedNativeError(ConfigurationError):
    code = ErrorCodes.UNEXPECTED_NATIVE
    default_message = "Native value attached to a token vault creation"


class VaultAlreadyExistsError(ConfigurationError):
    code = ErrorCodes.VAULT_ALREADY_EXISTS
    default_message = "A vault already exists at the derived address"
    retryable = True


# --- Claim-time validity ----------------------------------------------------

class ClaimError(VaultException):
    category = "claim"


class StartNotSetError(ClaimError):
    code = ErrorCodes.START_NOT_SET
    default_message = "Distribution window has not been configured"


class TooEarlyError(ClaimError):
    code = ErrorCodes.TOO_EARLY
    default_message = "Distribution window has not started"
    retryable = True


class TooLateError(ClaimError):
    code = ErrorCodes.TOO_LATE
    default_message = "Distribution window has ended"


class NoRootError(ClaimError):
    code = ErrorCodes.NO_ROOT
    default_message = "Merkle root has not been set"


class InvalidAmountError(ClaimError):
    code = ErrorCodes.INVALID_AMOUNT
    default_message = "Amount does not exceed the already claimed amount"


class InvalidProofError(ClaimError):
    code = ErrorCodes.INVALID_PROOF
    default_message = "Merkle proof does not match the root"


# --- Transfers --------------------------------------------------------------

class TransferError(VaultException):
    category = "transfer"


class TransferFailedError(TransferError):
    code = ErrorCodes.TRANSFER_FAILED
    default_message = "Asset transfer failed"


class NativeSendFailedError(TransferError):
    code = ErrorCodes.NATIVE_SEND_FAILED
    default_message = "Native currency forward failed"


class NativeNotAcceptedError(TransferError):
    code = ErrorCodes.NATIVE_NOT_ACCEPTED
    default_message = "Vault does not accept native currency"


# --- Resources --------------------------------------------------------------

class NoTokensError(VaultException):
    code = ErrorCodes.NO_TOKENS
    category = "resource"
    default_message = "Nothing to withdraw"


# --- Reentrancy -------------------------------------------------------------

class ReentrantCallError(VaultException):
    code = ErrorCodes.REENTRANT_CALL
    category = "guard"
    default_message = "Reentrant call"


# --- Ledger model -----------------------------------------------------------

class RevertedError(VaultException):
    """Generic revert raised by contracts that reject a call."""

    code = ErrorCodes.REVERTED


class InsufficientBalanceError(VaultException):
    code = ErrorCodes.INSUFFICIENT_BALANCE
    default_message = "Insufficient balance"


class InsufficientAllowanceError(VaultException):
    code = ErrorCodes.INSUFFICIENT_ALLOWANCE
    default_message = "Insufficient allowance"


class UnknownContractError(VaultException):
    code = ErrorCodes.UNKNOWN_CONTRACT
    default_message = "No contract at address"


def _all_subclasses(cls: type) -> list[type]:
    found = []
    for sub in cls.__subclasses__():
        found.append(sub)
        found.extend(_all_subclasses(sub))
    return found


EXCEPTIONS_BY_CODE: dict[str, type[VaultException]] = {
    cls.code: cls
    for cls in _all_subclasses(VaultException)
    if cls.__name__.endswith("Error") and "code" in cls.__dict__
}
