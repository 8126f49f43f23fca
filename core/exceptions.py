"""
Custom exceptions for the ingestion pipeline with structured error context.

Every exception carries a context dictionary for debugging and a reference
to the original exception that was caught (if any). The entrypoint maps
these onto process exit codes.

Exception Hierarchy:
    IngestionError (base)
    ├── ConfigurationError
    ├── ExtractionError
    │   ├── SourceReadError
    │   └── MalformedInputError
    ├── TransformationError
    │   └── SchemaMismatchError (also an IndexError)
    ├── LoadError
    │   └── SinkError
    ├── CheckpointError
    │   └── StaleCheckpointError
    └── IngestionCancelled
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone


class IngestionError(Exception):
    """
    Base exception for all ingestion errors.

    Attributes:
        message: Human-readable error message
        context: Additional context information (file, line, batch, etc.)
        original_exception: The original exception that was caught (if any)
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[BaseException] = None
    ):
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception
        self.timestamp = datetime.now(timezone.utc)

        self.context["error_timestamp"] = self.timestamp.isoformat()

        super().__init__(message)
        if original_exception:
            self.__cause__ = original_exception

    def __str__(self) -> str:
        """Format error message with context."""
        base_msg = f"{self.__class__.__name__}: {self.message}"

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"

        if self.original_exception:
            base_msg += f" | Caused by: {type(self.original_exception).__name__}: {str(self.original_exception)}"

        return base_msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "original_error": str(self.original_exception) if self.original_exception else None
        }


# ============================================================================
# Configuration Errors
# ============================================================================

class ConfigurationError(IngestionError):
    """
    Raised at startup when a required setting is missing or invalid.

    Context should include:
        - fields: Names of the offending settings
    """
    pass


# ============================================================================
# Extraction Errors
# ============================================================================

class ExtractionError(IngestionError):
    """Base exception for input read failures."""
    pass


class SourceReadError(ExtractionError):
    """
    Raised when the input file cannot be opened or read.

    Context should include:
        - file_path: Path to the CSV file
    """
    pass


class MalformedInputError(ExtractionError):
    """
    Raised on a row with the wrong column count or an undecodable byte.

    Context should include:
        - file_path: Path to the CSV file
        - line_number: Line number where error occurred (if known)
    """
    pass


# ============================================================================
# Transformation Errors
# ============================================================================

class TransformationError(IngestionError):
    """Base exception for row transformation failures."""
    pass


class SchemaMismatchError(TransformationError, IndexError):
    """
    Raised when a row has fewer columns than the mapper reads.

    Usually means the wrong file or a changed layout, so it is never skipped.

    Context should include:
        - place_id: Natural key of the row (if present)
        - columns: Number of columns in the row
        - required: Number of columns the mapper needs
    """
    pass


# ============================================================================
# Load Errors
# ============================================================================

class LoadError(IngestionError):
    """Base exception for sink failures."""
    pass


class SinkError(LoadError):
    """
    Raised when a bulk insert is rejected or the store is unreachable.

    Context should include:
        - collection: Target collection table
        - batch_size: Number of documents in the batch
        - first_key / last_key: Natural keys bounding the batch
    """
    pass


# ============================================================================
# Checkpoint Errors
# ============================================================================

class CheckpointError(IngestionError):
    """
    Raised when the checkpoint cannot be read.

    Context should include:
        - checkpoint_path: Path of the checkpoint file
        - operation: Operation that failed (read, write, clear)
    """
    pass


class StaleCheckpointError(CheckpointError):
    """
    Raised in strict mode when the checkpoint key does not appear in the input.

    Context should include:
        - checkpoint_value: The key that was never found
        - file_path: Path to the CSV file
    """
    pass


# ============================================================================
# Cancellation
# ============================================================================

class IngestionCancelled(IngestionError):
    """
    Raised between batches after an operator interrupt.

    Context should include:
        - signal: Name of the signal received
        - checkpoint_value: Last committed key at the time of cancellation
    """
    pass
