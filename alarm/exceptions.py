"""
Custom exceptions for the alarm core
"""

from typing import Literal, Optional, cast
from pydantic import BaseModel, Field


# All possible error sources in the alarm core
ErrorSource = Literal[
  "model",  # Parsing/validating the alarm time
  "persistence",  # Key-value store reads and writes
  "scheduler",  # Trigger registration facility
  "notifications",  # Alert presentation
  "unknown",  # Uncategorized errors
]


class ErrorResponse(BaseModel):
  """Standardized error payload printed by the command line front end"""

  description: str = Field(..., description="Human-readable error message")
  name: str = Field(..., description="Unique error identifier")
  source: ErrorSource = Field(..., description="Where the error originated")
  caused_by: Optional[str] = Field(
    None, description="Original error details if this is a chained error"
  )


class AlarmError(Exception):
  """
  Base class for alarm errors.
  Carries a stable name and source so callers can report them uniformly.
  """

  default_name = "ALARM_ERROR"
  default_source: ErrorSource = "unknown"

  def __init__(
    self,
    description: str,
    name: Optional[str] = None,
    source: Optional[ErrorSource] = None,
    caused_by: Optional[str] = None,
  ):
    """
    Initialize an alarm error

    Args:
        description: Human-readable error message
        name: Unique error identifier (e.g., "REGISTER_FAILED")
        source: Where the error originated from
        caused_by: Original error details if this wraps another error
    """
    self.description: str = description
    self.name: str = name or self.default_name
    self.source: ErrorSource = source or self.default_source
    self.caused_by: Optional[str] = caused_by
    super().__init__(description)

  def to_response(self) -> ErrorResponse:
    """Convert to ErrorResponse model"""
    return ErrorResponse(
      description=self.description,
      name=self.name,
      source=cast(ErrorSource, self.source),
      caused_by=self.caused_by,
    )

  @classmethod
  def from_exception(
    cls,
    e: Exception,
    name: Optional[str] = None,
    context: Optional[str] = None,
  ) -> "AlarmError":
    """
    Create an error of this class from an existing exception

    Args:
        e: The original exception
        name: Error identifier for this error
        context: Additional context to prepend to the description

    Returns:
        Error with original exception details preserved
    """
    original_msg = str(e)
    description = f"{context}: {original_msg}" if context else original_msg

    return cls(
      description=description,
      name=name,
      caused_by=f"{e.__class__.__name__}: {original_msg}",
    )


class MalformedTimeError(AlarmError, ValueError):
  """Time string is not "H:M" or is out of range"""

  default_name = "MALFORMED_TIME"
  default_source: ErrorSource = "model"


class PersistenceError(AlarmError):
  """Key-value store is unavailable; nothing was committed"""

  default_name = "STORE_UNAVAILABLE"
  default_source: ErrorSource = "persistence"


class SchedulingError(AlarmError):
  """Trigger registration call failed; persisted state left unchanged"""

  default_name = "SCHEDULER_FAILED"
  default_source: ErrorSource = "scheduler"
