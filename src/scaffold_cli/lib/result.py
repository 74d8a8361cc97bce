"""Result type for operations that can fail in expected ways.

Operations return Ok(value) or Err(error) instead of raising. Callers
pattern match, passing errors up unchanged:

    match reconcile_bucket(ctx, tf, names):
        case Err() as e:
            return e
        case Ok(outcome):
            ...

The command layer is the only place an Err turns into an exit code
(commands.common.handle_result).
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success case containing a value."""

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Error case containing an error."""

    error: E


type Result[T, E] = Ok[T] | Err[E]
