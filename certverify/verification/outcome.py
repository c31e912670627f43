"""Tagged results for optional evidence steps.

Each remote or decode call is wrapped so its failure becomes a value the
aggregator folds into the issue list instead of an exception that aborts
the run.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failed:
    reason: str


Outcome = Union[Ok[T], Failed]


def attempt(
    call: Callable[..., T],
    *args: Any,
    errors: tuple[type[Exception], ...],
    **kwargs: Any,
) -> Outcome[T]:
    """Run ``call`` and capture any of ``errors`` as a Failed outcome.

    Exceptions outside ``errors`` propagate unchanged.
    """
    try:
        return Ok(call(*args, **kwargs))
    except errors as exc:
        return Failed(str(exc) or type(exc).__name__)
