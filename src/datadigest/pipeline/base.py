"""Base protocol for pipeline handlers."""

from typing import Protocol, TypeVar

from datadigest.core.types import Result
from datadigest.exceptions import DataDigestError

# Contravariant input (handlers can accept supertypes), invariant output
T_In = TypeVar("T_In", contravariant=True)
T_Out = TypeVar("T_Out")
T_Error = TypeVar("T_Error", bound=DataDigestError)


class BaseHandler(Protocol[T_In, T_Out, T_Error]):
    """Protocol for pipeline handlers.

    Each handler performs a single transformation on the command object,
    making it easy to test and reason about.
    """

    def handle(self, command: T_In) -> Result[T_Out, T_Error]:
        """Process a command object.

        Args:
            command: The input command state from the previous pipeline stage.

        Returns:
            A Result object containing either the next command state or an error.
        """
        ...
