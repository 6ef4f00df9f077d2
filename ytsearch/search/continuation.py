"""Serializable state needed to fetch further pages of a search later."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence

from ytsearch._core._models import Budget, ExecutionContext
from ytsearch.exceptions import BudgetMismatch, InvalidDescriptor
from ytsearch.search.options import SearchOptions


def _require(value: Any, expected: type, name: str) -> Any:
    # empty strings are missing, empty objects are not
    if not isinstance(value, expected) or (isinstance(value, str) and not value):
        raise InvalidDescriptor(f"Invalid {name}")
    return value


@dataclass(frozen=True)
class ContinuationDescriptor:
    """Everything needed to resume a page-limited or unbounded search.

    Only plain values are held, so ``to_dict()`` can be stored as JSON and fed
    back to ``ContinuationDescriptor.load``.

    Attributes:
        api_key: Key recovered from the first results page.
        token: Continuation token of the next page.
        context: Execution context of the original search.
        options: Options of the original search.
        remaining: Budget left when the descriptor was emitted.
    """

    api_key: str
    token: str
    context: ExecutionContext
    options: SearchOptions
    remaining: Budget = field(default_factory=Budget)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "api_key": self.api_key,
            "token": self.token,
            "context": self.context.to_dict(),
            "options": self.options.to_dict(),
            "remaining": self.remaining.to_dict(),
        }

    def to_list(self) -> List[Any]:
        """Return the ``[api_key, token, context, options]`` form."""
        options = self.options.to_dict()
        options.update(self.remaining.to_dict())
        return [self.api_key, self.token, self.context.to_dict(), options]

    @classmethod
    def load(cls, value: Any) -> "ContinuationDescriptor":
        """Validate and build a descriptor from any of its accepted forms.

        Parameters:
            value: A ``ContinuationDescriptor``, the mapping produced by
                ``to_dict()`` or the four element sequence produced by
                ``to_list()``.

        Returns:
            The descriptor.

        Raises:
            InvalidDescriptor: if the value does not have the expected shape.
            BudgetMismatch: if the descriptor belongs to an item-limited search.
        """
        if isinstance(value, cls):
            descriptor = value
        elif isinstance(value, Mapping):
            descriptor = cls._from_parts(
                value.get("api_key"),
                value.get("token"),
                value.get("context"),
                value.get("options"),
                value.get("remaining"),
            )
        elif isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            if len(value) != 4:
                raise InvalidDescriptor("Invalid continuation array")
            descriptor = cls._from_parts(*value, None)
        else:
            raise InvalidDescriptor("Invalid continuation descriptor")

        if descriptor.remaining.items is not None:
            raise BudgetMismatch("continuation is only allowed for paged requests")
        return descriptor

    @classmethod
    def _from_parts(
        cls,
        api_key: Any,
        token: Any,
        context: Any,
        options: Any,
        remaining: Any,
    ) -> "ContinuationDescriptor":
        _require(api_key, str, "apiKey")
        _require(token, str, "token")
        _require(context, Mapping, "context")
        _require(options, Mapping, "options")
        budget_source = remaining if isinstance(remaining, Mapping) else options
        return cls(
            api_key=api_key,
            token=token,
            context=ExecutionContext.from_dict(context),
            options=SearchOptions.from_dict(options),
            remaining=Budget.from_dict(budget_source),
        )
