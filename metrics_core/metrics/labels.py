"""
Label sets: canonical identity of one time series within a family.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Mapping, Sequence

from metrics_core.core.exceptions import LabelCardinalityMismatch


@dataclass(frozen=True)
class LabelSet:
    """
    Ordered (name, value) pairs matching a family's declared label names.

    Two label sets of the same family are identical iff their values match
    positionally, so ``key`` (the values tuple) is what child maps are keyed by.
    """

    names: tuple[str, ...]
    values: tuple[str, ...]

    @property
    def key(self) -> tuple[str, ...]:
        return self.values

    def items(self) -> Iterator[tuple[str, str]]:
        return zip(self.names, self.values)

    def as_dict(self) -> dict[str, str]:
        return dict(self.items())

    def __len__(self) -> int:
        return len(self.values)

    @classmethod
    def empty(cls) -> LabelSet:
        return EMPTY_LABEL_SET

    @classmethod
    def from_call(
        cls,
        metric: str,
        names: tuple[str, ...],
        args: Sequence[Any],
        kwargs: Mapping[str, Any],
    ) -> LabelSet:
        """
        Build a label set from positional or keyword label values.

        Exactly one form may be used. A single list or tuple argument is
        treated as the full sequence of values. Values are coerced with ``str()``.
        """
        if len(args) == 1 and isinstance(args[0], (list, tuple)):
            args = args[0]

        if args and kwargs:
            raise LabelCardinalityMismatch(metric, names, got="mixed positional and keyword values")

        if kwargs:
            if set(kwargs) != set(names):
                raise LabelCardinalityMismatch(metric, names, got=sorted(kwargs))
            values = tuple(str(kwargs[name]) for name in names)
        else:
            if len(args) != len(names):
                raise LabelCardinalityMismatch(metric, names, got=len(args))
            values = tuple(str(value) for value in args)

        return cls(names, values)


EMPTY_LABEL_SET = LabelSet((), ())
