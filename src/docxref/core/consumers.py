"""Reference consumer folding delivered fragments into its own index."""

from __future__ import annotations

from dataclasses import dataclass, field

from .registry import Fragment, FragmentMapping


@dataclass(slots=True)
class FragmentCollector:
    """Callable consumer recording every mapping handed over by a registry.

    ``index`` follows the registry's overwrite semantics while ``deliveries``
    keeps each delivered mapping in arrival order.
    """

    index: dict[str, Fragment] = field(default_factory=dict)
    deliveries: list[dict[str, Fragment]] = field(default_factory=list)

    def __call__(self, fragments: FragmentMapping) -> None:
        delivered = dict(fragments)
        self.deliveries.append(delivered)
        self.index.update(delivered)

    def namespaces(self) -> list[str]:
        return sorted(self.index)

    def total_records(self) -> int:
        """Return the number of records across every collected namespace."""
        return sum(len(fragment) for fragment in self.index.values())


__all__ = ["FragmentCollector"]
