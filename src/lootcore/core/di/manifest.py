"""
Static component manifest.

Lists every component variant the application ships, with its factory and
dependencies, so startup registers from an explicit table instead of probing
for what happens to be importable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class ComponentSpec:
    name: str
    factory: Callable[..., Any]
    dependencies: Tuple[str, ...] = ()
    singleton: bool = True
    variant: str = "core"
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_mapping(cls, name: str, data: Dict[str, Any]) -> "ComponentSpec":
        if "factory" not in data:
            raise KeyError(f"Component spec '{name}' has no factory")
        return cls(
            name=name,
            factory=data["factory"],
            dependencies=tuple(data.get("dependencies") or ()),
            singleton=data.get("singleton", True),
            variant=data.get("variant", "core"),
            metadata=dict(data.get("metadata") or {}),
        )


class ComponentManifest:
    """Ordered table of ComponentSpec entries keyed by name (last add wins)."""

    def __init__(self, specs: Optional[Iterable[ComponentSpec]] = None) -> None:
        self._specs: Dict[str, ComponentSpec] = {}
        for spec in specs or ():
            self.add(spec)

    def add(self, spec: ComponentSpec) -> "ComponentManifest":
        self._specs[spec.name] = spec
        return self

    def component(
        self,
        name: str,
        factory: Callable[..., Any],
        dependencies: Sequence[str] = (),
        *,
        singleton: bool = True,
        variant: str = "core",
    ) -> "ComponentManifest":
        return self.add(
            ComponentSpec(
                name=name,
                factory=factory,
                dependencies=tuple(dependencies),
                singleton=singleton,
                variant=variant,
            )
        )

    def get(self, name: str) -> Optional[ComponentSpec]:
        return self._specs.get(name)

    def variants(self) -> List[str]:
        seen: Dict[str, None] = {}
        for spec in self._specs.values():
            seen.setdefault(spec.variant, None)
        return list(seen)

    def select(self, available: Optional[Iterable[str]] = None) -> List[ComponentSpec]:
        """Specs whose variant is in ``available`` (all specs when ``available`` is None)."""
        if available is None:
            return list(self._specs.values())
        allowed = set(available)
        return [spec for spec in self._specs.values() if spec.variant in allowed]

    def __iter__(self) -> Iterator[ComponentSpec]:
        return iter(list(self._specs.values()))

    def __len__(self) -> int:
        return len(self._specs)

    def __contains__(self, name: object) -> bool:
        return name in self._specs
