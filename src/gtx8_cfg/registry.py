"""SchemaRegistry: known chip-family layouts.

The registry is populated once and frozen, so the set of layouts the
decoder accepts cannot change at runtime. Supporting another family is
a matter of writing its tables and registering them here.
"""

from typing import Dict, List, Optional

from .gtx8 import ChipLayout, GTX8_LAYOUT


class SchemaRegistry:
    """Frozen mapping of chip family name to ChipLayout.

    Attributes:
        _layouts: Dictionary mapping family names to layouts
        _frozen: Whether the registry is locked against modifications
    """

    def __init__(self):
        """Initialize registry with all supported families."""
        self._layouts: Dict[str, ChipLayout] = {}
        self._frozen = False
        self.register(GTX8_LAYOUT)
        self.freeze()

    def register(self, chip: ChipLayout) -> None:
        """Register a chip family layout.

        Raises:
            RuntimeError: If registry is frozen
            ValueError: If the family is already registered
        """
        if self._frozen:
            raise RuntimeError("Cannot register layouts: registry is frozen")
        if chip.name in self._layouts:
            raise ValueError(f"Layout already registered: {chip.name}")
        self._layouts[chip.name] = chip

    def freeze(self) -> None:
        """Freeze the registry to prevent further modifications."""
        self._frozen = True

    def is_frozen(self) -> bool:
        return self._frozen

    def names(self) -> List[str]:
        """Registered family names, in registration order."""
        return list(self._layouts)

    def get(self, name: str) -> ChipLayout:
        """Look up a chip family.

        Raises:
            KeyError: If the family is unknown
        """
        key = name.lower()
        if key not in self._layouts:
            raise KeyError(f"Unknown chip family: {name}")
        return self._layouts[key]


# Singleton registry instance
_registry: Optional[SchemaRegistry] = None


def get_registry() -> SchemaRegistry:
    """Get the singleton layout registry instance."""
    global _registry
    if _registry is None:
        _registry = SchemaRegistry()
    return _registry
