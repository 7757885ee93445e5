"""Common base for backend configurations."""

from typing import Any

from twinbox.model import ConfigModel


class BackendModel(ConfigModel):
    """Configuration of one backend kind.

    Subclasses declare a ``type`` literal field used as the document tag.
    """

    @property
    def kind(self) -> str:
        return self.type  # type: ignore[attr-defined]

    def auth_configs(self) -> list[Any]:
        """Authentication sub-configs holding secrets. Empty by default."""
        return []
