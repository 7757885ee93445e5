"""Base model shared by every user-facing configuration type.

Keys are kebab-case in the TOML document and snake_case in Python.
Unknown keys are rejected at every level.
"""

from pydantic import BaseModel, ConfigDict


def to_kebab(name: str) -> str:
    """Convert a snake_case field name to its kebab-case document key."""
    return name.replace("_", "-")


class ConfigModel(BaseModel):
    """Strict configuration model with kebab-case aliases."""

    model_config = ConfigDict(
        alias_generator=to_kebab,
        populate_by_name=True,
        extra="forbid",
    )

    def to_document(self) -> dict:
        """Dump to a TOML-ready dict using document keys, omitting unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
