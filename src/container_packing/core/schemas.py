"""
Boundary schemas for item and container descriptors.

Callers (forms, JSON/YAML files, the CLI) hand descriptors to these
pydantic models, which reject non-positive or non-finite dimensions and
duplicate identities before the engine ever sees them.
"""

from __future__ import annotations

from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from container_packing.core.errors import UnknownContainerError
from container_packing.core.models import (
    DEFAULT_COLOR,
    Container,
    Item,
    get_container_preset,
)


def _coerce_id(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class ItemSpec(BaseModel):
    """One line of cargo as entered by the user."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(min_length=1)
    name: str = ""
    length: float = Field(gt=0, allow_inf_nan=False)
    width: float = Field(gt=0, allow_inf_nan=False)
    height: float = Field(gt=0, allow_inf_nan=False)
    color: str = DEFAULT_COLOR
    quantity: int = Field(default=1, ge=1)

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, value):
        return _coerce_id(value)

    def to_items(self) -> List[Item]:
        """Expand into `quantity` distinct items (ids "<id>-1", "<id>-2", ...)."""
        if self.quantity == 1:
            ids = [self.id]
        else:
            ids = [f"{self.id}-{n}" for n in range(1, self.quantity + 1)]
        return [
            Item(id=item_id, length=self.length, width=self.width,
                 height=self.height, name=self.name, color=self.color)
            for item_id in ids
        ]


class ContainerSpec(BaseModel):
    """A custom container descriptor."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = "custom"
    name: str = ""
    length: float = Field(gt=0, allow_inf_nan=False)
    width: float = Field(gt=0, allow_inf_nan=False)
    height: float = Field(gt=0, allow_inf_nan=False)

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, value):
        return _coerce_id(value)

    def to_container(self) -> Container:
        return Container(id=self.id, name=self.name, length=self.length,
                         width=self.width, height=self.height)


class PackingRequest(BaseModel):
    """
    A complete packing request: the cargo list plus one container.

    ``container`` is either a preset key ("20ft", "40ft") or a full
    ContainerSpec. When omitted the caller must supply a container
    separately.
    """

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    items: List[ItemSpec] = Field(default_factory=list)
    container: Optional[Union[ContainerSpec, str]] = None

    @field_validator("container")
    @classmethod
    def known_preset(cls, value):
        if isinstance(value, str):
            try:
                get_container_preset(value)
            except UnknownContainerError as exc:
                raise ValueError(str(exc)) from None
        return value

    @model_validator(mode="after")
    def unique_ids(self) -> "PackingRequest":
        seen = set()
        duplicates = []
        for spec in self.items:
            for item in spec.to_items():
                if item.id in seen:
                    duplicates.append(item.id)
                seen.add(item.id)
        if duplicates:
            raise ValueError(f"duplicate item ids: {sorted(set(duplicates))}")
        return self

    def to_items(self) -> List[Item]:
        items: List[Item] = []
        for spec in self.items:
            items.extend(spec.to_items())
        return items

    def to_container(self) -> Optional[Container]:
        if self.container is None:
            return None
        if isinstance(self.container, str):
            return get_container_preset(self.container)
        return self.container.to_container()
