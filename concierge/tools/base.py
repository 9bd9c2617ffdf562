"""Base classes and types for executable tools."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from concierge.core.errors import OperationFailure
from concierge.planner.types import Operation
from concierge.shop.session import ShoppingSession
from concierge.shop.storefront import Storefront

logger = logging.getLogger("concierge.tools")


class ToolParams(BaseModel):
    """Typed parameter record for one operation (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class NoParams(ToolParams):
    pass


class ProductIdParams(ToolParams):
    product_id: str = Field(min_length=1)


class ProductQuantityParams(ProductIdParams):
    quantity: int = Field(default=1, ge=1)

    @field_validator("quantity", mode="before")
    @classmethod
    def _default_missing_quantity(cls, value: Any) -> Any:
        return 1 if value in (None, 0, "") else value


P = TypeVar("P", bound=ToolParams)


@dataclass(slots=True)
class ToolContext:
    """Context provided to a tool invocation."""

    session: ShoppingSession


@dataclass(slots=True)
class ToolResponse:
    """Standard tool response payload.

    ``content`` is the text shown to the shopper, ``data`` the JSON-ready
    result recorded in the transcript for the planner.
    """

    content: str
    data: Any = field(default_factory=dict)
    success: bool = True


class Tool(ABC, Generic[P]):
    """Executable tool implementation interface."""

    name: ClassVar[Operation]
    params_model: ClassVar[type[ToolParams]] = NoParams

    def __init__(self, storefront: Storefront) -> None:
        self.storefront = storefront

    async def run(self, context: ToolContext, params: P) -> ToolResponse:
        """Execute the tool, turning operation failures into unsuccessful responses."""

        try:
            return await self.execute(context, params)
        except OperationFailure as exc:
            logger.info("%s rejected input: %s", self.name.value, exc)
            return ToolResponse(content=str(exc), data={"error": str(exc)}, success=False)

    @abstractmethod
    async def execute(self, context: ToolContext, params: P) -> ToolResponse:
        """Perform the operation against the storefront."""

    def describe(self) -> str:
        """Return a human-readable description for prompts and dashboards."""

        return (self.__doc__ or self.name.value).strip()

    def parameter_hint(self) -> str:
        """Return a compact ``name: type`` listing of accepted parameters."""

        schema = self.params_model.model_json_schema(by_alias=True)
        properties = schema.get("properties", {})
        if not properties:
            return "{}"
        required = set(schema.get("required", []))
        parts = []
        for key, spec in properties.items():
            kind = spec.get("type") or ("object" if "anyOf" in spec or "$ref" in spec else "any")
            parts.append(f"{key}{'' if key in required else '?'}: {kind}")
        return "{" + ", ".join(parts) + "}"
