"""Widget description extracted from a type declaration."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..node import Node, Value


class WidgetField(BaseModel):
    """One declared field: name, Auto type name and evaluated default."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    type_name: str
    default: Value = None


class WidgetModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    fields: list[WidgetField] = Field(default_factory=list)

    def names(self) -> list[str]:
        return [f.name for f in self.fields]


class WidgetView(BaseModel):
    """Static view tree; arg and prop values may still be AST expressions."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    root: Node


class WidgetInfo(BaseModel):
    """Everything the code generator needs to emit one widget."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(min_length=1)
    model: WidgetModel = Field(default_factory=WidgetModel)
    view: WidgetView
    handlers: dict[str, list[Any]] = Field(default_factory=dict)
    on_param: str | None = None
    methods: list[str] = Field(default_factory=list)
    # FnDecl of every method other than view() and on()
    helpers: list[Any] = Field(default_factory=list)


class GeneratedSource(BaseModel):
    """Generated Python source plus what it defines."""

    model_config = ConfigDict(frozen=True)

    text: str
    widgets: list[str] = Field(default_factory=list)
    variants: dict[str, list[str]] = Field(default_factory=dict)
