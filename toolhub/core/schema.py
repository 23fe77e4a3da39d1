from __future__ import annotations

import types
from collections.abc import Iterable, Mapping
from enum import StrEnum
from typing import Annotated, Any, Literal, Union, get_args, get_origin

import pydantic
from pydantic import BaseModel, ConfigDict, Field, create_model, model_validator
from pydantic_core import PydanticUndefined

from toolhub.models.tool import IntegralInt, ToolConfig


class FieldKind(StrEnum):
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ENUM = "enum"
    ARRAY = "array"
    OBJECT = "object"


class ErrorKind(StrEnum):
    MISSING_FIELD = "missing_field"
    TYPE_MISMATCH = "type_mismatch"
    CONSTRAINT_VIOLATION = "constraint_violation"


# pydantic error types that mean "right kind, wrong value"
_CONSTRAINT_ERRORS = frozenset({
    "literal_error", "enum", "greater_than", "greater_than_equal",
    "less_than", "less_than_equal", "multiple_of", "finite_number",
    "too_short", "too_long", "string_too_short", "string_too_long",
})

_ROOT_FIELD = "(root)"


class FieldSpec(BaseModel):
    """Declarative description of one input field."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: FieldKind
    required: bool = True
    default: Any = None
    item_kind: FieldKind | None = None
    choices: tuple[Any, ...] | None = None
    minimum: float | None = None
    maximum: float | None = None
    description: str = ""

    @model_validator(mode="after")
    def _check_consistency(self) -> FieldSpec:
        if self.kind is FieldKind.ENUM and not self.choices:
            raise ValueError(f"Enum field '{self.name}' needs at least one choice")
        if self.kind is FieldKind.ARRAY and self.item_kind is None:
            raise ValueError(f"Array field '{self.name}' needs an item_kind")
        if self.item_kind in (FieldKind.ENUM, FieldKind.ARRAY):
            raise ValueError(f"Array field '{self.name}' cannot hold {self.item_kind} items")
        if self.default is not None:
            if self.required:
                raise ValueError(f"Field '{self.name}' is required and cannot declare a default")
            if not self.accepts(self.default):
                raise ValueError(
                    f"Default {self.default!r} for '{self.name}' does not match kind {self.kind}"
                )
        return self

    def accepts(self, value: Any) -> bool:
        """Check that *value* matches this field's kind (constraints excluded)."""
        if self.kind is FieldKind.ENUM:
            return value in (self.choices or ())
        if self.kind is FieldKind.ARRAY:
            if not isinstance(value, list):
                return False
            return all(_matches_kind(self.item_kind, item) for item in value)
        return _matches_kind(self.kind, value)


class FieldError(BaseModel):
    """One offending field in a failed validation."""

    field: str
    kind: ErrorKind
    reason: str


class ValidationResult(BaseModel):
    """Either a validated config (``ok``) or the ordered list of field errors."""

    value: Any = None
    errors: list[FieldError] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @classmethod
    def success(cls, value: ToolConfig) -> ValidationResult:
        return cls(value=value)

    @classmethod
    def failure(cls, errors: list[FieldError]) -> ValidationResult:
        return cls(errors=errors)

    def summary(self) -> str:
        return "; ".join(f"{e.field}: {e.reason}" for e in self.errors)


def _matches_kind(kind: FieldKind | None, value: Any) -> bool:
    if kind is FieldKind.STRING:
        return isinstance(value, str)
    if kind is FieldKind.NUMBER:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if kind is FieldKind.INTEGER:
        return isinstance(value, int) and not isinstance(value, bool)
    if kind is FieldKind.BOOLEAN:
        return isinstance(value, bool)
    if kind is FieldKind.OBJECT:
        return isinstance(value, dict)
    return False


_KIND_TYPES: dict[FieldKind, Any] = {
    FieldKind.STRING: str,
    FieldKind.NUMBER: float,
    FieldKind.INTEGER: IntegralInt,
    FieldKind.BOOLEAN: bool,
    FieldKind.OBJECT: dict[str, Any],
}


def _annotation_for(spec: FieldSpec) -> Any:
    if spec.kind is FieldKind.ENUM:
        return Literal[spec.choices]  # type: ignore[valid-type]
    if spec.kind is FieldKind.ARRAY:
        return list[_KIND_TYPES[spec.item_kind]]  # type: ignore[index]
    return _KIND_TYPES[spec.kind]


def build_model(name: str, specs: Iterable[FieldSpec]) -> type[ToolConfig]:
    """Compile a FieldSpec list into a ToolConfig subclass."""
    fields: dict[str, Any] = {}
    for spec in specs:
        annotation = _annotation_for(spec)
        if spec.required:
            default: Any = ...
        else:
            annotation = annotation | None
            default = spec.default
        fields[spec.name] = (
            annotation,
            Field(
                default=default,
                ge=spec.minimum,
                le=spec.maximum,
                description=spec.description or None,
            ),
        )
    return create_model(name, __base__=ToolConfig, **fields)


def _strip_optional(annotation: Any) -> Any:
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _kind_of(annotation: Any) -> tuple[FieldKind, FieldKind | None, tuple[Any, ...] | None]:
    annotation = _strip_optional(annotation)
    origin = get_origin(annotation)
    if origin is Annotated:
        return _kind_of(get_args(annotation)[0])
    if origin is Literal:
        return FieldKind.ENUM, None, get_args(annotation)
    if origin is list:
        (item,) = get_args(annotation) or (str,)
        item_kind, _, _ = _kind_of(item)
        return FieldKind.ARRAY, item_kind, None
    if origin is dict or annotation is dict:
        return FieldKind.OBJECT, None, None
    # bool before int: bool is an int subclass
    for kind, py_type in ((FieldKind.BOOLEAN, bool), (FieldKind.INTEGER, int),
                          (FieldKind.NUMBER, float), (FieldKind.STRING, str)):
        if annotation is py_type:
            return kind, None, None
    return FieldKind.OBJECT, None, None


def describe_model(model: type[BaseModel]) -> list[FieldSpec]:
    """Derive FieldSpecs from a config model, in declaration order."""
    specs: list[FieldSpec] = []
    for field_name, info in model.model_fields.items():
        kind, item_kind, choices = _kind_of(info.annotation)
        minimum = maximum = None
        for meta in info.metadata:
            minimum = getattr(meta, "ge", minimum)
            maximum = getattr(meta, "le", maximum)
        required = info.is_required()
        default = None
        if not required and info.default is not PydanticUndefined:
            default = info.default
        specs.append(
            FieldSpec(
                name=info.alias or field_name,
                kind=kind,
                required=required,
                default=default,
                item_kind=item_kind,
                choices=choices,
                minimum=minimum,
                maximum=maximum,
                description=info.description or "",
            )
        )
    return specs


def _classify(error: Mapping[str, Any]) -> ErrorKind:
    error_type = error["type"]
    if error_type == "missing":
        return ErrorKind.MISSING_FIELD
    if error_type in _CONSTRAINT_ERRORS:
        return ErrorKind.CONSTRAINT_VIOLATION
    value = error.get("input")
    if error_type in ("int_type", "int_from_float") and isinstance(value, float):
        return ErrorKind.CONSTRAINT_VIOLATION
    return ErrorKind.TYPE_MISMATCH


def _field_errors(exc: pydantic.ValidationError, order: list[str]) -> list[FieldError]:
    errors = []
    for error in exc.errors():
        loc = error["loc"]
        field = ".".join(str(part) for part in loc) if loc else _ROOT_FIELD
        kind = _classify(error)
        reason = error["msg"]
        if kind is ErrorKind.CONSTRAINT_VIOLATION and error["type"] in ("int_type", "int_from_float"):
            reason = "Input should be an integer"
        errors.append(FieldError(field=field, kind=kind, reason=reason))
    position = {name: idx for idx, name in enumerate(order)}
    # sorted() is stable, so several errors on one field keep pydantic's order
    return sorted(errors, key=lambda e: position.get(e.field.split(".")[0], len(position)))


def validate(
    schema: type[ToolConfig] | Iterable[FieldSpec], raw: Any
) -> ValidationResult:
    """Validate *raw* against a config model or a FieldSpec list.

    Never raises for bad input: every failing field is reported, in
    declaration order. Unknown keys in *raw* are ignored.
    """
    if isinstance(schema, type):
        model = schema
    else:
        model = build_model("Input", list(schema))
    order = [info.alias or name for name, info in model.model_fields.items()]

    if not isinstance(raw, Mapping):
        return ValidationResult.failure([
            FieldError(
                field=_ROOT_FIELD,
                kind=ErrorKind.TYPE_MISMATCH,
                reason=f"Input should be an object, got {type(raw).__name__}",
            )
        ])
    try:
        value = model.model_validate(dict(raw))
    except pydantic.ValidationError as exc:
        return ValidationResult.failure(_field_errors(exc, order))
    return ValidationResult.success(value)
