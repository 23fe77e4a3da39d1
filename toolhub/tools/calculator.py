from __future__ import annotations

import math
import operator as op
from typing import ClassVar, Literal

from pydantic import Field

from toolhub.models.tool import ToolConfig, ToolResponse
from toolhub.tools.base import BasePlatformTool

DIVISION_BY_ZERO = "Error: division by zero is not allowed."

_OPERATIONS = {
    "+": op.add,
    "-": op.sub,
    "*": op.mul,
    "/": op.truediv,
}


class CalculatorConfig(ToolConfig):
    """Input for the calculator tool."""

    a: float = Field(description="First operand")
    b: float = Field(description="Second operand")
    operator: Literal["+", "-", "*", "/"] = Field(description="Operator (+, -, *, /)")


def format_number(value: float) -> str:
    """Format like a JSON/JavaScript number.

    Integral values below 1e21 lose their ``.0`` and exponents drop the
    zero padding (``1e-07`` -> ``1e-7``). Overflow shows as ``Infinity``.
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    mantissa, marker, exponent = repr(value).partition("e")
    if not marker:
        return mantissa
    return f"{mantissa}e{int(exponent):+d}"


def calculate(a: float, b: float, operator: str) -> str:
    if operator == "/" and b == 0:
        return DIVISION_BY_ZERO
    result = _OPERATIONS[operator](a, b)
    return f"{format_number(a)} {operator} {format_number(b)} = {format_number(result)}"


class CalculatorTool(BasePlatformTool):
    """Basic arithmetic on two numbers."""

    name: ClassVar[str] = "calculator"
    description: ClassVar[str] = (
        "Take two numbers and an operator and return the result of the arithmetic operation."
    )
    config_model: ClassVar[type[ToolConfig]] = CalculatorConfig
    output_description: ClassVar[str | None] = "Calculation result"
    failure_message: ClassVar[str] = "Calculation failed"

    async def execute(self, config: CalculatorConfig) -> ToolResponse:
        return ToolResponse.text(calculate(config.a, config.b, config.operator))
