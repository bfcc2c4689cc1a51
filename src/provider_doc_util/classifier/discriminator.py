"""Service and resource discriminators.

A discriminator extracts a classification value from a single OpenAPI
operation. ``svcName:<name>`` puts every operation in one service; anything
else is a JSONPath expression evaluated against the operation.
"""

from jsonpath_ng import parse as parse_jsonpath
from jsonpath_ng.exceptions import JSONPathError

LITERAL_PREFIX = "svcName:"


class LiteralDiscriminator:
    """Resolves to the same value for every operation."""

    def __init__(self, value: str):
        self.value = value

    def evaluate(self, operation: dict) -> str:
        return self.value

    def __repr__(self):
        return f"LiteralDiscriminator({self.value!r})"


class PathQueryDiscriminator:
    """Resolves to the first scalar matched by a JSONPath expression.

    A malformed expression never raises; it matches nothing, so resources
    fall back to the service name.
    """

    def __init__(self, expression: str):
        self.expression = expression
        try:
            self._query = parse_jsonpath(expression)
        except (JSONPathError, ValueError, AttributeError):
            self._query = None

    @property
    def is_valid(self) -> bool:
        return self._query is not None

    def evaluate(self, operation: dict) -> str | None:
        if self._query is None:
            return None
        try:
            matches = self._query.find(operation)
        except (TypeError, KeyError, IndexError):
            return None
        if not matches:
            return None
        value = matches[0].value
        if isinstance(value, (dict, list)) or value is None:
            return None
        return str(value)

    def __repr__(self):
        return f"PathQueryDiscriminator({self.expression!r})"


def parse_discriminator(expression: str, allow_literal: bool = True) -> LiteralDiscriminator | PathQueryDiscriminator:
    """Build a discriminator from its command line form.

    The resource discriminator is always a path query, so it is parsed with
    ``allow_literal=False``.
    """
    if allow_literal and expression.startswith(LITERAL_PREFIX):
        return LiteralDiscriminator(expression[len(LITERAL_PREFIX):].split(":")[0])
    return PathQueryDiscriminator(expression)
