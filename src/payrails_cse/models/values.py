"""Bounded dynamic values carried in provider metadata and error details."""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Union

from pydantic import PlainSerializer, PlainValidator


class ScalarKind(str, Enum):
    """Variant tag of a ScalarValue."""

    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class ScalarValue:
    """A JSON scalar of a known kind.

    Server payloads put loosely typed values in `providerData` and error
    `meta`. Only integers, floats, strings and booleans are accepted;
    objects, arrays and null fail to decode.
    """

    kind: ScalarKind
    value: Union[int, float, str, bool]

    @classmethod
    def integer(cls, value: int) -> "ScalarValue":
        return cls(ScalarKind.INTEGER, value)

    @classmethod
    def float_(cls, value: float) -> "ScalarValue":
        return cls(ScalarKind.FLOAT, value)

    @classmethod
    def string(cls, value: str) -> "ScalarValue":
        return cls(ScalarKind.STRING, value)

    @classmethod
    def boolean(cls, value: bool) -> "ScalarValue":
        return cls(ScalarKind.BOOLEAN, value)

    @classmethod
    def decode(cls, raw: Any) -> "ScalarValue":
        """Decode a JSON-loaded value, trying integer, float, string, boolean.

        Raises:
            ValueError: If the value is not one of the supported scalars
        """
        if isinstance(raw, cls):
            return raw
        # bool is a subclass of int; JSON true/false are booleans only
        if isinstance(raw, bool):
            return cls.boolean(raw)
        if isinstance(raw, int):
            return cls.integer(raw)
        if isinstance(raw, float):
            return cls.float_(raw)
        if isinstance(raw, str):
            return cls.string(raw)
        raise ValueError(f"Unsupported scalar value type: {type(raw).__name__}")

    def encode(self) -> Union[int, float, str, bool]:
        """Return the bare JSON scalar."""
        return self.value


# Field type for pydantic models
Scalar = Annotated[
    ScalarValue,
    PlainValidator(ScalarValue.decode),
    PlainSerializer(ScalarValue.encode),
]
