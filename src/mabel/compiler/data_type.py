"""Primitive numeric data types and their registry.

The registry is a pure lookup table built once. It is never mutated after
construction and is safe to share between any number of concurrent readers.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from types import MappingProxyType

from mabel.enums import DataTypeCategory

__all__ = [
    "BUILTIN_TYPES",
    "DEFAULT_REGISTRY",
    "DOUBLE",
    "FLOAT32",
    "INT",
    "INT8",
    "INT16",
    "INT32",
    "INT64",
    "UINT",
    "UINT8",
    "UINT16",
    "UINT32",
    "UINT64",
    "DataType",
    "DataTypeRegistry",
]

# Bit size assumed for the width-less int/uint forms.
_PLATFORM_INT_BITS = 32

_INTEGER_WIDTHS: tuple[int, ...] = (8, 16, 32, 64)


@dataclass(frozen=True, slots=True)
class DataType:
    """Primitive numeric data type descriptor.

    Attributes:
        category: Signed integer, unsigned integer, or float
        width: Bit width, or None for the width-less ``int``/``uint`` forms
        name: Canonical type name (``int8``, ``double``, ...)
    """

    category: DataTypeCategory
    width: int | None
    name: str

    def __post_init__(self) -> None:
        """Validate width against the category."""
        if self.category is DataTypeCategory.FLOAT:
            if self.width not in (32, 64):
                msg = f"Float data type width must be 32 or 64, got {self.width}"
                raise ValueError(msg)
        elif self.width is not None and self.width not in _INTEGER_WIDTHS:
            msg = f"Integer data type width must be one of {_INTEGER_WIDTHS}, got {self.width}"
            raise ValueError(msg)

    def __str__(self) -> str:
        return self.name

    @property
    def bit_size(self) -> int:
        """Storage size in bits (width-less integers count as 32)."""
        return self.width if self.width is not None else _PLATFORM_INT_BITS

    @property
    def is_signed_integer(self) -> bool:
        return self.category is DataTypeCategory.SIGNED_INT

    @property
    def is_unsigned_integer(self) -> bool:
        return self.category is DataTypeCategory.UNSIGNED_INT

    @property
    def is_integer(self) -> bool:
        return self.is_signed_integer or self.is_unsigned_integer

    @property
    def is_floating_point(self) -> bool:
        return self.category is DataTypeCategory.FLOAT

    @property
    def is_numeric(self) -> bool:
        return self.is_integer or self.is_floating_point

    @property
    def description_id(self) -> str:
        """Message id of the human readable description of this type."""
        return f"data-type-description-{self.name}"


INT = DataType(DataTypeCategory.SIGNED_INT, None, "int")
INT8 = DataType(DataTypeCategory.SIGNED_INT, 8, "int8")
INT16 = DataType(DataTypeCategory.SIGNED_INT, 16, "int16")
INT32 = DataType(DataTypeCategory.SIGNED_INT, 32, "int32")
INT64 = DataType(DataTypeCategory.SIGNED_INT, 64, "int64")
UINT = DataType(DataTypeCategory.UNSIGNED_INT, None, "uint")
UINT8 = DataType(DataTypeCategory.UNSIGNED_INT, 8, "uint8")
UINT16 = DataType(DataTypeCategory.UNSIGNED_INT, 16, "uint16")
UINT32 = DataType(DataTypeCategory.UNSIGNED_INT, 32, "uint32")
UINT64 = DataType(DataTypeCategory.UNSIGNED_INT, 64, "uint64")
FLOAT32 = DataType(DataTypeCategory.FLOAT, 32, "float32")
DOUBLE = DataType(DataTypeCategory.FLOAT, 64, "double")

BUILTIN_TYPES: tuple[DataType, ...] = (
    INT,
    INT8,
    INT16,
    INT32,
    INT64,
    UINT,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    FLOAT32,
    DOUBLE,
)


class DataTypeRegistry:
    """Immutable lookup table of primitive data types.

    Example:
        >>> registry = DataTypeRegistry()
        >>> registry.resolve("int8")
        DataType(category=<DataTypeCategory.SIGNED_INT: 'int'>, width=8, name='int8')
        >>> registry.valid_widths(DataTypeCategory.SIGNED_INT)
        (8, 16, 32, 64)

    Thread Safety:
        Thread-safe. Internal state is only set during __init__.
    """

    __slots__ = ("_by_name", "_by_width", "_widths")

    def __init__(self, types: Iterable[DataType] = BUILTIN_TYPES) -> None:
        by_name: dict[str, DataType] = {}
        by_width: dict[tuple[DataTypeCategory, int | None], DataType] = {}
        widths: dict[DataTypeCategory, set[int]] = {c: set() for c in DataTypeCategory}

        for data_type in types:
            if data_type.name in by_name:
                msg = f"Duplicate data type name: {data_type.name}"
                raise ValueError(msg)
            by_name[data_type.name] = data_type
            by_width[(data_type.category, data_type.width)] = data_type
            if data_type.width is not None:
                widths[data_type.category].add(data_type.width)

        # Float widths are fixed per name: only float32 is reachable by a
        # width suffix, double never is.
        widths[DataTypeCategory.FLOAT].discard(64)

        self._by_name = MappingProxyType(by_name)
        self._by_width = MappingProxyType(by_width)
        self._widths = MappingProxyType(
            {category: tuple(sorted(ws)) for category, ws in widths.items()}
        )

    def __iter__(self) -> Iterator[DataType]:
        return iter(self._by_name.values())

    def __len__(self) -> int:
        return len(self._by_name)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            return item in self._by_name
        if isinstance(item, DataType):
            return self._by_name.get(item.name) == item
        return False

    @property
    def names(self) -> tuple[str, ...]:
        """Canonical names of all registered types, in registration order."""
        return tuple(self._by_name)

    def resolve(self, name: str) -> DataType | None:
        """Look up a data type by canonical name.

        Args:
            name: Type name such as ``"int8"`` or ``"double"``

        Returns:
            The registered DataType, or None if the name is unknown
        """
        return self._by_name.get(name)

    def canonical_name(self, data_type: DataType) -> str:
        """Return the name under which ``data_type`` resolves.

        Exact inverse of :meth:`resolve`.

        Raises:
            ValueError: If the data type is not registered
        """
        if data_type not in self:
            msg = f"Data type {data_type!r} is not registered"
            raise ValueError(msg)
        return data_type.name

    def lookup(self, category: DataTypeCategory, width: int | None) -> DataType | None:
        """Find the type with the given category and width."""
        return self._by_width.get((category, width))

    def valid_widths(self, category: DataTypeCategory) -> tuple[int, ...]:
        """Ascending widths a literal suffix may select for ``category``.

        Float is degenerate: its only suffix-selectable width is 32.
        """
        return self._widths[category]

    def validate_width(self, category: DataTypeCategory, width: int | None) -> bool:
        """Check a requested suffix width.

        Args:
            category: Category selected by the suffix letter
            width: Requested width, or None for a bare suffix

        Returns:
            True if the width may be written as a literal suffix
        """
        if width is None:
            return True
        return width in self._widths[category]

    @staticmethod
    def can_implicitly_cast(source: DataType, target: DataType) -> bool:
        """Check whether ``source`` widens into ``target`` without a cast.

        Integers widen into a wider integer of the same signedness or into
        any float; floats widen only into a wider float.
        """
        if source.is_signed_integer:
            return (
                target.is_signed_integer and target.bit_size >= source.bit_size
            ) or target.is_floating_point
        if source.is_unsigned_integer:
            return (
                target.is_unsigned_integer and target.bit_size >= source.bit_size
            ) or target.is_floating_point
        return target.is_floating_point and target.bit_size >= source.bit_size

    def binary_expression_result(self, left: DataType, right: DataType) -> DataType | None:
        """Infer the result type of a binary expression.

        Returns:
            ``left`` if both sides agree or ``right`` widens into it,
            ``right`` if ``left`` widens into it, otherwise None
        """
        if left.category is right.category and left.width == right.width:
            return left
        if self.can_implicitly_cast(right, left):
            return left
        if self.can_implicitly_cast(left, right):
            return right
        return None


DEFAULT_REGISTRY = DataTypeRegistry()
