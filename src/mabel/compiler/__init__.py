"""Compiler-level type information shared by the lexer and later stages."""

from .data_type import (
    BUILTIN_TYPES,
    DEFAULT_REGISTRY,
    DOUBLE,
    FLOAT32,
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
    DataType,
    DataTypeRegistry,
)

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
