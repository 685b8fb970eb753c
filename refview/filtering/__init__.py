"""Query language filter engine, independent of any entity kind."""

from .adapter import EntityFilter, FilterStack
from .compiler import CompiledFilter, compile_filter
from .errors import FilterCompileError, FilterError, FilterErrorKind, SourcePos
from .fields import Field, FieldDescriptor, FieldTable, FieldType

__all__ = [
    "CompiledFilter",
    "EntityFilter",
    "Field",
    "FieldDescriptor",
    "FieldTable",
    "FieldType",
    "FilterCompileError",
    "FilterError",
    "FilterErrorKind",
    "FilterStack",
    "SourcePos",
    "compile_filter",
]
