##############################################################################
# Copyright (c) TableRecord Project developers. See top-level LICENSE file
# for dates and other details. No copyright assignment is required to
# contribute to TableRecord.
##############################################################################

"""
Field-to-column mapping for entities.

An entity is a dataclass. Its persisted columns are its dataclass fields, in
declaration order, minus:

- fields whose name starts with an underscore,
- the embedded `TableRecord` holding persistence state,
- fields declared with `column(persist=False)`.

The mapping is derived once per entity class and cached. The same ordered
`FieldMap` backs both the column lists used for reads and the value lists used
for writes, so positional parameters always line up with their columns.
"""

import json
import logging
import types
from dataclasses import Field, field, fields, is_dataclass
from datetime import datetime
from functools import lru_cache
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type, Union, get_args, get_origin, get_type_hints

from tablerecord.exceptions import FieldMappingError, RowScanError
from tablerecord.utils import is_valid_identifier


LOG = logging.getLogger(__name__)

COLUMN_KEY = "tablerecord.column"
PERSIST_KEY = "tablerecord.persist"
UNION_TYPES = (Union, getattr(types, "UnionType", Union))


def column(name: str = None, persist: bool = True, **kwargs) -> Field:
    """
    Declare a dataclass field with column options. Fields default to None
    unless a `default` or `default_factory` is given.

    Args:
        name: The column name, if it differs from the attribute name.
        persist: If False the field is never read from or written to the database.
        **kwargs: Passed through to `dataclasses.field`.

    Returns:
        A dataclass field.
    """
    if "default" not in kwargs and "default_factory" not in kwargs:
        kwargs["default"] = None
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[COLUMN_KEY] = name
    metadata[PERSIST_KEY] = persist
    return field(metadata=metadata, **kwargs)


def unwrap_optional(py_type: Any) -> Any:
    """
    Strip `Optional[...]` from a type hint.

    Args:
        py_type: A type hint.

    Returns:
        The wrapped type for `Optional[X]`, otherwise `py_type` unchanged.
    """
    if get_origin(py_type) in UNION_TYPES:
        args = [arg for arg in get_args(py_type) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return py_type


def base_type(py_type: Any) -> Any:
    """
    Reduce a type hint to the class used for conversions, e.g.
    `Optional[List[str]]` -> `list`.

    Args:
        py_type: A type hint.

    Returns:
        The origin class of the hint.
    """
    py_type = unwrap_optional(py_type)
    return get_origin(py_type) or py_type


class FieldAccessor:
    """
    Reads and writes one mapped field of an entity, converting between the
    field's Python type and the value stored in the database.

    Attributes:
        attribute (str): The dataclass attribute name.
        column (str): The database column name.
        py_type (Any): The declared type hint of the attribute.
    """

    def __init__(self, attribute: str, column_name: str, py_type: Any):
        self.attribute: str = attribute
        self.column: str = column_name
        self.py_type: Any = py_type
        self._base_type: Any = base_type(py_type)

    def __repr__(self) -> str:
        return f"FieldAccessor(attribute={self.attribute!r}, column={self.column!r}, py_type={self.py_type!r})"

    def to_db(self, value: Any) -> Any:
        """
        Convert an attribute value to the value bound in a statement.

        Args:
            value: The attribute value.

        Returns:
            A value the driver can bind.
        """
        if value is None:
            return None
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, datetime):
            return value.isoformat()
        if isinstance(value, set):
            # Explicitly mark this as a set so it can be restored on load
            return json.dumps({"__set__": sorted(value, key=repr)})
        if isinstance(value, (list, dict)):
            return json.dumps(value)
        return value

    def from_db(self, value: Any) -> Any:
        """
        Convert a value read from the database to the attribute's type.

        Args:
            value: The raw column value.

        Returns:
            The converted value.

        Raises:
            RowScanError: If the value can't be converted.
        """
        if value is None:
            return None

        target = self._base_type
        try:
            if target is bool:
                return bool(int(value))
            if target is int:
                if isinstance(value, float) and not value.is_integer():
                    raise ValueError(f"{value!r} is not an integral value")
                return int(value)
            if target is float:
                return float(value)
            if target is str:
                return value if isinstance(value, str) else str(value)
            if target is datetime:
                return value if isinstance(value, datetime) else datetime.fromisoformat(value)
            if target in (list, dict, set):
                loaded = json.loads(value) if isinstance(value, (str, bytes)) else value
                if target is set:
                    loaded = set(loaded["__set__"] if isinstance(loaded, dict) else loaded)
                if not isinstance(loaded, target):
                    raise TypeError(f"expected {target.__name__}, got {type(loaded).__name__}")
                return loaded
        except (TypeError, ValueError, KeyError) as exc:
            raise RowScanError(
                f"Cannot convert value {value!r} of column '{self.column}' to {self.py_type!r}: {exc}"
            ) from exc

        return value

    def get(self, entity: Any) -> Any:
        """
        Read the attribute from `entity` as a database value.

        Args:
            entity: The entity to read from.

        Returns:
            The converted attribute value.
        """
        return self.to_db(getattr(entity, self.attribute))

    def set(self, entity: Any, value: Any):
        """
        Convert `value` and assign it to the attribute on `entity`.

        Args:
            entity: The entity to write to.
            value: The raw column value.
        """
        setattr(entity, self.attribute, self.from_db(value))


class FieldMap:
    """
    The ordered column-to-accessor mapping of an entity class.

    Attributes:
        entity_class (Type): The entity class the map was derived from.
        accessors (Dict[str, FieldAccessor]): Column name to accessor, in column order.
    """

    def __init__(self, entity_class: Type, accessors: Dict[str, FieldAccessor]):
        self.entity_class: Type = entity_class
        self.accessors: Dict[str, FieldAccessor] = accessors

    def __repr__(self) -> str:
        return f"FieldMap({self.entity_class.__name__}, columns={self.columns})"

    def __contains__(self, column_name: str) -> bool:
        return column_name in self.accessors

    def __len__(self) -> int:
        return len(self.accessors)

    @property
    def columns(self) -> List[str]:
        """The column names, in order."""
        return list(self.accessors)

    def get(self, column_name: str) -> Optional[FieldAccessor]:
        """
        Look up the accessor for a column.

        Args:
            column_name: The column name.

        Returns:
            The accessor, or None if the column isn't mapped.
        """
        return self.accessors.get(column_name)

    def primary_key(self, name: str) -> FieldAccessor:
        """
        Get the accessor of the primary-key column.

        Args:
            name: The declared primary-key name (column or attribute name).

        Returns:
            The accessor of the primary key.

        Raises:
            FieldMappingError: If no mapped field corresponds to `name`.
        """
        accessor = self.accessors.get(name)
        if accessor is None:
            accessor = next((acc for acc in self.accessors.values() if acc.attribute == name), None)
        if accessor is None:
            raise FieldMappingError(
                f"{self.entity_class.__name__} has no field for primary key '{name}'. Mapped columns: {self.columns}"
            )
        return accessor

    def values(self, entity: Any, exclude: Sequence[str] = ()) -> List[Any]:
        """
        Read the database values of `entity` in column order.

        Args:
            entity: The entity to read from.
            exclude: Column names to leave out.

        Returns:
            A list of values.
        """
        return [accessor.get(entity) for col, accessor in self.accessors.items() if col not in exclude]


def _is_record_state(field_obj: Field, py_type: Any) -> bool:
    """Check whether a field holds the embedded persistence state, by type hint or by default factory."""
    from tablerecord.record.table_record import TableRecord  # pylint: disable=import-outside-toplevel

    factory = field_obj.default_factory
    if isinstance(factory, type) and issubclass(factory, TableRecord):
        return True
    py_type = unwrap_optional(py_type)
    return isinstance(py_type, type) and issubclass(py_type, TableRecord)


def _resolve_type_hints(entity_class: Type) -> Dict[str, Any]:
    """
    Resolve the type hints of an entity class, including string annotations.

    Args:
        entity_class: A dataclass type.

    Returns:
        A mapping of attribute name to resolved type hint.

    Raises:
        FieldMappingError: If an annotation names something that can't be resolved
            from the module the class was defined in.
    """
    try:
        return get_type_hints(entity_class)
    except (NameError, TypeError) as exc:
        raise FieldMappingError(
            f"Can't resolve the type hints of {entity_class.__name__}: {exc}. "
            "Annotations must name types importable from the entity's module."
        ) from exc


@lru_cache(maxsize=None)
def _build_field_map(entity_class: Type) -> FieldMap:
    """
    Derive the field map of an entity class. Cached per class.

    Args:
        entity_class: A dataclass type.

    Returns:
        The class's field map.
    """
    if not is_dataclass(entity_class):
        raise FieldMappingError(f"{entity_class.__name__} is not a dataclass and can't be mapped to a table.")

    hints = _resolve_type_hints(entity_class)

    accessors: Dict[str, FieldAccessor] = {}
    for field_obj in fields(entity_class):
        py_type = hints.get(field_obj.name, field_obj.type)
        if field_obj.name.startswith("_") or _is_record_state(field_obj, py_type):
            continue
        if not field_obj.metadata.get(PERSIST_KEY, True):
            continue

        column_name = field_obj.metadata.get(COLUMN_KEY) or field_obj.name
        if not is_valid_identifier(column_name):
            raise FieldMappingError(f"'{column_name}' on {entity_class.__name__} is not a valid column name.")
        if column_name in accessors:
            raise FieldMappingError(f"Column '{column_name}' is mapped twice on {entity_class.__name__}.")
        accessors[column_name] = FieldAccessor(field_obj.name, column_name, py_type)

    if not accessors:
        raise FieldMappingError(f"{entity_class.__name__} has no persisted fields.")

    LOG.debug(f"Derived field map for {entity_class.__name__}: {list(accessors)}")
    return FieldMap(entity_class, accessors)


def get_field_map(entity: Any) -> FieldMap:
    """
    Get the field map for an entity or entity class.

    Args:
        entity: An entity instance or class.

    Returns:
        The cached field map of the entity's class.

    Raises:
        FieldMappingError: If the entity isn't a dataclass.
    """
    entity_class = entity if isinstance(entity, type) else type(entity)
    return _build_field_map(entity_class)


def get_field_mapper(entity: Any) -> Tuple[List[str], Dict[str, FieldAccessor]]:
    """
    Get the ordered column names of an entity and the reverse mapping from
    column name to a settable accessor.

    Args:
        entity: An entity instance or class.

    Returns:
        A tuple of (column names, column-to-accessor mapping).
    """
    field_map = get_field_map(entity)
    return field_map.columns, dict(field_map.accessors)


def get_fields_value_no_primary(entity: Any) -> List[Any]:
    """
    Get the values to write on insert or update: every mapped column except
    the primary key, in column order.

    Args:
        entity: A `TableRecordInterface` instance.

    Returns:
        A list of database values.
    """
    field_map = get_field_map(entity)
    primary = field_map.primary_key(entity.get_primary_key_name())
    return field_map.values(entity, exclude=(primary.column,))


def get_columns_no_primary(entity: Any) -> List[str]:
    """
    Get the mapped columns of an entity except the primary key, in the same
    order as `get_fields_value_no_primary`.

    Args:
        entity: A `TableRecordInterface` instance.

    Returns:
        A list of column names.
    """
    field_map = get_field_map(entity)
    primary = field_map.primary_key(entity.get_primary_key_name())
    return [col for col in field_map.columns if col != primary.column]


def all_field(entity: Any) -> str:
    """
    Get every mapped column of an entity joined for a SELECT list.

    Args:
        entity: An entity instance or class.

    Returns:
        A comma-separated column list.
    """
    return ", ".join(get_field_map(entity).columns)
