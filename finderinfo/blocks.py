"""Definition classes for data blocks."""
from __future__ import annotations

import logging
from collections import OrderedDict
from typing import TYPE_CHECKING, Any, BinaryIO, List

logger = logging.getLogger( __name__ )

if TYPE_CHECKING:
    from finderinfo.fields import Field

from finderinfo import common


class FieldDescriptor:
    def __init__( self, name: str ):
        """Attribute wrapper class for Fields.

        name
            Name of the Field.
        """
        self.name = name

    def __get__( self, instance: Block, cls: type[Block] ) -> Any:
        try:
            if instance is None:
                return cls._fields[self.name]
            return instance._field_data[self.name]
        except KeyError:
            raise AttributeError( self.name )

    def __set__( self, instance: Block, value: Any ):
        if instance is None:
            return
        instance._field_data[self.name] = value
        return

    def __delete__( self, instance ):
        raise AttributeError( "can't delete Field" )


class BlockMeta( type ):
    def __new__( mcs, name, bases, attrs ):
        """Metaclass for Block which detects and wraps attributes from the class definition."""
        from finderinfo.fields import Field, FieldDefinitionError

        fields: OrderedDict[str, Field] = OrderedDict()

        # add base class attributes to structs
        for base in bases:
            if hasattr( base, "_fields" ):
                fields.update( base._fields )

        # class attributes are ordered, but sort by creation order to be safe
        new_fields = sorted(
            ((k, v) for k, v in attrs.items() if isinstance( v, Field )),
            key=lambda i: i[1]._position_hint,
        )
        for key, value in new_fields:
            fields[key] = value

        # lay out the fields; everything is fixed size so offsets are static
        size = 0
        previous = None
        for key, field in fields.items():
            start = size if field.offset is None else field.offset
            if start < size:
                raise FieldDefinitionError(
                    f"{name}.{key}: offset 0x{start:x} overlaps the end of {name}.{previous} (0x{size:x})"
                )
            field._name = key
            field._start_offset = start
            size = start + field.get_fixed_size()
            previous = key

        for key in fields:
            attrs[key] = FieldDescriptor( key )

        attrs["_fields"] = fields
        attrs["_size"] = size

        return type.__new__( mcs, name, bases, attrs )


class Block( metaclass=BlockMeta ):
    _parent: Block | None = None
    _repr_values: list[str] | None = None

    _fields: OrderedDict[str, Field]
    _size: int
    _field_data: dict[str, Any]

    def __init__(
        self,
        source_data: common.Bytes | Block | dict[str, Any] | None = None,
        *,
        parent: Block | None = None,
        cache_bytes: bool = False,
        path_hint: str | None = None,
    ):
        """Base class for Blocks.

        source_data
            Source data to construct Block with. Can be a byte string, dictionary
            of attribute: value pairs, or another Block object.

        parent
            Parent Block object where this Block is defined.

        cache_bytes
            Cache the bytes equivalent of the Block in source_bytes. Useful for
            debugging the loading procedure. Defaults to False.

        path_hint
            Cache a string containing the path of the current Block, relative
            to the root.
        """
        self._field_data = {}
        if parent is not None:
            assert isinstance( parent, Block )
        self._parent = parent
        self._path_hint = path_hint
        if self._path_hint is None:
            self._path_hint = f"<{self.__class__.__name__}>"

        self.source_bytes: bytes | None = None
        if cache_bytes and common.is_bytes( source_data ):
            self.source_bytes = bytes( source_data )

        if isinstance( source_data, Block ):
            self.clone_data( source_data )
        elif isinstance( source_data, dict ):
            # preload defaults, then overwrite with dictionary values
            self.import_data( None )
            self.update_data( source_data )
        else:
            self.import_data( source_data )

    def __repr__( self ) -> str:
        return f"<{self.__class__.__name__}: {self.repr}>"

    def __eq__( self, other: Any ) -> bool:
        if not isinstance( other, Block ):
            return NotImplemented
        return self.serialised == other.serialised

    __hash__ = None

    def get_repr_values( self ) -> List[str]:
        """Return the names of the fields to show in a plaintext summary."""
        if self._repr_values and isinstance( self._repr_values, list ):
            return [x for x in self._repr_values if x in self._fields]
        return list( self._fields.keys() )

    @property
    def repr( self ) -> str:
        """Plaintext summary of the Block."""
        values: list[str] = []
        for name in self.get_repr_values():
            value = self._field_data[name]
            if isinstance( value, list ):
                output = f"[{', '.join( str( x ) for x in value )}]"
            else:
                output = repr( value ) if common.is_bytes( value ) else str( value )
            values.append( f"{name}={output}" )
        return ", ".join( values )

    @property
    def serialised( self ) -> common.SerialiseType:
        """Tuple containing the contents of the Block."""
        klass = self.__class__
        return (
            (klass.__module__, klass.__name__),
            tuple(
                (name, field.serialise( self._field_data[name], parent=self ))
                for name, field in klass._fields.items()
            ),
        )

    def clone_data( self, source: Block ) -> None:
        """Clone data from another Block.

        source
            Block instance to copy from.
        """
        klass = self.__class__
        assert isinstance( source, klass )
        self.import_data( source.export_data() )

    def clone( self ) -> Block:
        """Return a copy of this Block which shares no state with the original."""
        return self.__class__( self, parent=self._parent, path_hint=self._path_hint )

    def update_data( self, source: dict[str, Any] ) -> None:
        """Update data from a dictionary.

        source
            Dictionary of attribute: value pairs.
        """
        assert isinstance( source, dict )
        for attr, value in source.items():
            if attr not in self._fields:
                raise AttributeError(
                    f"{self.__class__.__name__} has no field {attr}"
                )
            setattr( self, attr, value )

    def _import_from_field( self, buffer: common.Bytes, field_name: str ) -> None:
        field = self._fields[field_name]
        self._field_data[field_name], _ = field.get_from_buffer(
            buffer, field._start_offset, parent=self
        )
        if logger.isEnabledFor( logging.DEBUG ):
            logger.debug(
                f"Result for {field_name} [{field}]: {self._field_data[field_name]!r}"
            )

    def import_data( self, raw_buffer: common.Bytes | None ) -> None:
        """Import data from a byte array.

        Fields are read in declaration order; a buffer too short for any
        of them raises TruncatedInputError.

        raw_buffer
            Byte array to import from.
        """
        klass = self.__class__
        if raw_buffer is not None:
            assert common.is_bytes( raw_buffer )

        self._field_data = {}

        if raw_buffer is None:
            for name, field in klass._fields.items():
                self._field_data[name] = field.get_default( parent=self )
            return

        if logger.isEnabledFor( logging.DEBUG ):
            logger.debug(
                f"{self.get_path()}: loading fields from {bytes( raw_buffer[:klass._size] ).hex()}"
            )

        for name in klass._fields:
            self._import_from_field( raw_buffer, name )

        if len( raw_buffer ) > klass._size:
            logger.debug(
                f"{self.get_path()}: ignoring {len( raw_buffer ) - klass._size} trailing bytes"
            )

        # if we have info logging on, check the roundtrip works
        if self._parent is None and logger.isEnabledFor( logging.INFO ):
            test = self.export_data()
            if test != raw_buffer[: len( test )]:
                logger.info(
                    f"{self.__class__.__name__} export produced changed output from import"
                )
        return

    def export_data( self ) -> bytearray:
        """Export data to a byte array."""
        klass = self.__class__

        # prevalidate all data before export, nested Blocks included.
        self.validate()

        output = bytearray( klass._size )

        for name, field in klass._fields.items():
            field.update_buffer_with_value(
                self._field_data[name], output, field._start_offset, parent=self
            )

        return output

    @classmethod
    def read( cls, fp: BinaryIO, **kwargs ) -> Block:
        """Read and import exactly one Block's worth of data from a binary stream.

        fp
            Stream to read from.

        Raises TruncatedInputError if the stream ends early.
        """
        from finderinfo.fields import TruncatedInputError

        size = cls.get_size()
        data = fp.read( size )
        if len( data ) != size:
            raise TruncatedInputError(
                f"<{cls.__name__}>: was expecting {size} bytes, only found {len( data )}!"
            )
        return cls( data, **kwargs )

    def write( self, fp: BinaryIO ) -> int:
        """Export the Block and write it to a binary stream.

        fp
            Stream to write to.

        Errors raised by the stream are passed through unchanged.
        """
        data = self.export_data()
        fp.write( data )
        return len( data )

    def validate( self ) -> None:
        """Coerce and validate all the fields on this Block instance.

        Throws FieldValidationError if a field can't be coerced or fails a constraint.
        """
        for name in self._fields:
            self.scrub_field( name )
            self.validate_field( name )
        return

    @classmethod
    def get_size( cls ) -> int:
        """Get the size (in bytes) of the exported data from this Block class."""
        return cls._size

    def get_field_start_offset( self, field_name: str ) -> int:
        """Return the start offset of where a Field's data is to be stored in the Block."""
        return self._fields[field_name]._start_offset

    def get_field_size( self, field_name: str ) -> int:
        """Return the size of a Field's data (in bytes)."""
        return self._fields[field_name].get_fixed_size()

    def get_field_end_offset( self, field_name: str ) -> int:
        """Return the end offset of a Field's data."""
        return self.get_field_start_offset( field_name ) + self.get_field_size( field_name )

    def get_path( self ) -> str:
        """Return the path of this Block in the current object tree.

        Used for error messages."""
        return self._path_hint if self._path_hint else ""

    def scrub_field( self, field_name: str ) -> Any:
        """Return a Field's data coerced to the correct type (if necessary).

        field_name
            Name of the Field to inspect.

        Throws FieldValidationError if value can't be coerced.
        """
        self._field_data[field_name] = self._fields[field_name].scrub(
            self._field_data[field_name], parent=self
        )
        return self._field_data[field_name]

    def validate_field( self, field_name: str ) -> None:
        """Validate that a correctly-typed Python object meets the constraints for a Field.

        field_name
            Name of the Field to inspect.

        Throws FieldValidationError if a constraint fails.
        """
        return self._fields[field_name].validate(
            self._field_data[field_name], parent=self
        )

