"""Definition classes for the fixed-size fields found in FinderInfo records."""
from __future__ import annotations

import logging

logger = logging.getLogger( __name__ )

from typing import (
    Any,
    Callable,
    Optional,
    Sequence,
    Tuple,
    Type,
    TYPE_CHECKING,
)

if TYPE_CHECKING:
    from finderinfo.blocks import Block

from finderinfo import common, encoding


class FieldDefinitionError( Exception ):
    pass


class ParseError( Exception ):
    pass


class TruncatedInputError( ParseError ):
    pass


class FieldValidationError( Exception ):
    pass


class Field( object ):
    def __init__( self, offset: Optional[int] = None, *, default: Any = None ):
        """Base class for Fields.

        offset
            Position of data, relative to the start of the parent block. Defaults to
            the end offset of the previous field.

        default
            Default value to emit in the case of e.g. creating an empty Block.
        """
        self._position_hint = next( common.next_position_hint )
        if offset is not None and offset < 0:
            raise FieldDefinitionError( f"offset must be a non-negative number, not {offset}" )
        self.offset = offset
        self.default = default
        self._name: Optional[str] = None
        self._start_offset: int = 0

    def __repr__( self ):
        desc = f"0x{id( self ):016x}"
        if isinstance( self.repr, str ):
            desc = self.repr
        return f"<{self.__class__.__name__}: {desc}>"

    @property
    def repr( self ) -> Optional[str]:
        """Plaintext summary of the Field."""
        return None

    # Overrides to disable the type checker!
    # Field values are swapped in by FieldDescriptor, the class-level
    # Field object is never returned to Block users.
    def __get__( self, instance: Block, owner: Any ) -> Any:
        ...

    def __set__( self, instance: Block, value: Any ) -> None:
        ...

    def get_fixed_size( self ) -> int:
        """Return the size (in bytes) of the Field's data."""
        raise NotImplementedError()

    def get_default( self, parent: Optional[Block] = None ) -> Any:
        """Return a fresh copy of the Field's default value."""
        return self.default

    def get_from_buffer(
        self, buffer: common.Bytes, offset: int, parent: Optional[Block] = None
    ) -> Tuple[Any, int]:
        """Create a Python object from a byte string, using the field definition.

        Returns a tuple of the new object and the end offset.

        buffer
            Input byte string to process.

        offset
            Start offset of the Field data in the buffer.

        parent
            Parent block object where this Field is defined.
        """
        raise NotImplementedError()

    def update_buffer_with_value(
        self,
        value: Any,
        buffer: bytearray,
        offset: int,
        parent: Optional[Block] = None,
    ) -> int:
        """Write a Python object compatible with this Field to an existing byte array.

        Returns the end offset.

        value
            Python object to convert.

        buffer
            Target byte array to update.

        offset
            Start offset of the Field data in the buffer.

        parent
            Parent block object where this Field is defined.
        """
        raise NotImplementedError()

    def scrub( self, value: Any, parent: Optional[Block] = None ) -> Any:
        """Return the value coerced to the correct type of the field (if necessary).

        Throws FieldValidationError if value can't be coerced.
        """
        return value

    def validate( self, value: Any, parent: Optional[Block] = None ) -> None:
        """Validate that a correctly-typed Python object meets the constraints for the field.

        Throws FieldValidationError if a constraint fails.
        """
        pass

    def serialise( self, value: Any, parent: Optional[Block] = None ) -> Any:
        """Return a value as basic Python types."""
        return value

    def get_path( self, parent: Optional[Block] = None, index: Optional[int] = None ) -> str:
        prefix = parent.get_path() if parent is not None else "<unknown>"
        suffix = f"[{index}]" if index is not None else ""
        return f"{prefix}.{self._name}{suffix}"

    def _get_data(
        self, buffer: common.Bytes, offset: int, size: int, parent: Optional[Block] = None
    ) -> bytes:
        data = bytes( buffer[offset : offset + size] )
        if len( data ) != size:
            raise TruncatedInputError(
                f"{self.get_path( parent )}: was expecting {size} bytes, only found {len( data )}!"
            )
        return data


class NumberField( Field ):
    def __init__(
        self,
        type_id: encoding.NumberEncoding,
        offset: Optional[int] = None,
        *,
        default: int = 0,
        count: Optional[int] = None,
        range: Optional[Sequence[int]] = None,
    ):
        """Base class for numeric value Fields.

        type_id
            Number encoding of the field. (Usually defined by child class)

        offset
            Position of data, relative to the start of the parent block. Defaults to
            the end offset of the previous field.

        default
            Default value to emit in the case of e.g. creating an empty Block.

        count
            Load a fixed number of values. None implies a single value, non-negative
            numbers will return a Python list.

        range
            Restrict allowed values to a list of choices. Used for validation.
        """
        super().__init__( offset, default=default )
        if count is not None and count < 0:
            raise FieldDefinitionError( f"count must be a non-negative number, not {count}" )
        self.type_id = type_id
        self.field_size = type_id[1]
        self.format_range = encoding.get_range( type_id )
        self.count = count
        self.range = range

    def get_fixed_size( self ) -> int:
        if self.count is not None:
            return self.field_size * self.count
        return self.field_size

    def get_default( self, parent=None ):
        if self.count is not None:
            return [self.default] * self.count
        return self.default

    def get_from_buffer( self, buffer, offset, parent=None ):
        size = self.get_fixed_size()
        data = self._get_data( buffer, offset, size, parent )
        if self.count is not None:
            value = encoding.unpack_array( self.type_id, data )
        else:
            value = encoding.unpack( self.type_id, data )
        return value, offset + size

    def update_buffer_with_value( self, value, buffer, offset, parent=None ):
        if self.count is not None:
            data = encoding.pack_array( self.type_id, value )
        else:
            data = encoding.pack( self.type_id, value )
        buffer[offset : offset + len( data )] = data
        return offset + len( data )

    def validate_element( self, element, parent=None, index=None ):
        if type( element ) != int:
            raise FieldValidationError(
                f"{self.get_path( parent, index )}: Expecting type {int}, not {type( element )}"
            )
        if element not in self.format_range:
            raise FieldValidationError(
                f"{self.get_path( parent, index )}: Value {element} not in format range ({self.format_range})"
            )
        if self.range is not None and (element not in self.range):
            raise FieldValidationError(
                f"{self.get_path( parent, index )}: Value {element} not in range ({self.range})"
            )

    def validate( self, value, parent=None ):
        if self.count is None:
            self.validate_element( value, parent )
            return
        if not isinstance( value, list ):
            raise FieldValidationError(
                f"{self.get_path( parent )}: Expecting a list of {self.count} values, not {type( value )}"
            )
        if len( value ) != self.count:
            raise FieldValidationError(
                f"{self.get_path( parent )}: Expecting a list of {self.count} values, not {len( value )}"
            )
        for i, element in enumerate( value ):
            self.validate_element( element, parent, index=i )

    def serialise( self, value, parent=None ):
        if self.count is not None:
            return (("builtins", "list"), tuple( value ))
        return value

    @property
    def repr( self ):
        offset_str = hex( self.offset ) if self.offset is not None else "chain"
        details = f"offset={offset_str}"
        if self.count is not None:
            details += f", count={self.count}"
        if self.default:
            details += f", default={self.default}"
        if self.range:
            details += f", range={self.range}"
        return details


class Int16_BE( NumberField ):
    def __init__( self, offset: Optional[int] = None, **kwargs ):
        super().__init__( (int, 2, "signed", "big"), offset, **kwargs )


class UInt16_BE( NumberField ):
    def __init__( self, offset: Optional[int] = None, **kwargs ):
        super().__init__( (int, 2, "unsigned", "big"), offset, **kwargs )


class Int32_BE( NumberField ):
    def __init__( self, offset: Optional[int] = None, **kwargs ):
        super().__init__( (int, 4, "signed", "big"), offset, **kwargs )


class UInt32_BE( NumberField ):
    def __init__( self, offset: Optional[int] = None, **kwargs ):
        super().__init__( (int, 4, "unsigned", "big"), offset, **kwargs )


class FlagsField( NumberField ):
    def __init__(
        self,
        klass: Callable[[int], Any],
        offset: Optional[int] = None,
        *,
        type_id: encoding.NumberEncoding = (int, 2, "unsigned", "big"),
        default: int = 0,
    ):
        """Field for a packed bitfield, stored as an unsigned number.

        klass
            Wrapper class for the raw value. Must accept the raw number
            in the constructor, and convert back with int().

        offset
            Position of data, relative to the start of the parent block. Defaults to
            the end offset of the previous field.

        type_id
            Number encoding of the raw value. Defaults to an unsigned 16-bit
            big-endian integer.

        default
            Raw value to emit in the case of e.g. creating an empty Block.
        """
        super().__init__( type_id, offset, default=default )
        self.klass = klass

    def get_default( self, parent=None ):
        return self.klass( self.default )

    def get_from_buffer( self, buffer, offset, parent=None ):
        value, end_offset = super().get_from_buffer( buffer, offset, parent )
        return self.klass( value ), end_offset

    def update_buffer_with_value( self, value, buffer, offset, parent=None ):
        return super().update_buffer_with_value( int( value ), buffer, offset, parent )

    def scrub( self, value, parent=None ):
        if isinstance( value, self.klass ):
            return value
        if type( value ) == int:
            if value not in self.format_range:
                raise FieldValidationError(
                    f"{self.get_path( parent )}: Value {value} not in format range ({self.format_range})"
                )
            return self.klass( value )
        raise FieldValidationError(
            f"{self.get_path( parent )}: Expecting {self.klass} or int, not {type( value )}"
        )

    def validate( self, value, parent=None ):
        if not isinstance( value, self.klass ):
            raise FieldValidationError(
                f"{self.get_path( parent )}: Expecting {self.klass}, not {type( value )}"
            )
        super().validate( int( value ), parent )

    def serialise( self, value, parent=None ):
        return int( value )

    @property
    def repr( self ):
        return f"{super().repr}, klass={self.klass.__name__}"


class Bytes( Field ):
    def __init__(
        self,
        offset: Optional[int] = None,
        *,
        length: int,
        klass: Type[bytes] = bytes,
        default: Optional[bytes] = None,
    ):
        """Field for a fixed-length byte string.

        offset
            Position of data, relative to the start of the parent block. Defaults to
            the end offset of the previous field.

        length
            Size of the byte string.

        klass
            Subclass of bytes to wrap the data in. Defaults to bytes.

        default
            Default value to emit in the case of e.g. creating an empty Block.
            Defaults to a string of null bytes.
        """
        if length < 0:
            raise FieldDefinitionError( f"length must be a non-negative number, not {length}" )
        if default is None:
            default = b"\x00" * length
        if len( default ) != length:
            raise FieldDefinitionError( f"default must be {length} bytes long" )
        super().__init__( offset, default=klass( default ) )
        self.length = length
        self.klass = klass

    def get_fixed_size( self ):
        return self.length

    def get_from_buffer( self, buffer, offset, parent=None ):
        data = self._get_data( buffer, offset, self.length, parent )
        return self.klass( data ), offset + self.length

    def update_buffer_with_value( self, value, buffer, offset, parent=None ):
        buffer[offset : offset + self.length] = value
        return offset + self.length

    def scrub( self, value, parent=None ):
        if isinstance( value, self.klass ):
            return value
        if isinstance( value, str ):
            value = value.encode( "utf8" )
        if not common.is_bytes( value ):
            raise FieldValidationError(
                f"{self.get_path( parent )}: Expecting bytes, not {type( value )}"
            )
        try:
            return self.klass( value )
        except ValueError as e:
            raise FieldValidationError( f"{self.get_path( parent )}: {e}" ) from e

    def validate( self, value, parent=None ):
        if not common.is_bytes( value ):
            raise FieldValidationError(
                f"{self.get_path( parent )}: Expecting bytes, not {type( value )}"
            )
        if len( value ) != self.length:
            raise FieldValidationError(
                f"{self.get_path( parent )}: Expecting {self.length} bytes, not {len( value )}"
            )

    def serialise( self, value, parent=None ):
        return bytes( value )

    @property
    def repr( self ):
        offset_str = hex( self.offset ) if self.offset is not None else "chain"
        return f"offset={offset_str}, length={self.length}"


class BlockField( Field ):
    def __init__( self, block_klass: Type[Block], offset: Optional[int] = None ):
        """Field for a nested Block.

        block_klass
            Block class to use.

        offset
            Position of data, relative to the start of the parent block. Defaults to
            the end offset of the previous field.
        """
        super().__init__( offset )
        self.block_klass = block_klass

    def get_fixed_size( self ):
        return self.block_klass.get_size()

    def _path_hint( self, parent ):
        return f"{parent.get_path()}.{self._name}" if parent is not None else None

    def get_default( self, parent=None ):
        return self.block_klass( parent=parent, path_hint=self._path_hint( parent ) )

    def get_from_buffer( self, buffer, offset, parent=None ):
        size = self.get_fixed_size()
        block = self.block_klass(
            buffer[offset : offset + size],
            parent=parent,
            path_hint=self._path_hint( parent ),
        )
        return block, offset + size

    def update_buffer_with_value( self, value, buffer, offset, parent=None ):
        data = value.export_data()
        buffer[offset : offset + len( data )] = data
        return offset + len( data )

    def validate( self, value, parent=None ):
        if not isinstance( value, self.block_klass ):
            raise FieldValidationError(
                f"{self.get_path( parent )}: Expecting block class {self.block_klass}, not {type( value )}"
            )
        value.validate()

    def serialise( self, value, parent=None ):
        return value.serialised

    @property
    def repr( self ):
        offset_str = hex( self.offset ) if self.offset is not None else "chain"
        return f"{self.block_klass.__name__}, offset={offset_str}"
