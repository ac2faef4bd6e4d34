"""Conversion between Python numbers and fixed-width big-endian byte strings."""
from __future__ import annotations

import struct
from typing import Dict, List, Callable, Tuple, Type
from typing_extensions import Literal

NumberType = Type[int]

SignedEncoding = Literal["signed", "unsigned"]
EndianEncoding = Literal["big"]
NumberEncoding = Tuple[NumberType, int, SignedEncoding, EndianEncoding]


RAW_TYPE_NAME: Dict[NumberEncoding, str] = {
    (int, 2, "signed", "big"): "int16_be",
    (int, 4, "signed", "big"): "int32_be",
    (int, 2, "unsigned", "big"): "uint16_be",
    (int, 4, "unsigned", "big"): "uint32_be",
}

RAW_TYPE_STRUCT: Dict[Tuple[NumberType, int, SignedEncoding], str] = {
    (int, 2, "unsigned"): "H",
    (int, 2, "signed"): "h",
    (int, 4, "unsigned"): "I",
    (int, 4, "signed"): "i",
}


FROM_RAW_TYPE: Dict[NumberEncoding, Callable[[bytes], int]] = {}
TO_RAW_TYPE: Dict[NumberEncoding, Callable[[int], bytes]] = {}
FROM_RAW_TYPE_ARRAY: Dict[NumberEncoding, Callable[[bytes], List[int]]] = {}
TO_RAW_TYPE_ARRAY: Dict[NumberEncoding, Callable[[List[int]], bytes]] = {}


def get_raw_type_struct(
    format_type: NumberType,
    field_size: int,
    signedness: SignedEncoding,
    endian: EndianEncoding,
    count: int | None = None,
) -> str:
    count_str = count if count is not None else ""
    return f">{count_str}{RAW_TYPE_STRUCT[(format_type, field_size, signedness)]}"


def get_raw_type_description(
    format_type: NumberType,
    field_size: int,
    signedness: SignedEncoding,
    endian: EndianEncoding,
) -> str:
    prefix = "signed " if signedness == "signed" else "unsigned "
    return f"{prefix}{field_size * 8}-bit integer ({endian}-endian)"


def get_range( type_id: NumberEncoding ) -> range:
    """Return the range of Python ints that can be stored in a number encoding."""
    _, field_size, signedness, _ = type_id
    bits = field_size * 8
    if signedness == "signed":
        return range( -(1 << (bits - 1)), 1 << (bits - 1) )
    return range( 0, 1 << bits )


def _from_raw_type( *type_id ) -> Callable[[bytes], int]:
    fmt = get_raw_type_struct( *type_id )
    result: Callable[[bytes], int] = lambda buffer: struct.unpack( fmt, buffer )[0]
    result.__doc__ = f"Convert a {get_raw_type_description( *type_id )} byte string to a Python int."
    return result


def _to_raw_type( *type_id ) -> Callable[[int], bytes]:
    fmt = get_raw_type_struct( *type_id )
    result: Callable[[int], bytes] = lambda value: struct.pack( fmt, value )
    result.__doc__ = f"Convert a Python int to a {get_raw_type_description( *type_id )} byte string."
    return result


def _from_raw_type_array( *type_id ) -> Callable[[bytes], List[int]]:
    field_size = type_id[1]
    result: Callable[[bytes], List[int]] = lambda buffer: list(
        struct.unpack(
            get_raw_type_struct( *type_id, count=len( buffer ) // field_size ),
            buffer,
        )
    )
    result.__doc__ = f"Convert a {get_raw_type_description( *type_id )} byte string to a Python list of ints."
    return result


def _to_raw_type_array( *type_id ) -> Callable[[List[int]], bytes]:
    result: Callable[[List[int]], bytes] = lambda value_list: struct.pack(
        get_raw_type_struct( *type_id, count=len( value_list ) ),
        *value_list,
    )
    result.__doc__ = f"Convert a Python list of ints to a {get_raw_type_description( *type_id )} byte string."
    return result


# autogenerate conversion methods based on struct
for type_id in RAW_TYPE_NAME:
    FROM_RAW_TYPE[type_id] = _from_raw_type( *type_id )
    TO_RAW_TYPE[type_id] = _to_raw_type( *type_id )
    FROM_RAW_TYPE_ARRAY[type_id] = _from_raw_type_array( *type_id )
    TO_RAW_TYPE_ARRAY[type_id] = _to_raw_type_array( *type_id )


def unpack( type_id: NumberEncoding, value: bytes ) -> int:
    return FROM_RAW_TYPE[type_id]( value )


def pack( type_id: NumberEncoding, value: int ) -> bytes:
    return TO_RAW_TYPE[type_id]( value )


def unpack_array( type_id: NumberEncoding, values: bytes ) -> List[int]:
    return FROM_RAW_TYPE_ARRAY[type_id]( values )


def pack_array( type_id: NumberEncoding, values: List[int] ) -> bytes:
    return TO_RAW_TYPE_ARRAY[type_id]( values )
