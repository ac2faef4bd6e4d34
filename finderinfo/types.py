"""Primitive QuickDraw and File Manager types used inside FinderInfo records."""
from __future__ import annotations

from typing import Optional

from finderinfo.blocks import Block
from finderinfo.fields import Bytes, Int16_BE


class OSType( bytes ):
    """Four-character code used for file types and creator signatures.

    Compares equal to any byte string with the same contents. The text form
    is only for display; codes that aren't valid UTF-8 still load and save
    unchanged.
    """

    def __new__( cls, value: bytes = b"\x00\x00\x00\x00" ):
        if isinstance( value, str ):
            value = value.encode( "utf8" )
        result = super().__new__( cls, value )
        if len( result ) != 4:
            raise ValueError( f"OSType must be exactly 4 bytes, not {len( result )}" )
        return result

    @property
    def text( self ) -> Optional[str]:
        """The code as a string, or None if the bytes aren't valid UTF-8."""
        try:
            return self.decode( "utf8" )
        except UnicodeDecodeError:
            return None

    def __repr__( self ) -> str:
        text = self.text
        if text is None:
            return f"<invalid OSType: 0x{self.hex()}>"
        return repr( text )

    __str__ = __repr__


SYMLINK_FILE_TYPE = OSType( b"slnk" )
SYMLINK_CREATOR = OSType( b"rhap" )


class OSTypeField( Bytes ):
    def __init__( self, offset: Optional[int] = None, *, default: bytes = b"\x00\x00\x00\x00" ):
        super().__init__( offset, length=4, klass=OSType, default=default )


class Point( Block ):
    v = Int16_BE( 0x00 )
    h = Int16_BE( 0x02 )


class Rect( Block ):
    top =       Int16_BE( 0x00 )
    left =      Int16_BE( 0x02 )
    bottom =    Int16_BE( 0x04 )
    right =     Int16_BE( 0x06 )
