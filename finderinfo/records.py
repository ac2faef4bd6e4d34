"""FinderInfo records, as stored in the com.apple.FinderInfo extended attribute.

HFS+ is big-endian, so every number in these records is too. APFS keeps the
same layout for the attribute.

References:
- https://developer.apple.com/library/archive/technotes/tn1150.html#FinderInfo
"""
from __future__ import annotations

import logging
from typing import List, Union

from finderinfo.blocks import Block
from finderinfo.fields import BlockField, FlagsField, Int16_BE, Int32_BE, UInt16_BE
from finderinfo.flags import ExtendedFinderFlags, FinderFlags
from finderinfo.types import OSTypeField, Point, Rect

logger = logging.getLogger( __name__ )

#: Size of a complete record, in bytes.
FINDERINFO_SIZE = 32


class FileInfo( Block ):
    """File information. Supersedes the classic FInfo structure."""

    #: File type.
    file_type =             OSTypeField( 0x00 )
    #: Signature of the application that created the file.
    file_creator =          OSTypeField( 0x04 )
    finder_flags =          FlagsField( FinderFlags, 0x08 )
    #: Location of the file's icon, in coordinates local to the window.
    location =              BlockField( Point, 0x0a )
    #: Window in which the file's icon appears; only meaningful to the Finder.
    reserved_field =        UInt16_BE( 0x0e )


class ExtendedFileInfo( Block ):
    """Extended file information. Supersedes the classic FXInfo structure."""

    reserved1 =             Int16_BE( 0x00, count=4 )
    extended_finder_flags = FlagsField( ExtendedFinderFlags, 0x08 )
    reserved2 =             Int16_BE( 0x0a )
    #: If the user moves the file onto the desktop, the directory ID of the
    #: folder it was moved from.
    put_away_folder_id =    Int32_BE( 0x0c )

    def get_repr_values( self ) -> List[str]:
        values = super().get_repr_values()
        if self.reserved1 == [0, 0, 0, 0] and self.reserved2 == 0:
            values = [x for x in values if x not in ("reserved1", "reserved2")]
        return values


class FinderInfoFile( Block ):
    file_info =             BlockField( FileInfo, 0x00 )
    extended_file_info =    BlockField( ExtendedFileInfo, 0x10 )


class FolderInfo( Block ):
    """Directory information. Supersedes the classic DInfo structure."""

    #: Rectangle for the window the Finder displays when the folder is opened.
    window_bounds =         BlockField( Rect, 0x00 )
    finder_flags =          FlagsField( FinderFlags, 0x08 )
    #: Location of the folder in the parent window.
    location =              BlockField( Point, 0x0a )
    reserved_field =        UInt16_BE( 0x0e )

    def get_repr_values( self ) -> List[str]:
        values = super().get_repr_values()
        if self.reserved_field == 0:
            values.remove( "reserved_field" )
        return values


class ExtendedFolderInfo( Block ):
    """Extended directory information. Supersedes the classic DXInfo structure."""

    #: Scroll position within the Finder window. The Finder doesn't
    #: necessarily save this straight away.
    scroll_position =       BlockField( Point, 0x00 )
    reserved1 =             Int32_BE( 0x04 )
    extended_finder_flags = FlagsField( ExtendedFinderFlags, 0x08 )
    reserved2 =             Int16_BE( 0x0a )
    #: If the user moves the folder onto the desktop, the directory ID of the
    #: folder it was moved from.
    put_away_folder_id =    Int32_BE( 0x0c )

    def get_repr_values( self ) -> List[str]:
        values = super().get_repr_values()
        if self.reserved1 == 0 and self.reserved2 == 0:
            values = [x for x in values if x not in ("reserved1", "reserved2")]
        return values


class FinderInfoFolder( Block ):
    folder_info =           BlockField( FolderInfo, 0x00 )
    extended_folder_info =  BlockField( ExtendedFolderInfo, 0x10 )


FinderInfo = Union[FinderInfoFile, FinderInfoFolder]


def decode( buffer: bytes, is_directory: bool = False, **kwargs ) -> FinderInfo:
    """Decode a raw record.

    buffer
        Record data. Must be at least FINDERINFO_SIZE bytes.

    is_directory
        Decode as a FinderInfoFolder instead of a FinderInfoFile.

    Raises TruncatedInputError if the buffer is too short.
    """
    klass = FinderInfoFolder if is_directory else FinderInfoFile
    return klass( buffer, **kwargs )


def parse_hex( source: str, is_directory: bool = False, **kwargs ) -> FinderInfo:
    """Decode a record written as a hexadecimal string.

    Whitespace in the source is ignored. Raises ValueError if the string
    isn't valid hexadecimal.
    """
    source = "".join( source.split() )
    try:
        buffer = bytes.fromhex( source )
    except ValueError as e:
        raise ValueError( f"Invalid hexadecimal string: {e}" ) from e
    logger.debug( f"Parsed {len( buffer )} bytes from hex string" )
    return decode( buffer, is_directory, **kwargs )


def to_hex( record: FinderInfo ) -> str:
    """Encode a record as a hexadecimal string."""
    return record.export_data().hex()
