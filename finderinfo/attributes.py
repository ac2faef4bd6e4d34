"""Read and write FinderInfo records stored in extended attributes."""
from __future__ import annotations

import errno
import logging
import os
from typing import Tuple

from finderinfo.fields import ParseError, TruncatedInputError
from finderinfo.records import FINDERINFO_SIZE, FinderInfo, FinderInfoFile, decode
from finderinfo.types import OSType

logger = logging.getLogger( __name__ )

XATTR_FINDERINFO_NAME = "com.apple.FinderInfo"

# macOS reports a missing attribute as ENOATTR, Linux as ENODATA
MISSING_ATTRIBUTE_ERRNOS = {getattr( errno, "ENOATTR", 93 ), errno.ENODATA}

_EMPTY = b"\x00" * FINDERINFO_SIZE


def _xattr():
    # only import when needed; the codec works without it
    import xattr

    return xattr


def read_raw( path: str ) -> bytes:
    """Return the raw FinderInfo attribute for a path.

    A missing attribute reads as a record of null bytes.
    """
    xattr = _xattr()
    try:
        data = xattr.getxattr( path, XATTR_FINDERINFO_NAME )
    except OSError as e:
        if e.errno in MISSING_ATTRIBUTE_ERRNOS:
            logger.debug( f"{path}: no {XATTR_FINDERINFO_NAME} attribute" )
            return _EMPTY
        raise
    if len( data ) < FINDERINFO_SIZE:
        raise TruncatedInputError(
            f"{path}: was expecting {FINDERINFO_SIZE} bytes, only found {len( data )}!"
        )
    if len( data ) > FINDERINFO_SIZE:
        raise ParseError(
            f"{path}: was expecting {FINDERINFO_SIZE} bytes, found {len( data )}!"
        )
    return data


def write_raw( path: str, data: bytes ) -> None:
    """Set the raw FinderInfo attribute for a path."""
    if len( data ) != FINDERINFO_SIZE:
        raise ValueError( f"FinderInfo must be {FINDERINFO_SIZE} bytes, not {len( data )}" )
    xattr = _xattr()
    xattr.setxattr( path, XATTR_FINDERINFO_NAME, bytes( data ) )


def read_from_path( path: str ) -> FinderInfo:
    """Read the FinderInfo record for a path.

    Directories decode as FinderInfoFolder, everything else as FinderInfoFile.
    """
    data = read_raw( path )
    return decode( data, is_directory=os.path.isdir( path ) )


def write_to_path( path: str, record: FinderInfo ) -> None:
    """Encode a FinderInfo record and store it on a path."""
    write_raw( path, record.export_data() )


def set_file_type( path: str, value: str | bytes ) -> Tuple[OSType, OSType]:
    """Change the file type stored in a file's FinderInfo.

    Falls back to an empty record if the existing one can't be read.
    Returns a tuple of the old and new file types.

    Raises IsADirectoryError if the path is a directory.
    """
    if isinstance( value, str ):
        value = value.encode( "utf8" )
    if len( value ) != 4:
        raise ValueError( f"file type {value!r} must be 4 bytes" )
    new_type = OSType( value )

    if os.path.isdir( path ):
        raise IsADirectoryError( errno.EISDIR, "attempted to set filetype on a directory", path )
    try:
        record = read_from_path( path )
    except (OSError, ParseError) as e:
        logger.warning( f"{path}: couldn't read existing FinderInfo ({e}), starting from empty" )
        record = FinderInfoFile()

    assert isinstance( record, FinderInfoFile )
    old_type = record.file_info.file_type
    logger.info( f"{path}: changing file type from {old_type!r} to {new_type!r}" )
    record.file_info.file_type = new_type
    write_to_path( path, record )
    return old_type, new_type
