"""Shortcut module to import all of the FinderInfo primitives."""

from finderinfo.version import __version__
from finderinfo.fields import FieldDefinitionError, ParseError, TruncatedInputError, \
                            FieldValidationError, Field, NumberField, \
                            Int16_BE, UInt16_BE, Int32_BE, UInt32_BE, \
                            FlagsField, Bytes, BlockField
from finderinfo.blocks import Block
from finderinfo.types import OSType, OSTypeField, Point, Rect, \
                            SYMLINK_FILE_TYPE, SYMLINK_CREATOR
from finderinfo.flags import LabelColor, FinderFlags, ExtendedFinderFlags
from finderinfo.records import FINDERINFO_SIZE, FileInfo, ExtendedFileInfo, \
                            FinderInfoFile, FolderInfo, ExtendedFolderInfo, \
                            FinderInfoFolder, FinderInfo, decode, parse_hex, to_hex
