"""Finder flag bitfields and label colours.

References:
- https://developer.apple.com/library/archive/technotes/tn1150.html#FinderInfo
"""
from __future__ import annotations

import enum
from typing import List, Optional, Tuple

# Finder flag constants
#: Unused and reserved in System 7; set to 0.
IS_ON_DESK = 0x0001
#: Three bits of colour coding.
COLOR = 0x000e
#: The file is an application that can be executed by multiple users simultaneously.
#: Defined only for applications; otherwise, set to 0.
IS_SHARED = 0x0040
#: The file contains no 'INIT' resources; set to 0. Reserved for directories; set to 0.
HAS_NO_INITS = 0x0080
#: The Finder has recorded information from the file's bundle resource into the
#: desktop database and given the file or folder a position on the desktop.
HAS_BEEN_INITED = 0x0100
#: The file or directory contains a customised icon.
HAS_CUSTOM_ICON = 0x0400
#: For a file, the file is a stationery pad. Reserved for directories.
IS_STATIONERY = 0x0800
#: The file or directory can't be renamed from the Finder, and the icon cannot be changed.
NAME_LOCKED = 0x1000
#: For a file, the file contains a bundle resource. For a directory, the
#: directory is a file package (though not all packages set this bit).
HAS_BUNDLE = 0x2000
#: The file or directory is invisible from the Finder and from the Navigation
#: Services dialogs.
IS_INVISIBLE = 0x4000
#: For a file, the file is an alias file. Reserved for directories.
IS_ALIAS = 0x8000

# Extended Finder flag constants
#: If set, the other extended flags are ignored.
EXTENDED_FLAGS_ARE_INVALID = 0x8000
#: The file or folder has a badge resource.
EXTENDED_FLAG_HAS_CUSTOM_BADGE = 0x0100
#: The file contains a routing info resource.
EXTENDED_FLAG_HAS_ROUTING_INFO = 0x0004


class LabelColor( enum.IntEnum ):
    """Finder label colour. Values are the raw contents of the COLOR bits."""

    Gray = 0x02
    Green = 0x04
    Purple = 0x06
    Blue = 0x08
    Yellow = 0x0a
    Red = 0x0c
    Orange = 0x0e

    @classmethod
    def from_raw_bits( cls, bits: int ) -> Optional[LabelColor]:
        """Return the colour for the masked COLOR bits, or None if there isn't one."""
        try:
            return cls( bits )
        except ValueError:
            return None

    @staticmethod
    def to_raw_bits( color: Optional[LabelColor] ) -> int:
        """Return the COLOR bits for a colour; None maps to 0."""
        if color is None:
            return 0
        return LabelColor( color ).value

    @staticmethod
    def to_str( color: LabelColor ) -> str:
        return LabelColor( color ).name

    @classmethod
    def from_str( cls, name: str ) -> Optional[LabelColor]:
        """Look up a colour by its exact name. Case sensitive."""
        if not isinstance( name, str ):
            return None
        return cls.__members__.get( name )


class _Flags:
    _mask_names: Tuple[Tuple[int, str], ...] = ()

    def __init__( self, raw: int = 0 ):
        if type( raw ) != int:
            raise TypeError( f"{self.__class__.__name__} expects an int, not {type( raw )}" )
        if raw not in range( 0, 1 << 16 ):
            raise ValueError( f"{self.__class__.__name__} must be a 16-bit value, not {raw}" )
        self._raw = raw

    def __int__( self ) -> int:
        return self._raw

    __index__ = __int__

    def __eq__( self, other ) -> bool:
        if isinstance( other, _Flags ):
            return type( self ) == type( other ) and self._raw == other._raw
        if isinstance( other, int ) and not isinstance( other, bool ):
            return self._raw == other
        return NotImplemented

    __hash__ = None

    def _test( self, mask: int ) -> bool:
        return self._raw & mask != 0

    def names( self ) -> List[str]:
        """Names of the flags that are set, in a fixed order."""
        return [name for mask, name in self._mask_names if self._test( mask )]

    def __repr__( self ) -> str:
        return f"<{self.__class__.__name__}: raw=0x{self._raw:04x}, flags=[{', '.join( self.names() )}]>"

    __str__ = __repr__


class FinderFlags( _Flags ):
    """Finder flags for a file or folder."""

    _mask_names = (
        (IS_SHARED, "kIsShared"),
        (HAS_NO_INITS, "kHasNoINITs"),
        (HAS_BEEN_INITED, "kHasBeenInited"),
        (HAS_CUSTOM_ICON, "kHasCustomIcon"),
        (IS_STATIONERY, "kIsStationery"),
        (NAME_LOCKED, "kNameLocked"),
        (HAS_BUNDLE, "kHasBundle"),
        (IS_INVISIBLE, "kIsInvisible"),
        (IS_ALIAS, "kIsAlias"),
    )

    def color( self ) -> Optional[LabelColor]:
        return LabelColor.from_raw_bits( self._raw & COLOR )

    def set_color( self, color: Optional[LabelColor] ) -> None:
        """Replace the label colour, leaving every other bit alone."""
        bits = LabelColor.to_raw_bits( color )
        self._raw = (self._raw & ~COLOR & 0xffff) | bits

    def is_on_desk( self ) -> bool:
        return self._test( IS_ON_DESK )

    def is_shared( self ) -> bool:
        return self._test( IS_SHARED )

    def has_no_inits( self ) -> bool:
        return self._test( HAS_NO_INITS )

    def has_been_inited( self ) -> bool:
        return self._test( HAS_BEEN_INITED )

    def has_custom_icon( self ) -> bool:
        return self._test( HAS_CUSTOM_ICON )

    def set_has_custom_icon( self, value: bool ) -> None:
        if value:
            self._raw |= HAS_CUSTOM_ICON
        else:
            self._raw &= ~HAS_CUSTOM_ICON & 0xffff

    def is_stationery( self ) -> bool:
        return self._test( IS_STATIONERY )

    def name_locked( self ) -> bool:
        return self._test( NAME_LOCKED )

    def has_bundle( self ) -> bool:
        return self._test( HAS_BUNDLE )

    def is_invisible( self ) -> bool:
        return self._test( IS_INVISIBLE )

    def is_alias( self ) -> bool:
        return self._test( IS_ALIAS )

    def names( self ) -> List[str]:
        color = self.color()
        prefix = [color.name] if color is not None else []
        return prefix + super().names()


class ExtendedFinderFlags( _Flags ):
    """Extended Finder flags. Read-only; if are_invalid() is set, ignore the rest."""

    _mask_names = (
        (EXTENDED_FLAGS_ARE_INVALID, "kExtendedFlagsAreInvalid"),
        (EXTENDED_FLAG_HAS_CUSTOM_BADGE, "kExtendedFlagHasCustomBadge"),
        (EXTENDED_FLAG_HAS_ROUTING_INFO, "kExtendedFlagHasRoutingInfo"),
    )

    def are_invalid( self ) -> bool:
        return self._test( EXTENDED_FLAGS_ARE_INVALID )

    def has_custom_badge( self ) -> bool:
        return self._test( EXTENDED_FLAG_HAS_CUSTOM_BADGE )

    def has_routing_info( self ) -> bool:
        return self._test( EXTENDED_FLAG_HAS_ROUTING_INFO )
