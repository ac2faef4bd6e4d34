import itertools
import mmap
from typing import Union, Any, Tuple

next_position_hint = itertools.count()

Bytes = Union[bytes, bytearray, mmap.mmap, memoryview]

SerialiseType = Tuple[Tuple[str, str], Tuple[Tuple[str, Any], ...]]


def is_bytes( obj: Any ) -> bool:
    """Returns whether obj is an acceptable Python byte string."""
    return isinstance( obj, getattr( Bytes, '__args__' ) )
