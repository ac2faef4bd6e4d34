"""General utility functions for inspecting FinderInfo records."""
from __future__ import annotations

import logging
from typing import (
    Any,
    Iterator,
    List,
    Optional,
    Tuple,
)

logger = logging.getLogger( __name__ )

from finderinfo.common import is_bytes
from finderinfo.flags import ExtendedFinderFlags, FinderFlags

FLAG_TYPES = (FinderFlags, ExtendedFinderFlags)


def enable_logging( level: str | int = "WARNING" ) -> None:
    """Enable sending logs to stderr. Useful for shell sessions.

    level
        Logging threshold, as defined in the logging module of the Python
        standard library. Defaults to 'WARNING'.
    """
    log = logging.getLogger( "finderinfo" )
    log.setLevel( level )
    for handler in log.handlers:
        if getattr( handler, "_finderinfo", False ):
            handler.setLevel( level )
            return
    out = logging.StreamHandler()
    out.setLevel( level )
    form = logging.Formatter( "[%(levelname)s] %(name)s - %(message)s" )
    out.setFormatter( form )
    out._finderinfo = True
    log.addHandler( out )


def pformat_iter( source: Any, prefix: Optional[str] = None, indent: int = 4 ) -> Iterator[str]:
    """Return an iterator that renders an object tree as indented lines.

    source
        Block (or plain value) to render.

    prefix
        Label for the top line (default: none).

    indent
        Number of spaces per nesting level.
    """
    label = f"{prefix}: " if prefix else ""
    if hasattr( source, "get_repr_values" ):  # Block
        yield f"{label}{source.__class__.__name__} {{"
        for name in source.get_repr_values():
            for line in pformat_iter( getattr( source, name ), prefix=name, indent=indent ):
                yield " " * indent + line
        yield "}"
    elif isinstance( source, list ):
        yield f"{label}[{', '.join( str( x ) for x in source )}]"
    elif is_bytes( source ):
        yield f"{label}{source!r}"
    else:
        yield f"{label}{source}"


def pformat( source: Any, prefix: Optional[str] = None, indent: int = 4 ) -> str:
    """Render an object tree as an indented multi-line string.

    source
        Block (or plain value) to render.

    prefix
        Label for the top line (default: none).

    indent
        Number of spaces per nesting level.
    """
    return "\n".join( pformat_iter( source, prefix, indent ) )


def pprint( source: Any, prefix: Optional[str] = None, indent: int = 4 ) -> None:
    """Print an object tree as indented lines."""
    for line in pformat_iter( source, prefix, indent ):
        print( line )


def objdiff_iter(
    source1: Any, source2: Any, prefix: str = "source", depth: Optional[int] = None
) -> Iterator[Tuple[str, Any, Any]]:
    """Return an iterator that finds differences between two records.

    Yields tuples of (path, old value, new value). Missing list elements are None.

    source1
        The first source.

    source2
        The second source.

    prefix
        The name of the base element to display.

    depth
        Maximum number of levels to traverse.
    """
    if depth is not None:
        depth -= 1

    if hasattr( source1, "serialised" ) and type( source1 ) == type( source2 ):
        fields1 = source1.serialised[1]
        fields2 = source2.serialised[1]
        if fields1 == fields2:
            return
        if depth is not None and depth <= 0:
            yield (prefix, source1, source2)
            return
        for (name, value1), (_, value2) in zip( fields1, fields2 ):
            if value1 != value2:
                yield from objdiff_iter(
                    getattr( source1, name ),
                    getattr( source2, name ),
                    prefix=f"{prefix}.{name}",
                    depth=depth,
                )
    elif isinstance( source1, list ) and isinstance( source2, list ):
        for i in range( max( len( source1 ), len( source2 ) ) ):
            value1 = source1[i] if i < len( source1 ) else None
            value2 = source2[i] if i < len( source2 ) else None
            if value1 != value2:
                yield (f"{prefix}[{i}]", value1, value2)
    elif source1 != source2:
        yield (prefix, source1, source2)


def objdiff(
    source1: Any, source2: Any, prefix: str = "source", depth: Optional[int] = None
) -> List[Tuple[str, Any, Any]]:
    """Find differences between two records.

    source1
        The first source.

    source2
        The second source.

    prefix
        The name of the base element to display.

    depth
        Maximum number of levels to traverse.
    """
    return list( objdiff_iter( source1, source2, prefix, depth ) )


def changed_flags( old: Any, new: Any ) -> List[str]:
    """Names of the flags cleared (prefixed with -) then set (prefixed with +) between two flag values."""
    before = old.names()
    after = new.names()
    return [f"-{x}" for x in before if x not in after] + [f"+{x}" for x in after if x not in before]


def _render( value: Any ) -> str:
    return repr( value ) if is_bytes( value ) else str( value )


def objdiffdump_iter(
    source1: Any, source2: Any, prefix: str = "source", depth: Optional[int] = None
) -> Iterator[str]:
    """Return an iterator that renders the differences between two records.

    Changed flag fields get an extra "~" line naming the flags that were
    cleared or set.

    source1
        First source object

    source2
        Second source object

    prefix
        The name of the base element to display.

    depth
        Maximum number of levels to traverse.
    """
    for path, old, new in objdiff_iter( source1, source2, prefix, depth ):
        if old is not None:
            yield f"- {path}: {_render( old )}"
        if new is not None:
            yield f"+ {path}: {_render( new )}"
        if isinstance( old, FLAG_TYPES ) and type( old ) == type( new ):
            changes = changed_flags( old, new )
            if changes:
                yield f"~ {path}: {' '.join( changes )}"


def objdiffdump(
    source1: Any, source2: Any, prefix: str = "source", depth: Optional[int] = None
) -> bool:
    """Print the differences between two records.

    Returns True if the records are the same.
    """
    same = True
    for line in objdiffdump_iter( source1, source2, prefix, depth ):
        print( line )
        same = False
    return same
