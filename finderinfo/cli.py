from finderinfo import attributes, records, utils
from finderinfo.fields import FieldValidationError, ParseError
from finderinfo.flags import LabelColor
from finderinfo.version import __version__

import argparse
import logging
import sys
logger = logging.getLogger( __name__ )

VERBOSITY = ['WARNING', 'INFO', 'DEBUG']

ARGS_COMMON = {
    ('--verbose', '-v'): dict(
        dest='verbose',
        action='count',
        default=0,
        help='Show more log messages (repeat for debug output)',
    ),
    ('--version', '-V'): dict(
        action='version',
        version='%(prog)s {}'.format( __version__ )
    ),
}

ARGS_KIND = {
    ('--directory', '-d'): dict(
        dest='is_directory',
        action='store_true',
        help='Read FinderInfo as directory',
    ),
    ('--file', '-f'): dict(
        dest='is_directory',
        action='store_false',
        default=False,
        help='Read FinderInfo as file (default)',
    ),
}

ARGS_READ = {
    'path': dict(
        metavar='PATH',
        help='File or directory to inspect',
    ),
}

ARGS_PARSE_HEX = {
    'hex_data': dict(
        metavar='HEX',
        help='FinderInfo record as a hexadecimal string',
    ),
}
ARGS_PARSE_HEX.update( ARGS_KIND )

ARGS_READ_FILETYPE = {
    'path': dict(
        metavar='PATH',
        help='File to inspect',
    ),
}

ARGS_WRITE_FILETYPE = {
    'path': dict(
        metavar='PATH',
        help='File to modify',
    ),
    'value': dict(
        metavar='TYPE',
        help='New four-character file type',
    ),
}

ARGS_DIFF = {
    'hex_data1': dict(
        metavar='HEX1',
        help='FinderInfo record as a hexadecimal string',
    ),
    'hex_data2': dict(
        metavar='HEX2',
        help='FinderInfo record to compare against',
    ),
}
ARGS_DIFF.update( ARGS_KIND )

ARGS_SET_COLOR = {
    'hex_data': dict(
        metavar='HEX',
        help='FinderInfo record as a hexadecimal string',
    ),
    'color': dict(
        metavar='COLOR',
        choices=[c.name for c in LabelColor] + ['None'],
        help='New label colour ({}, or None to clear)'.format( ', '.join( c.name for c in LabelColor ) ),
    ),
}
ARGS_SET_COLOR.update( ARGS_KIND )


def add_arguments( parser, args ):
    for arg, spec in args.items():
        if isinstance( arg, tuple ):
            parser.add_argument( *arg, **spec )
        else:
            parser.add_argument( arg, **spec )
    return parser


def get_parser( **kwargs ):
    parser = add_arguments( argparse.ArgumentParser( **kwargs ), ARGS_COMMON )
    commands = parser.add_subparsers( dest='command', metavar='COMMAND' )
    commands.required = True
    for name, args, handler, description in COMMANDS:
        sub = commands.add_parser( name, help=description, description=description )
        add_arguments( sub, args )
        sub.set_defaults( handler=handler )
    return parser


def cmd_read( raw_args ):
    logger.info( 'Attempting to read FinderInfo from {}'.format( raw_args.path ) )
    finder_info = attributes.read_from_path( raw_args.path )
    utils.pprint( finder_info )


def cmd_parse_hex( raw_args ):
    finder_info = records.parse_hex( raw_args.hex_data, raw_args.is_directory )
    utils.pprint( finder_info )


def cmd_read_filetype( raw_args ):
    logger.info( 'Attempting to read FinderInfo from {}'.format( raw_args.path ) )
    finder_info = attributes.read_from_path( raw_args.path )
    if not isinstance( finder_info, records.FinderInfoFile ):
        raise IsADirectoryError( '{} is a directory, not a file'.format( raw_args.path ) )
    print( 'file type: {!r}'.format( finder_info.file_info.file_type ) )


def cmd_write_filetype( raw_args ):
    old_type, new_type = attributes.set_file_type( raw_args.path, raw_args.value )
    print( 'Original filetype: {!r}'.format( old_type ) )
    print( 'New filetype: {!r}'.format( new_type ) )
    print( 'Successfully wrote FinderInfo!' )


def cmd_diff( raw_args ):
    source1 = records.parse_hex( raw_args.hex_data1, raw_args.is_directory )
    source2 = records.parse_hex( raw_args.hex_data2, raw_args.is_directory )
    if utils.objdiffdump( source1, source2, prefix=source1.__class__.__name__ ):
        print( 'No differences' )


def cmd_set_color( raw_args ):
    finder_info = records.parse_hex( raw_args.hex_data, raw_args.is_directory )
    color = LabelColor.from_str( raw_args.color )
    if isinstance( finder_info, records.FinderInfoFolder ):
        finder_info.folder_info.finder_flags.set_color( color )
    else:
        finder_info.file_info.finder_flags.set_color( color )
    print( records.to_hex( finder_info ) )


COMMANDS = (
    ('read', ARGS_READ, cmd_read, 'Print the FinderInfo stored on a file or directory.'),
    ('parse-hex', ARGS_PARSE_HEX, cmd_parse_hex, 'Print a FinderInfo record given as hexadecimal.'),
    ('read-filetype', ARGS_READ_FILETYPE, cmd_read_filetype, 'Print the file type stored on a file.'),
    ('write-filetype', ARGS_WRITE_FILETYPE, cmd_write_filetype, 'Change the file type stored on a file.'),
    ('diff', ARGS_DIFF, cmd_diff, 'Compare two FinderInfo records given as hexadecimal.'),
    ('set-color', ARGS_SET_COLOR, cmd_set_color, 'Change the label colour of a FinderInfo record given as hexadecimal.'),
)

finderinfo_parser = lambda: get_parser( description='Inspect and modify macOS FinderInfo records.' )


def main( argv=None ):
    parser = finderinfo_parser()
    raw_args = parser.parse_args( argv )
    utils.enable_logging( VERBOSITY[min( raw_args.verbose, len( VERBOSITY ) - 1 )] )

    try:
        raw_args.handler( raw_args )
    except (OSError, ImportError, ParseError, FieldValidationError, ValueError) as e:
        logger.error( '{}'.format( e ) )
        return 1
    return 0


def finderinfo():
    sys.exit( main() )
