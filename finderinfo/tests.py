import contextlib
import errno
import io
import os
import random
import tempfile
import unittest
from unittest import mock

from finderinfo import attributes, cli, utils
from finderinfo import models as fi


# FinderInfo xattr with the custom icon bit off.
DEFAULT_FINDERINFO = bytes( 32 )

# FinderInfo xattr with the custom icon bit on.
FINDERINFO_ICON = b'\x00'*8 + b'\x04\x00' + b'\x00'*22

# FinderInfo xattr with label = Blue and the custom icon bit on.
FINDERINFO_BLUE_ICON = b'\x00'*8 + b'\x04\x08' + b'\x00'*22

# FinderInfo xattr with label = Red.
FINDERINFO_RED = b'\x00'*8 + b'\x00\x0c' + b'\x00'*22

# FinderInfo xattr with label = Red and the custom icon bit on.
FINDERINFO_RED_ICON = b'\x00'*8 + b'\x04\x0c' + b'\x00'*22


class TestBlock( unittest.TestCase ):
    class Test( fi.Block ):
        field1 = fi.UInt16_BE( 0x00 )
        field2 = fi.Int32_BE()
        field3 = fi.Int16_BE( 0x08, count=2 )

    def test_chain( self ):
        payload = b'\x12\x34\xff\xff\xff\xfe\x00\x00\x00\x01\x80\x00'
        test = self.Test( payload )
        self.assertEqual( test.field1, 0x1234 )
        self.assertEqual( test.field2, -2 )
        self.assertEqual( test.field3, [1, -0x8000] )
        self.assertEqual( test.get_field_start_offset( 'field2' ), 0x02 )
        self.assertEqual( test.get_field_end_offset( 'field2' ), 0x06 )
        self.assertEqual( test.export_data(), payload )

    def test_sizing( self ):
        self.assertEqual( self.Test.get_size(), 0x0c )
        test = self.Test()
        self.assertEqual( test.export_data(), bytes( 0x0c ) )
        self.assertEqual( test.field3, [0, 0] )

    def test_overlap( self ):
        with self.assertRaises( fi.FieldDefinitionError ):
            class Bad( fi.Block ):
                field1 = fi.UInt32_BE( 0x00 )
                field2 = fi.UInt16_BE( 0x02 )

    def test_truncated( self ):
        payload = b'\x12\x34\xff\xff\xff\xfe\x00\x00\x00\x01\x80'
        with self.assertRaises( fi.TruncatedInputError ) as cm:
            self.Test( payload )
        self.assertIn( 'field3', str( cm.exception ) )
        self.assertIsInstance( cm.exception, fi.ParseError )

    def test_validation( self ):
        test = self.Test()
        test.field1 = 0x10000
        with self.assertRaises( fi.FieldValidationError ):
            test.export_data()

        test = self.Test()
        test.field2 = 'nope'
        with self.assertRaises( fi.FieldValidationError ):
            test.export_data()

        test = self.Test()
        test.field3 = [1]
        with self.assertRaises( fi.FieldValidationError ):
            test.export_data()

    def test_dict( self ):
        test = self.Test( {'field1': 0xabcd} )
        self.assertEqual( test.field2, 0 )
        self.assertEqual( test.export_data()[:2], b'\xab\xcd' )
        with self.assertRaises( AttributeError ):
            self.Test( {'field4': 1} )

    def test_stream( self ):
        payload = b'\x12\x34\xff\xff\xff\xfe\x00\x00\x00\x01\x80\x00extra'
        src = io.BytesIO( payload )
        test = self.Test.read( src )
        self.assertEqual( src.tell(), 0x0c )
        self.assertEqual( test.field3, [1, -0x8000] )

        dest = io.BytesIO()
        self.assertEqual( test.write( dest ), 0x0c )
        self.assertEqual( dest.getvalue(), payload[:0x0c] )

        with self.assertRaises( fi.TruncatedInputError ):
            self.Test.read( io.BytesIO( payload[:5] ) )

    def test_sink_failure( self ):
        class FullDisk( io.RawIOBase ):
            def writable( self ):
                return True

            def write( self, data ):
                raise OSError( errno.ENOSPC, 'No space left on device' )

        with self.assertRaises( OSError ) as cm:
            self.Test().write( FullDisk() )
        self.assertEqual( cm.exception.errno, errno.ENOSPC )

    def test_debug_logging( self ):
        with self.assertLogs( 'finderinfo.blocks', level='DEBUG' ) as cm:
            self.Test( b'\x12\x34\xff\xff\xff\xfe\x00\x00\x00\x01\x80\x00\x99' )
        output = '\n'.join( cm.output )
        self.assertIn( 'Result for field1', output )
        self.assertIn( 'ignoring 1 trailing bytes', output )


class TestOSType( unittest.TestCase ):
    def test_text( self ):
        code = fi.OSType( b'slnk' )
        self.assertEqual( code, fi.SYMLINK_FILE_TYPE )
        self.assertEqual( code, b'slnk' )
        self.assertEqual( code.text, 'slnk' )
        self.assertEqual( repr( code ), "'slnk'" )
        self.assertEqual( fi.OSType( 'rhap' ), fi.SYMLINK_CREATOR )

    def test_invalid_text( self ):
        code = fi.OSType( b'\xff\xfe\x00\x01' )
        self.assertIsNone( code.text )
        self.assertEqual( repr( code ), '<invalid OSType: 0xfffe0001>' )

    def test_length( self ):
        with self.assertRaises( ValueError ):
            fi.OSType( b'abc' )
        with self.assertRaises( ValueError ):
            fi.OSType( b'abcde' )


class TestLabelColor( unittest.TestCase ):
    NAMES = ['Gray', 'Green', 'Purple', 'Blue', 'Yellow', 'Red', 'Orange']

    def test_raw_bits( self ):
        for color in fi.LabelColor:
            self.assertEqual( fi.LabelColor.from_raw_bits( fi.LabelColor.to_raw_bits( color ) ), color )
        self.assertEqual( fi.LabelColor.to_raw_bits( None ), 0 )
        self.assertEqual( fi.LabelColor.to_raw_bits( fi.LabelColor.Blue ), 0x08 )
        self.assertEqual(
            [fi.LabelColor.to_raw_bits( fi.LabelColor.from_str( x ) ) for x in self.NAMES],
            [2, 4, 6, 8, 10, 12, 14],
        )

    def test_invalid_raw_bits( self ):
        for bits in range( 0x100 ):
            if bits in (2, 4, 6, 8, 10, 12, 14):
                self.assertIsNotNone( fi.LabelColor.from_raw_bits( bits ) )
            else:
                self.assertIsNone( fi.LabelColor.from_raw_bits( bits ) )

    def test_names( self ):
        for name in self.NAMES:
            color = fi.LabelColor.from_str( name )
            self.assertIsNotNone( color )
            self.assertEqual( fi.LabelColor.to_str( color ), name )
        self.assertIsNone( fi.LabelColor.from_str( 'gray' ) )
        self.assertIsNone( fi.LabelColor.from_str( 'RED' ) )
        self.assertIsNone( fi.LabelColor.from_str( 'Grey' ) )
        self.assertIsNone( fi.LabelColor.from_str( '' ) )


class TestFinderFlags( unittest.TestCase ):
    def test_raw_identity( self ):
        for raw in range( 0x10000 ):
            self.assertEqual( int( fi.FinderFlags( raw ) ), raw )
        self.assertEqual( int( fi.ExtendedFinderFlags( 0xbeef ) ), 0xbeef )
        with self.assertRaises( ValueError ):
            fi.FinderFlags( 0x10000 )
        with self.assertRaises( ValueError ):
            fi.FinderFlags( -1 )

    def test_accessors( self ):
        flags = fi.FinderFlags( 0x0001 )
        self.assertTrue( flags.is_on_desk() )
        self.assertEqual( flags.names(), [] )

        checks = (
            (0x0040, 'is_shared'),
            (0x0080, 'has_no_inits'),
            (0x0100, 'has_been_inited'),
            (0x0400, 'has_custom_icon'),
            (0x0800, 'is_stationery'),
            (0x1000, 'name_locked'),
            (0x2000, 'has_bundle'),
            (0x4000, 'is_invisible'),
            (0x8000, 'is_alias'),
        )
        for mask, accessor in checks:
            self.assertTrue( getattr( fi.FinderFlags( mask ), accessor )() )
            self.assertFalse( getattr( fi.FinderFlags( 0xffff ^ mask ), accessor )() )

    def test_color_independence( self ):
        for raw in range( 0, 0x10000, 7 ):
            for color in [None] + list( fi.LabelColor ):
                flags = fi.FinderFlags( raw )
                flags.set_color( color )
                self.assertEqual( flags.color(), color )
                self.assertEqual( int( flags ) & ~0x000e, raw & ~0x000e )
                self.assertEqual( flags.has_custom_icon(), bool( raw & 0x0400 ) )

    def test_custom_icon_independence( self ):
        for raw in range( 0, 0x10000, 7 ):
            for value in (True, False):
                flags = fi.FinderFlags( raw )
                flags.set_has_custom_icon( value )
                self.assertEqual( flags.has_custom_icon(), value )
                self.assertEqual( flags.color(), fi.FinderFlags( raw ).color() )
                self.assertEqual( int( flags ) & ~0x0400, raw & ~0x0400 )

    def test_names( self ):
        self.assertEqual( fi.FinderFlags( 0xffff ).names(), [
            'Orange', 'kIsShared', 'kHasNoINITs', 'kHasBeenInited',
            'kHasCustomIcon', 'kIsStationery', 'kNameLocked', 'kHasBundle',
            'kIsInvisible', 'kIsAlias',
        ] )
        self.assertEqual(
            repr( fi.FinderFlags( 0x040c ) ),
            '<FinderFlags: raw=0x040c, flags=[Red, kHasCustomIcon]>',
        )

    def test_extended( self ):
        flags = fi.ExtendedFinderFlags( 0x8104 )
        self.assertTrue( flags.are_invalid() )
        self.assertTrue( flags.has_custom_badge() )
        self.assertTrue( flags.has_routing_info() )
        self.assertEqual( flags.names(), [
            'kExtendedFlagsAreInvalid', 'kExtendedFlagHasCustomBadge',
            'kExtendedFlagHasRoutingInfo',
        ] )
        self.assertFalse( hasattr( flags, 'set_color' ) )
        self.assertEqual( fi.ExtendedFinderFlags( 0 ).names(), [] )

    def test_equality( self ):
        self.assertEqual( fi.FinderFlags( 0x0400 ), fi.FinderFlags( 0x0400 ) )
        self.assertEqual( fi.FinderFlags( 0x0400 ), 0x0400 )
        self.assertNotEqual( fi.FinderFlags( 0x0400 ), fi.ExtendedFinderFlags( 0x0400 ) )
        self.assertNotEqual( fi.FinderFlags( 0x0400 ), fi.FinderFlags( 0x0408 ) )

    def test_unhashable( self ):
        with self.assertRaises( TypeError ):
            hash( fi.FinderFlags( 0x0400 ) )
        with self.assertRaises( TypeError ):
            {fi.ExtendedFinderFlags( 0x8000 ): 'invalid'}

    def test_raw_type( self ):
        for raw in ('12', 3.7, True, None, b'\x04\x00'):
            with self.assertRaises( TypeError ):
                fi.FinderFlags( raw )
            with self.assertRaises( TypeError ):
                fi.ExtendedFinderFlags( raw )

    def test_set_color_invalid( self ):
        for bad in (3, 1, 0x10, 'Red'):
            flags = fi.FinderFlags( 0x040c )
            with self.assertRaises( ValueError ):
                flags.set_color( bad )
            self.assertEqual( int( flags ), 0x040c )
            self.assertEqual( flags.color(), fi.LabelColor.Red )


class TestFinderInfo( unittest.TestCase ):
    def test_sizes( self ):
        self.assertEqual( fi.FileInfo.get_size(), 16 )
        self.assertEqual( fi.ExtendedFileInfo.get_size(), 16 )
        self.assertEqual( fi.FinderInfoFile.get_size(), 32 )
        self.assertEqual( fi.FolderInfo.get_size(), 16 )
        self.assertEqual( fi.ExtendedFolderInfo.get_size(), 16 )
        self.assertEqual( fi.FinderInfoFolder.get_size(), 32 )
        self.assertEqual( fi.Point.get_size(), 4 )
        self.assertEqual( fi.Rect.get_size(), 8 )

    def test_set_get_finderinfo_file( self ):
        finfo = fi.FinderInfoFile( DEFAULT_FINDERINFO )
        self.assertFalse( finfo.file_info.finder_flags.has_custom_icon() )
        self.assertIsNone( finfo.file_info.finder_flags.color() )
        self.assertEqual( finfo.export_data(), DEFAULT_FINDERINFO )

        finfo.file_info.finder_flags.set_color( fi.LabelColor.Blue )
        finfo.file_info.finder_flags.set_has_custom_icon( True )
        self.assertEqual( finfo.export_data(), FINDERINFO_BLUE_ICON )

        finfo = fi.FinderInfoFile( FINDERINFO_RED_ICON )
        self.assertTrue( finfo.file_info.finder_flags.has_custom_icon() )
        self.assertEqual( finfo.file_info.finder_flags.color(), fi.LabelColor.Red )

    def test_set_get_finderinfo_folder( self ):
        finfo = fi.FinderInfoFolder( DEFAULT_FINDERINFO )
        self.assertFalse( finfo.folder_info.finder_flags.has_custom_icon() )
        self.assertIsNone( finfo.folder_info.finder_flags.color() )
        self.assertEqual( finfo.export_data(), DEFAULT_FINDERINFO )

        finfo.folder_info.finder_flags.set_has_custom_icon( True )
        self.assertEqual( finfo.export_data(), FINDERINFO_ICON )

        finfo.folder_info.finder_flags.set_color( fi.LabelColor.Blue )
        self.assertEqual( finfo.export_data(), FINDERINFO_BLUE_ICON )

        finfo = fi.FinderInfoFolder( FINDERINFO_RED )
        self.assertFalse( finfo.folder_info.finder_flags.has_custom_icon() )
        self.assertEqual( finfo.folder_info.finder_flags.color(), fi.LabelColor.Red )

    def test_default( self ):
        self.assertEqual( fi.FinderInfoFile().export_data(), DEFAULT_FINDERINFO )
        self.assertEqual( fi.FinderInfoFolder().export_data(), DEFAULT_FINDERINFO )
        self.assertEqual( fi.FinderInfoFile(), fi.FinderInfoFile( DEFAULT_FINDERINFO ) )

    def test_file_layout( self ):
        finfo = fi.FinderInfoFile( bytes( range( 32 ) ) )
        info = finfo.file_info
        self.assertEqual( info.file_type, b'\x00\x01\x02\x03' )
        self.assertEqual( info.file_creator, b'\x04\x05\x06\x07' )
        self.assertEqual( info.finder_flags, 0x0809 )
        self.assertEqual( info.location.v, 0x0a0b )
        self.assertEqual( info.location.h, 0x0c0d )
        self.assertEqual( info.reserved_field, 0x0e0f )
        ext = finfo.extended_file_info
        self.assertEqual( ext.reserved1, [0x1011, 0x1213, 0x1415, 0x1617] )
        self.assertEqual( ext.extended_finder_flags, 0x1819 )
        self.assertEqual( ext.reserved2, 0x1a1b )
        self.assertEqual( ext.put_away_folder_id, 0x1c1d1e1f )

    def test_folder_layout( self ):
        finfo = fi.FinderInfoFolder( bytes( range( 32 ) ) )
        info = finfo.folder_info
        self.assertEqual( info.window_bounds.top, 0x0001 )
        self.assertEqual( info.window_bounds.left, 0x0203 )
        self.assertEqual( info.window_bounds.bottom, 0x0405 )
        self.assertEqual( info.window_bounds.right, 0x0607 )
        self.assertEqual( info.finder_flags, 0x0809 )
        self.assertEqual( info.location.v, 0x0a0b )
        self.assertEqual( info.location.h, 0x0c0d )
        self.assertEqual( info.reserved_field, 0x0e0f )
        ext = finfo.extended_folder_info
        self.assertEqual( ext.scroll_position.v, 0x1011 )
        self.assertEqual( ext.scroll_position.h, 0x1213 )
        self.assertEqual( ext.reserved1, 0x14151617 )
        self.assertEqual( ext.extended_finder_flags, 0x1819 )
        self.assertEqual( ext.reserved2, 0x1a1b )
        self.assertEqual( ext.put_away_folder_id, 0x1c1d1e1f )

    def test_signedness( self ):
        finfo = fi.FinderInfoFile( b'\xff' * 32 )
        self.assertEqual( finfo.file_info.location.v, -1 )
        self.assertEqual( finfo.file_info.reserved_field, 0xffff )
        self.assertEqual( finfo.extended_file_info.reserved1, [-1, -1, -1, -1] )
        self.assertEqual( finfo.extended_file_info.put_away_folder_id, -1 )
        self.assertEqual( finfo.file_info.finder_flags.color(), fi.LabelColor.Orange )
        self.assertTrue( finfo.extended_file_info.extended_finder_flags.are_invalid() )

    def test_roundtrip( self ):
        rng = random.Random( 0xf1 )
        samples = [bytes( 32 ), b'\xff' * 32, bytes( range( 32 ) )]
        samples += [rng.randbytes( 32 ) for _ in range( 200 )]
        for payload in samples:
            self.assertEqual( fi.FinderInfoFile( payload ).export_data(), payload )
            self.assertEqual( fi.FinderInfoFolder( payload ).export_data(), payload )

    def test_truncated( self ):
        for size in (0, 1, 8, 15, 16, 31):
            with self.assertRaises( fi.TruncatedInputError ):
                fi.FinderInfoFile( bytes( size ) )
            with self.assertRaises( fi.TruncatedInputError ):
                fi.FinderInfoFolder( bytes( size ) )
        with self.assertRaises( fi.TruncatedInputError ) as cm:
            fi.FinderInfoFile( bytes( 20 ) )
        self.assertIn( '<FinderInfoFile>.extended_file_info', str( cm.exception ) )
        with self.assertRaises( fi.TruncatedInputError ):
            fi.FinderInfoFolder.read( io.BytesIO( bytes( 31 ) ) )

    def test_trailing_bytes( self ):
        finfo = fi.FinderInfoFile( FINDERINFO_RED_ICON + b'\xff' * 8 )
        self.assertEqual( finfo.export_data(), FINDERINFO_RED_ICON )

    def test_assign( self ):
        finfo = fi.FinderInfoFile()
        finfo.file_info.file_type = b'TEXT'
        finfo.file_info.file_creator = 'ttxt'
        finfo.file_info.finder_flags = 0x0400
        finfo.file_info.location.v = -10
        finfo.extended_file_info.put_away_folder_id = 42
        data = finfo.export_data()
        self.assertEqual( data[0:8], b'TEXTttxt' )
        self.assertEqual( data[8:10], b'\x04\x00' )
        self.assertEqual( data[10:12], b'\xff\xf6' )
        self.assertEqual( data[28:32], b'\x00\x00\x00\x2a' )
        self.assertIsInstance( finfo.file_info.file_creator, fi.OSType )
        self.assertIsInstance( finfo.file_info.finder_flags, fi.FinderFlags )

    def test_assign_folder( self ):
        finfo = fi.FinderInfoFolder()
        finfo.folder_info.window_bounds.right = 640
        finfo.folder_info.finder_flags = 0x4000
        finfo.extended_folder_info.extended_finder_flags = 0x8000
        finfo.extended_folder_info.scroll_position.h = -1
        data = finfo.export_data()
        self.assertEqual( data[6:8], b'\x02\x80' )
        self.assertEqual( data[8:10], b'\x40\x00' )
        self.assertEqual( data[18:20], b'\xff\xff' )
        self.assertEqual( data[24:26], b'\x80\x00' )
        self.assertTrue( finfo.folder_info.finder_flags.is_invisible() )
        self.assertTrue( finfo.extended_folder_info.extended_finder_flags.are_invalid() )

    def test_validate_nested( self ):
        finfo = fi.FinderInfoFile()
        finfo.file_info.file_creator = 'ttxt'
        finfo.file_info.finder_flags = 0x000c
        finfo.validate()
        self.assertEqual( finfo.file_info.file_creator, b'ttxt' )
        self.assertEqual( finfo.file_info.finder_flags.color(), fi.LabelColor.Red )

    def test_assign_invalid( self ):
        finfo = fi.FinderInfoFile()
        finfo.file_info.file_type = b'TXT'
        with self.assertRaises( fi.FieldValidationError ):
            finfo.export_data()

        finfo = fi.FinderInfoFile()
        finfo.file_info.finder_flags = 0x10000
        with self.assertRaises( fi.FieldValidationError ):
            finfo.export_data()

        finfo = fi.FinderInfoFolder()
        finfo.extended_folder_info.reserved2 = 0x8000
        with self.assertRaises( fi.FieldValidationError ):
            finfo.export_data()

    def test_clone( self ):
        finfo = fi.FinderInfoFile( FINDERINFO_RED )
        copy = finfo.clone()
        self.assertEqual( copy, finfo )
        copy.file_info.finder_flags.set_has_custom_icon( True )
        copy.file_info.location.h = 5
        self.assertFalse( finfo.file_info.finder_flags.has_custom_icon() )
        self.assertEqual( finfo.file_info.location.h, 0 )
        self.assertNotEqual( copy, finfo )

        other = fi.FinderInfoFile()
        self.assertIsNot( other.file_info, fi.FinderInfoFile().file_info )
        self.assertIsNot( other.file_info.finder_flags, fi.FinderInfoFile().file_info.finder_flags )

    def test_kinds_differ( self ):
        self.assertNotEqual( fi.FinderInfoFile( FINDERINFO_RED ), fi.FinderInfoFolder( FINDERINFO_RED ) )

    def test_cache_bytes( self ):
        finfo = fi.FinderInfoFile( FINDERINFO_RED, cache_bytes=True )
        self.assertEqual( finfo.source_bytes, FINDERINFO_RED )
        self.assertIsNone( fi.FinderInfoFile( FINDERINFO_RED ).source_bytes )

    def test_repr_reserved( self ):
        ext = fi.ExtendedFileInfo()
        self.assertNotIn( 'reserved1', ext.repr )
        self.assertNotIn( 'reserved2', ext.repr )
        self.assertIn( 'put_away_folder_id=0', ext.repr )
        ext.reserved2 = 5
        self.assertIn( 'reserved1=[0, 0, 0, 0]', ext.repr )
        self.assertIn( 'reserved2=5', ext.repr )

        ext = fi.ExtendedFolderInfo()
        self.assertNotIn( 'reserved', ext.repr )
        ext.reserved1 = -1
        self.assertIn( 'reserved1=-1', ext.repr )
        self.assertIn( 'reserved2=0', ext.repr )

        info = fi.FolderInfo()
        self.assertNotIn( 'reserved_field', info.repr )
        info.reserved_field = 7
        self.assertIn( 'reserved_field=7', info.repr )

        self.assertIn( 'reserved_field=0', fi.FileInfo().repr )

    def test_pformat( self ):
        finfo = fi.FinderInfoFile( FINDERINFO_RED_ICON )
        finfo.file_info.file_type = fi.SYMLINK_FILE_TYPE
        text = utils.pformat( finfo )
        lines = text.split( '\n' )
        self.assertEqual( lines[0], 'FinderInfoFile {' )
        self.assertEqual( lines[1], '    file_info: FileInfo {' )
        self.assertEqual( lines[2], "        file_type: 'slnk'" )
        self.assertIn( '        finder_flags: <FinderFlags: raw=0x040c, flags=[Red, kHasCustomIcon]>', lines )
        self.assertIn( '            v: 0', lines )
        self.assertEqual( lines[-1], '}' )
        self.assertNotIn( 'reserved1', text )

    def test_decode( self ):
        self.assertIsInstance( fi.decode( FINDERINFO_RED ), fi.FinderInfoFile )
        self.assertIsInstance( fi.decode( FINDERINFO_RED, is_directory=True ), fi.FinderInfoFolder )

    def test_hex( self ):
        finfo = fi.parse_hex( FINDERINFO_BLUE_ICON.hex() )
        self.assertEqual( finfo.file_info.finder_flags.color(), fi.LabelColor.Blue )
        self.assertEqual( fi.to_hex( finfo ), FINDERINFO_BLUE_ICON.hex() )

        spaced = ' '.join( FINDERINFO_RED.hex()[i:i+8] for i in range( 0, 64, 8 ) )
        finfo = fi.parse_hex( spaced, is_directory=True )
        self.assertEqual( finfo.folder_info.finder_flags.color(), fi.LabelColor.Red )

        with self.assertRaises( ValueError ):
            fi.parse_hex( 'zz' * 32 )
        with self.assertRaises( fi.TruncatedInputError ):
            fi.parse_hex( '00' * 31 )


class TestObjDiff( unittest.TestCase ):
    def test_same( self ):
        self.assertEqual( utils.objdiff( fi.FinderInfoFile(), fi.FinderInfoFile() ), [] )

    def test_fields( self ):
        source1 = fi.FinderInfoFile()
        source2 = fi.FinderInfoFile( FINDERINFO_BLUE_ICON )
        source2.file_info.file_type = b'TEXT'
        source2.extended_file_info.reserved1[2] = 9
        diffs = utils.objdiff( source1, source2 )
        self.assertEqual( [x[0] for x in diffs], [
            'source.file_info.file_type',
            'source.file_info.finder_flags',
            'source.extended_file_info.reserved1[2]',
        ] )
        self.assertEqual( diffs[0][2], b'TEXT' )
        self.assertEqual( diffs[1][1], 0 )
        self.assertEqual( diffs[1][2], 0x0408 )
        self.assertEqual( diffs[2][1:], (0, 9) )

    def test_dump_flags( self ):
        source1 = fi.FinderInfoFile( FINDERINFO_RED_ICON )
        source2 = fi.FinderInfoFile( FINDERINFO_BLUE_ICON )
        source2.extended_file_info.extended_finder_flags = fi.ExtendedFinderFlags( 0x0100 )
        lines = list( utils.objdiffdump_iter( source1, source2 ) )
        self.assertEqual( lines, [
            '- source.file_info.finder_flags: <FinderFlags: raw=0x040c, flags=[Red, kHasCustomIcon]>',
            '+ source.file_info.finder_flags: <FinderFlags: raw=0x0408, flags=[Blue, kHasCustomIcon]>',
            '~ source.file_info.finder_flags: -Red +Blue',
            '- source.extended_file_info.extended_finder_flags: <ExtendedFinderFlags: raw=0x0000, flags=[]>',
            '+ source.extended_file_info.extended_finder_flags: <ExtendedFinderFlags: raw=0x0100, flags=[kExtendedFlagHasCustomBadge]>',
            '~ source.extended_file_info.extended_finder_flags: +kExtendedFlagHasCustomBadge',
        ] )

    def test_dump_values( self ):
        source1 = fi.FinderInfoFile()
        source2 = fi.FinderInfoFile()
        source2.file_info.file_type = fi.SYMLINK_FILE_TYPE
        source2.file_info.finder_flags = fi.FinderFlags( 0x0001 )
        lines = list( utils.objdiffdump_iter( source1, source2, prefix='rec' ) )
        self.assertEqual( lines, [
            "- rec.file_info.file_type: '\\x00\\x00\\x00\\x00'",
            "+ rec.file_info.file_type: 'slnk'",
            '- rec.file_info.finder_flags: <FinderFlags: raw=0x0000, flags=[]>',
            '+ rec.file_info.finder_flags: <FinderFlags: raw=0x0001, flags=[]>',
        ] )

    def test_depth( self ):
        source1 = fi.FinderInfoFile()
        source2 = fi.FinderInfoFile( FINDERINFO_RED )
        diffs = utils.objdiff( source1, source2, depth=2 )
        self.assertEqual( len( diffs ), 1 )
        self.assertEqual( diffs[0][0], 'source.file_info' )


class FakeXattr:
    def __init__( self ):
        self.store = {}

    def getxattr( self, path, name ):
        try:
            return self.store[(path, name)]
        except KeyError:
            raise OSError( errno.ENODATA, 'No data available' )

    def setxattr( self, path, name, value ):
        self.store[(path, name)] = bytes( value )


class XattrTestCase( unittest.TestCase ):
    def setUp( self ):
        self.tempdir = tempfile.TemporaryDirectory()
        self.addCleanup( self.tempdir.cleanup )
        self.dir_path = self.tempdir.name
        self.file_path = os.path.join( self.tempdir.name, 'example.txt' )
        with open( self.file_path, 'wb' ) as f:
            f.write( b'hello' )

        self.xattr = FakeXattr()
        patcher = mock.patch( 'finderinfo.attributes._xattr', return_value=self.xattr )
        patcher.start()
        self.addCleanup( patcher.stop )

    def set_raw( self, path, data ):
        self.xattr.store[(path, attributes.XATTR_FINDERINFO_NAME)] = data

    def get_raw( self, path ):
        return self.xattr.store[(path, attributes.XATTR_FINDERINFO_NAME)]


class TestAttributes( XattrTestCase ):
    def test_missing( self ):
        self.assertEqual( attributes.read_raw( self.file_path ), DEFAULT_FINDERINFO )
        finfo = attributes.read_from_path( self.file_path )
        self.assertIsInstance( finfo, fi.FinderInfoFile )

    def test_read_kind( self ):
        self.set_raw( self.dir_path, FINDERINFO_RED )
        finfo = attributes.read_from_path( self.dir_path )
        self.assertIsInstance( finfo, fi.FinderInfoFolder )
        self.assertEqual( finfo.folder_info.finder_flags.color(), fi.LabelColor.Red )

    def test_bad_size( self ):
        self.set_raw( self.file_path, bytes( 10 ) )
        with self.assertRaises( fi.TruncatedInputError ):
            attributes.read_raw( self.file_path )
        self.set_raw( self.file_path, bytes( 40 ) )
        with self.assertRaises( fi.ParseError ):
            attributes.read_raw( self.file_path )

    def test_other_errors( self ):
        def denied( path, name ):
            raise PermissionError( errno.EACCES, 'Permission denied' )

        self.xattr.getxattr = denied
        with self.assertRaises( PermissionError ):
            attributes.read_raw( self.file_path )

    def test_write( self ):
        finfo = fi.FinderInfoFile()
        finfo.file_info.finder_flags.set_color( fi.LabelColor.Blue )
        finfo.file_info.finder_flags.set_has_custom_icon( True )
        attributes.write_to_path( self.file_path, finfo )
        self.assertEqual( self.get_raw( self.file_path ), FINDERINFO_BLUE_ICON )
        with self.assertRaises( ValueError ):
            attributes.write_raw( self.file_path, bytes( 31 ) )

    def test_set_file_type( self ):
        self.set_raw( self.file_path, FINDERINFO_RED )
        old, new = attributes.set_file_type( self.file_path, 'TEXT' )
        self.assertEqual( old, bytes( 4 ) )
        self.assertEqual( new, b'TEXT' )
        self.assertEqual( self.get_raw( self.file_path ), b'TEXT' + FINDERINFO_RED[4:] )

    def test_set_file_type_unreadable( self ):
        self.set_raw( self.file_path, bytes( 3 ) )
        with self.assertLogs( 'finderinfo.attributes', level='WARNING' ):
            attributes.set_file_type( self.file_path, b'slnk' )
        self.assertEqual( self.get_raw( self.file_path ), b'slnk' + bytes( 28 ) )

    def test_set_file_type_errors( self ):
        with self.assertRaises( IsADirectoryError ):
            attributes.set_file_type( self.dir_path, 'TEXT' )
        with self.assertRaises( ValueError ):
            attributes.set_file_type( self.file_path, 'TEXTS' )


class TestCli( XattrTestCase ):
    def run_cli( self, *argv ):
        output = io.StringIO()
        with contextlib.redirect_stdout( output ):
            result = cli.main( list( argv ) )
        return result, output.getvalue()

    def test_parse_hex( self ):
        result, output = self.run_cli( 'parse-hex', '-f', FINDERINFO_RED_ICON.hex() )
        self.assertEqual( result, 0 )
        self.assertTrue( output.startswith( 'FinderInfoFile {' ) )
        self.assertIn( 'flags=[Red, kHasCustomIcon]', output )

        result, output = self.run_cli( 'parse-hex', '-d', FINDERINFO_RED.hex() )
        self.assertEqual( result, 0 )
        self.assertTrue( output.startswith( 'FinderInfoFolder {' ) )
        self.assertIn( 'window_bounds: Rect {', output )

    def test_parse_hex_errors( self ):
        result, output = self.run_cli( 'parse-hex', '-f', 'not hex' )
        self.assertEqual( result, 1 )
        result, output = self.run_cli( 'parse-hex', '-f', '0000' )
        self.assertEqual( result, 1 )
        self.assertEqual( output, '' )

    def test_set_color( self ):
        result, output = self.run_cli( 'set-color', DEFAULT_FINDERINFO.hex(), 'Blue' )
        self.assertEqual( result, 0 )
        self.assertEqual( output.strip(), ('00' * 9) + '08' + ('00' * 22) )

        result, output = self.run_cli( 'set-color', '-d', FINDERINFO_RED_ICON.hex(), 'None' )
        self.assertEqual( result, 0 )
        self.assertEqual( output.strip(), FINDERINFO_ICON.hex() )

    def test_diff( self ):
        result, output = self.run_cli( 'diff', FINDERINFO_RED.hex(), FINDERINFO_RED.hex() )
        self.assertEqual( result, 0 )
        self.assertEqual( output.strip(), 'No differences' )

        result, output = self.run_cli( 'diff', FINDERINFO_RED.hex(), FINDERINFO_RED_ICON.hex() )
        self.assertEqual( result, 0 )
        lines = output.strip().split( '\n' )
        self.assertEqual( lines[0], '- FinderInfoFile.file_info.finder_flags: <FinderFlags: raw=0x000c, flags=[Red]>' )
        self.assertEqual( lines[1], '+ FinderInfoFile.file_info.finder_flags: <FinderFlags: raw=0x040c, flags=[Red, kHasCustomIcon]>' )
        self.assertEqual( lines[2], '~ FinderInfoFile.file_info.finder_flags: +kHasCustomIcon' )
        self.assertEqual( len( lines ), 3 )

    def test_read( self ):
        self.set_raw( self.dir_path, FINDERINFO_RED )
        result, output = self.run_cli( 'read', self.dir_path )
        self.assertEqual( result, 0 )
        self.assertTrue( output.startswith( 'FinderInfoFolder {' ) )

    def test_filetype( self ):
        result, output = self.run_cli( 'write-filetype', self.file_path, 'TEXT' )
        self.assertEqual( result, 0 )
        self.assertIn( "New filetype: 'TEXT'", output )

        result, output = self.run_cli( 'read-filetype', self.file_path )
        self.assertEqual( result, 0 )
        self.assertEqual( output.strip(), "file type: 'TEXT'" )

        result, output = self.run_cli( 'read-filetype', self.dir_path )
        self.assertEqual( result, 1 )
        result, output = self.run_cli( 'write-filetype', self.dir_path, 'TEXT' )
        self.assertEqual( result, 1 )


if __name__ == '__main__':
    unittest.main()
