from os import path
from setuptools import setup, find_packages
from finderinfo.version import __version__

# Get the long description from the README file
here = path.abspath( path.dirname( __file__ ) )
with open( path.join( here, 'DESCRIPTION.rst' ), encoding='utf-8' ) as f:
    long_description = f.read()

setup( 
    name='finderinfo',
    version=__version__,
    description=('A library and tool for reading and writing '
                'macOS FinderInfo records'),
    long_description=long_description,
    license='BSD',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: BSD License',
        'Operating System :: MacOS :: MacOS X',
        'Programming Language :: Python :: 3 :: Only',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: System :: Filesystems',
    ],
    python_requires='>=3.10',
    install_requires=[
        'typing_extensions >= 4.0',
    ],
    extras_require={
        'xattr': ['xattr >= 0.9'],
        'test': ['pytest'],
    },
    packages=find_packages( exclude=['doc'] ),
    entry_points={
        'console_scripts': [
            'finderinfo = finderinfo.cli:finderinfo',
        ],
    },
)
