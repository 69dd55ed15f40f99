"""Package build script"""
import re
import setuptools

ver_file = 'VERSION'
__version__ = None

# Pull package version number from the VERSION file
with open(ver_file, 'r') as f:
    for line in f.readlines():
        verstr = re.match(r'^\s*v?(\d+\.\d+\.\d+(?:\.[a-zA-Z0-9]+)?)\s*$', line)
        if verstr is not None:
            __version__ = verstr.groups()[0]
            break

    if __version__ is None:
        raise EnvironmentError(f'Could not find valid version number in {ver_file}; aborting setup')

with open("./README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setuptools.setup(
    name="wkbstructures",
    version=__version__,
    author="Carl Best",
    author_email="",
    description="Geometry values and their OGC WKB / PostGIS EWKB wire encoding.",
    long_description=long_description,
    long_description_content_type='text/markdown',
    url="https://github.com/ccbest/wkbstructures",
    packages=setuptools.find_packages(
        include=('wkbstructures*', ),
        exclude=('*tests', 'tests*')
    ),
    package_data={"wkbstructures": ["py.typed"]},
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent"
    ],
    python_requires='>=3.8',
    install_requires=[
        'numpy>=1',
        'typing_extensions>=4.0',
    ],
    extras_require={
        'shapely': ['shapely>=2.0'],
        'test': ['pytest', 'shapely>=2.0'],
    },
)
