"""setuptools configuration for the spread layout engine.

Usage:
    pip install -e .            # engine + photo intake
    pip install -e '.[test]'    # plus pytest

Installs the flat layout modules and a ``spread-bench`` console script.
"""
from setuptools import setup

MODULES = [
    'models',
    'geometry',
    'templates',
    'structured',
    'mosaic',
    'grid',
    'distribution',
    'suggestions',
    'photos',
    'layout_bench',
]

setup(
    name='spread-layout',
    version='1.0.0',
    description='Crop-free photo layout engine for album spreads',
    py_modules=MODULES,
    python_requires='>=3.10',
    install_requires=['Pillow'],
    extras_require={'test': ['pytest']},
    entry_points={
        'console_scripts': ['spread-bench=layout_bench:main'],
    },
)
