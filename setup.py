#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""Setup script for xcsf."""

__author__ = 'Aaron Hosford'

import re
from setuptools import setup
from codecs import open
from os import path

here = path.abspath(path.dirname(__file__))


# Read the version without importing the package, whose dependencies may
# not be installed yet.
with open(path.join(here, 'xcsf', '__init__.py'),
          encoding='utf-8') as init_file:
    __version__ = re.search(r"^__version__ = '([^']+)'",
                            init_file.read(), re.MULTILINE).group(1)


# Default long description
long_description = """

XCSF
====

*Accuracy-based Function Approximation for Python 3*

XCSF evolves a population of locally linear classifier rules whose
conditions (intervals, neural networks or dynamical graphs) partition the
input space, approximating a real-valued function of real-valued inputs.

The package is available for download under the permissive Revised BSD
License.

""".strip()


# Get the long description from the relevant file. First try README.rst,
# then fall back on the default string defined here in this file.
if path.isfile(path.join(here, 'README.rst')):
    with open(path.join(here, 'README.rst'),
              encoding='utf-8') as description_file:
        long_description = description_file.read()

# See https://setuptools.pypa.io/ for a full list of parameters and their
# meanings.
setup(
    name='xcsf',
    version=__version__,
    author=__author__,
    author_email='hosford42@gmail.com',
    license='Revised BSD',
    platforms=['any'],
    description='XCSF (Accuracy-based Function Approximation)',
    long_description=long_description,

    # See https://pypi.org/classifiers/
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Science/Research',
        'Topic :: Scientific/Engineering',
        'Topic :: Scientific/Engineering :: Artificial Intelligence',
        'License :: OSI Approved :: BSD License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
    ],

    keywords='xcsf xcs accuracy classifier lcs function approximation '
             'machine learning',
    packages=['xcsf', 'xcsf.algorithms'],
    python_requires='>=3.9',
    install_requires=['numpy'],
    extras_require={'test': ['pytest']},
    entry_points={
        'console_scripts': ['xcsf = xcsf.__main__:main'],
    },
)
