#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from os import path

from setuptools import setup

this_directory = path.abspath(path.dirname(__file__))
with open(path.join(this_directory, 'README.md'), encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='resource_factory',
    description='Declarative API resources converted to and from plain dicts',
    long_description=long_description,
    long_description_content_type='text/markdown',
    version='0.1',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Operating System :: OS Independent',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: Apache Software License',
        'Programming Language :: Python :: 3'
    ],
    license='Apache2',
    packages=['resource_factory'],
    python_requires='>=3.8',
    extras_require={
        'test': [
            'pytest',
        ],
    },
)
