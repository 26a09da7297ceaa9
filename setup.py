#!/usr/bin/env python

from setuptools import setup

setup(
    name="podlink",
    version="0.1.0",
    packages=[
        "podlink",
        "podlink.details",
        "podlink.details.tools",
        "podlink.linker",
        "podlink.xcode",
    ],
    python_requires=">=3.9",
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["podlink = podlink.__main__:main"]},
)
