# SPDX-License-Identifier: LGPL-3.0-or-later
from setuptools import setup, find_packages

setup(
    name="vspherekit",
    version="0.1.0",
    packages=find_packages(include=["vspherekit", "vspherekit.*"]),
    install_requires=[l.strip() for l in open("requirements.txt", encoding="utf-8") if l.strip() and not l.startswith("#")],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["vspherekit=vspherekit.__main__:main"]},
)
