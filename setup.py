#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
"""The setup.py file."""

import os
import sys

from setuptools import find_packages, setup
from setuptools.command.install import install

with open("src/rfraw_tx/version.py") as fh:
    for line in fh:
        if line.strip().startswith("__version__"):
            VERSION = eval(line.split("=")[-1])
            break

with open("README.md", "r") as fh:
    LONG_DESCRIPTION = fh.read()


def _requirements(file_name: str) -> list[str]:
    with open(file_name) as fh:
        return [
            val.strip() for val in fh if val.strip() and not val.startswith(("#", "-"))
        ]


class VerifyVersionCommand(install):
    """Custom command to verify that the git tag matches our VERSION."""

    def run(self):
        tag = os.getenv("CIRCLE_TAG")
        if tag != VERSION:
            info = f"Git tag: {tag} does not match the version of this pkg: {VERSION}"
            sys.exit(info)


setup(
    name="ceiling-fan-remote",
    description="An RF remote for ceiling fans (& lights), via a Sonoff RF bridge.",
    keywords=["ceiling fan", "sonoff", "rf bridge", "tasmota", "rfraw", "homekit"],
    install_requires=_requirements("requirements.txt"),
    extras_require={"test": _requirements("requirements_dev.txt")},
    long_description=LONG_DESCRIPTION,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages("src", exclude=["tests", "docs"]),
    entry_points={
        "console_scripts": ["ceiling-fan = ceiling_fan_cli.client:main"],
    },
    version=VERSION,
    license="MIT",
    python_requires=">=3.11",
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3.11",
        "Topic :: Home Automation",
    ],
    cmdclass={
        "verify": VerifyVersionCommand,
    },
)
