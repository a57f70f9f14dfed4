"""
Setup configuration for the hypertoon package.

This script uses setuptools to package and distribute the hypertoon
library. It also reads the requirements and long description directly
from external files for ease of maintenance.
"""
from setuptools import find_packages, setup

VERSION = "0.1.0"


def read_requirements():
    """
    Read requirements from requirements.txt file.
    """
    with open("requirements.txt", encoding="UTF-8") as file:
        return list(file)


def get_long_description():
    """
    Read README.md file.
    """
    with open("README.md", encoding="utf8") as file:
        return file.read()


setup(
    name="hypertoon",
    description="Compact, indentation-based notation for JSON data, with a lossless codec.",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    license="Apache Licence, Version 2.0",
    version=VERSION,
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=read_requirements(),
    extras_require={
        "test": ["pytest", "hypothesis<6.154"],
        "fuzz": ["atheris"],
    },
    entry_points={
        "console_scripts": [
            "hypertoon=hypertoon.cli:cli",
        ]
    },
    python_requires=">=3.11",
)
