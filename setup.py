#!/usr/bin/env python3
"""
Setup script for the ObjectiveFS volume plugin.
"""

from setuptools import setup, find_namespace_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

packages = find_namespace_packages(where=".", include=["objectivefs_volume", "objectivefs_volume.*"])

setup(
    name="objectivefs-volume-plugin",
    version="1.0.0",
    author="ObjectiveFS Volume Plugin Project",
    description="Docker volume plugin for ObjectiveFS with reference-counted mounts",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="ISC",
    packages=packages,
    package_dir={"": "."},
    include_package_data=True,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: ISC License (ISCL)",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    install_requires=requirements,
    extras_require={
        "test": [
            "pytest>=7.0",
            "httpx>=0.24",
        ],
    },
    entry_points={
        "console_scripts": [
            "objectivefs-volume=objectivefs_volume.cli.cli:main",
            "objectivefs-volume-plugin=objectivefs_volume.api.server:main",
        ],
    },
)
