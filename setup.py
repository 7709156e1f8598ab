import os

from setuptools import find_packages, setup

package = find_packages(include=["mindep", "mindep.*"])
version = "0.0.1"
description = "A tool for discovering minimal functional dependencies in relational tables"

if os.path.exists("README.md"):
    with open("README.md", "r") as f:
        long_description = f.read()
else:
    long_description = description

setup(
    name="mindep",
    version=version,
    description=description,
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=package,
    python_requires=">=3.10",
    install_requires=[
        "pandas>=2.0",
        "pydantic>=2.0",
        "SQLAlchemy>=2.0",
    ],
    extras_require={
        "test": ["pytest", "numpy"],
    },
    entry_points={
        "console_scripts": ["mindep=mindep.run:main"],
    },
)
