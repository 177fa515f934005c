from setuptools import setup, find_packages
import os

# Import version from ConfTree/__init__.py
import re
with open(os.path.join('ConfTree', '__init__.py'), 'r') as f:
    version = re.search(r"__version__\s*=\s*'(.*)'", f.read()).group(1)

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="ConfTree",
    version=version,
    description="An in-memory hierarchical configuration store with typed accessors and thread-safe access",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "click>=8.0.0",
        "PyYAML>=5.4",
        "cattrs>=24.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "conftree=ConfTree.cli.commands:main",
        ],
    },
)
