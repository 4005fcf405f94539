from setuptools import setup, find_packages

# Safely read the long description from README.md, if present
try:
    with open("README.md", encoding="utf-8") as f:
        long_description = f.read()
except FileNotFoundError:
    long_description = ""

VERSION = "0.1.0"

setup(
    name="tarballer",
    version=VERSION,
    description="Tarball every folder of a directory, optionally removing the originals",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["tarballer", "tarballer.*"]),
    package_data={"tarballer.resources": ["*.yaml"]},
    python_requires=">=3.10",
    install_requires=[
        "click>=8.0",
        "structlog>=22.1",
        "rich>=12.0",
        "pydantic>=2.0",
        "PyYAML>=5.4",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "tarballer-cli = tarballer.cli:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
