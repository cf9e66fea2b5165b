"""
Setup script for linear

Pure Python package in the src/ layout. The dense linear algebra routines
come from SciPy's BLAS/LAPACK wrappers, so nothing is compiled here.
"""

from pathlib import Path
from setuptools import setup, find_packages


# Read version from src/linear/__init__.py
def get_version():
    version_file = Path("src/linear/__init__.py")
    if version_file.exists():
        for line in version_file.read_text().splitlines():
            if line.startswith("__version__"):
                return line.split("=")[1].strip().strip('"').strip("'")
    return "0.1.0"


# Read long description from README
def get_long_description():
    readme = Path("README.md")
    if readme.exists():
        return readme.read_text(encoding="utf-8")
    return ""


setup(
    name="linear",
    version=get_version(),
    description="Vectors and matrices over shared buffers with BLAS/LAPACK program functions",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.20",
        "scipy>=1.7",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    zip_safe=True,
)
