#!/usr/bin/env python3
"""
Setup script for the Compensated Summation Library

This script builds the Python package for floating-point summation with
error-free transformations and compensated accumulators.
"""

from pathlib import Path

from setuptools import setup, find_packages

# Package metadata
PACKAGE_NAME = "compensated-summation"
VERSION = "1.0.0"
DESCRIPTION = "Compensated floating-point summation with Kahan-Babuska and Kahan-Babuska-Neumaier algorithms"
AUTHOR = "Compensated Summation Contributors"
AUTHOR_EMAIL = "contributors@compensated-summation.org"
URL = "https://github.com/your-username/compensated-summation"
LICENSE = "MIT"

# Read long description from README
def read_readme():
    readme_path = Path(__file__).parent / "README.md"
    if readme_path.exists():
        with open(readme_path, "r", encoding="utf-8") as f:
            return f.read()
    return DESCRIPTION

# Package requirements
def get_requirements():
    """Get package requirements."""
    base_requirements = [
        "numpy>=1.19.0",
        "torch>=1.9.0",
    ]

    test_requirements = [
        "pytest>=6.0",
        "hypothesis>=6.37",
    ]

    dev_requirements = test_requirements + [
        "pytest-cov>=2.0",
        "black>=21.0",
        "flake8>=3.8",
        "mypy>=0.900",
        "matplotlib>=3.3",
        "pandas>=1.2",
    ]

    return {
        "base": base_requirements,
        "test": test_requirements,
        "dev": dev_requirements,
    }

# Setup configuration
def main():
    """Main setup function."""
    requirements = get_requirements()

    # Extras require for optional dependencies
    extras_require = {
        "test": requirements["test"],
        "dev": requirements["dev"],
        "all": requirements["dev"],
    }

    setup(
        name=PACKAGE_NAME,
        version=VERSION,
        description=DESCRIPTION,
        long_description=read_readme(),
        long_description_content_type="text/markdown",
        author=AUTHOR,
        author_email=AUTHOR_EMAIL,
        url=URL,
        license=LICENSE,

        # Package configuration
        packages=find_packages(include=["compensated_summation", "compensated_summation.*"]),

        # Dependencies
        install_requires=requirements["base"],
        extras_require=extras_require,
        python_requires=">=3.8",

        # Metadata for PyPI
        classifiers=[
            "Development Status :: 5 - Production/Stable",
            "Intended Audience :: Science/Research",
            "Intended Audience :: Developers",
            "License :: OSI Approved :: MIT License",
            "Programming Language :: Python :: 3",
            "Programming Language :: Python :: 3.8",
            "Programming Language :: Python :: 3.9",
            "Programming Language :: Python :: 3.10",
            "Programming Language :: Python :: 3.11",
            "Programming Language :: Python :: 3.12",
            "Topic :: Scientific/Engineering :: Mathematics",
            "Topic :: Software Development :: Libraries :: Python Modules",
            "Operating System :: OS Independent",
        ],
        keywords=[
            "numerical", "summation", "kahan", "neumaier", "floating-point",
            "precision", "error-free-transformation", "2sum", "scientific-computing"
        ],

        # Project URLs
        project_urls={
            "Source": URL,
            "Tracker": f"{URL}/issues",
        },
    )

if __name__ == "__main__":
    main()
