"""Setup script for qsubmit package."""

from setuptools import setup, find_packages

setup(
    name="qsubmit",
    version="1.0.0",
    description="Stage an input on scratch and submit it as a Slurm batch job",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[
        "pyyaml>=5.4",
        "click>=8.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "qsubmit=qsubmit.cli.main:cli",
        ],
    },
)
