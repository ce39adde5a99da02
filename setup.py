"""
Setup script for rasteraxis package
Validated pixel addressing for 2-D rasters from any numeric coordinate type
"""
from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

setup(
    name="rasteraxis",
    version="0.1.0",
    description="Convert integer and floating-point coordinates into checked or clamped raster pixel lookups",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Image Processing",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=[
        # Core scientific stack
        "numpy>=1.22",
        # Image adapter
        "pillow>=9.1",
    ],
    extras_require={
        "dev": [
            "black>=22.0",
            "isort>=5.0",
            "pytest>=7.0",
            "pytest-cov>=3.0",
            "shapely>=1.8,<3.0",
        ],
        "geometry": [
            # Point type accepted as a coordinate
            "shapely>=1.8,<3.0",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
