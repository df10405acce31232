from pathlib import Path

from setuptools import find_packages, setup

ROOT = Path(__file__).parent
README = (ROOT / "README.md").read_text(encoding="utf-8") if (ROOT / "README.md").exists() else ""

setup(
    name="pyimgfx",
    version="0.1.0",
    description="PNG decode, per-pixel colour transforms and PNG encode with bounded memory",
    long_description=README,
    long_description_content_type="text/markdown",
    author="pyimgfx Contributors",
    packages=find_packages(exclude=("tests", "tests.*")),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.19",
        "Pillow>=8.0.0",
        "pypng>=0.20220715.0",
    ],
    extras_require={
        "http": [
            "requests>=2.25.0",
        ],
        "yaml": [
            "PyYAML>=5.4",
        ],
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "isort>=5.12.0",
            "flake8>=6.0.0",
            "mypy>=1.0.0",
            "requests>=2.25.0",
        ],
        "all": [
            "pyimgfx[http,yaml,dev]",
        ],
    },
    include_package_data=True,
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    ],
    keywords=[
        "png",
        "image-processing",
        "color-transform",
    ],
    entry_points={
        "console_scripts": [
            "pyimgfx=pyimgfx.cli:main",
        ],
    },
)
