"""
Outpainter - aspect ratio catalog and outpaint canvas preparation
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="outpainter",
    version="0.3.0",
    author="Your Name",
    author_email="your.email@example.com",
    description="Aspect ratio catalog, outpaint classification and canvas/mask preparation",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/yourusername/outpainter",
    packages=find_packages(include=["outpainter", "outpainter.*"]),
    package_data={
        "outpainter": [
            "config/*.yaml",
            "config/schemas/*.json",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: Multimedia :: Graphics",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    python_requires=">=3.8",
    install_requires=[
        "Pillow>=10.0.0",
        "numpy>=1.24.0",
        "opencv-python>=4.8.0",
        "PyYAML>=6.0",
        "jsonschema>=4.17.0",
        "tqdm>=4.65.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.3.0",
            "pytest-cov>=4.1.0",
            "black>=23.0.0",
            "flake8>=6.0.0",
            "mypy>=1.3.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "outpainter=outpainter.cli.main:main",
        ],
    },
)
