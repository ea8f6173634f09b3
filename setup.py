#!/usr/bin/env python3
"""
Setup script for the Chrono Feedback Service

This setup script provides package installation and the server entry point
for the Chrono feedback notification service.
"""

from setuptools import setup, find_packages
import os
import sys

# Ensure we're using Python 3.10 or higher
if sys.version_info < (3, 10):
    raise RuntimeError("Python 3.10 or higher is required")

# Read version from package
def get_version():
    """Extract version from package"""
    version_file = os.path.join(os.path.dirname(__file__), 'src', '__init__.py')
    if os.path.exists(version_file):
        with open(version_file) as f:
            for line in f:
                if line.startswith('__version__'):
                    return line.split('=')[1].strip().strip('"\'')
    return "1.0.0"

# Read long description from README
def get_long_description():
    """Read long description from README file"""
    readme_file = os.path.join(os.path.dirname(__file__), 'README.md')
    if os.path.exists(readme_file):
        with open(readme_file, 'r', encoding='utf-8') as f:
            return f.read()
    return "Feedback notification emails for the Chrono app"

# Core dependencies
INSTALL_REQUIRES = [
    "fastapi>=0.110.0",
    "uvicorn>=0.27.0",
    "pydantic>=2.0.0",
    "python-dotenv>=0.19.0",
    "firebase-admin>=6.0.0",
    "google-api-core>=2.0.0",
    "cloudevents>=1.9.0,<2",
]

# Development dependencies
EXTRAS_REQUIRE = {
    'dev': [
        "pytest>=7.0.0",
        "pytest-asyncio>=0.21.0",
        "pytest-cov>=4.0.0",
        "httpx>=0.24.0",
        "black>=23.0.0",
        "flake8>=6.0.0",
        "mypy>=1.0.0"
    ],
    'test': [
        "pytest>=7.0.0",
        "pytest-asyncio>=0.21.0",
        "pytest-cov>=4.0.0",
        "httpx>=0.24.0"
    ]
}

setup(
    name="chrono-feedback",
    version=get_version(),
    description="Feedback notification emails for the Chrono app",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    author="Chrono Team",

    # Package configuration
    packages=find_packages(include=["src", "src.*"]),
    include_package_data=True,

    python_requires=">=3.10",

    # Dependencies
    install_requires=INSTALL_REQUIRES,
    extras_require=EXTRAS_REQUIRE,

    # Server entry point
    entry_points={
        'console_scripts': [
            'chrono-feedback=src.main:main',
        ],
    },

    # Package metadata
    classifiers=[
        "Development Status :: 4 - Beta",
        "Framework :: FastAPI",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Communications :: Email",
    ],

    keywords=["feedback", "email", "smtp", "firebase", "fastapi"],

    # Zip safe
    zip_safe=False,
)
