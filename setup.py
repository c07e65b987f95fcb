"""
Setup configuration for core_algolia package
"""
from setuptools import setup, find_packages
import os

# Read version from __init__.py
with open(os.path.join("core_algolia", "__init__.py"), "r") as f:
    for line in f:
        if line.startswith("__version__"):
            version = line.split("=")[1].strip().strip('"').strip("'")
            break
    else:
        version = "0.1.0"

# Read requirements
with open("requirements.txt", "r") as f:
    requirements = [line.strip() for line in f if line.strip() and not line.startswith("#")]

with open("requirements-dev.txt", "r") as f:
    dev_requirements = [line.strip() for line in f if line.strip() and not line.startswith("#")]

# Read long description
with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="core-algolia",
    version=version,
    author="Suraj Sharma",
    author_email="spsurajsharma72@gmail.com",
    description="Sync and async Algolia search client with host failover",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/surajsharmadots/shared_libs",
    packages=find_packages(include=["core_algolia", "core_algolia.*"]),
    package_data={
        "core_algolia": ["py.typed"],
    },
    python_requires=">=3.8",
    install_requires=requirements,
    extras_require={
        "dev": dev_requirements,
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Internet :: WWW/HTTP :: Indexing/Search",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
        "Framework :: AsyncIO",
    ],
    keywords="algolia, search, client, async, httpx",
    zip_safe=False,
)
