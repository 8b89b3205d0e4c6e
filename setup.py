#!/usr/bin/env python3
"""
Setup script for APK Studio backend

Install with:
    pip install -e .

With test and lint tooling:
    pip install -e ".[dev]"

Against PostgreSQL instead of the in-process SQLite default:
    pip install -e ".[postgres]"
"""

from setuptools import setup, find_namespace_packages
from pathlib import Path

# Read README
readme_path = Path(__file__).parent / "README.md"
long_description = ""
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")

# Server dependencies
server_requirements = [
    "fastapi>=0.109.0",
    "uvicorn[standard]>=0.27.0",
    "pydantic>=2.5.0",
    "pydantic-settings>=2.1.0",
    "python-dotenv>=1.0.0",
    "sqlalchemy[asyncio]>=2.0.25",
    "aiosqlite>=0.19.0",
    "python-multipart>=0.0.6",
    "slowapi>=0.1.9",
    "httpx>=0.26.0",
    "anthropic>=0.18.0",
]

setup(
    name="apkstudio",
    version="1.0.0",
    description="APK Studio - project manager backend with simulated APK builds and an AI provider proxy",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    package_dir={"": "backend"},
    packages=find_namespace_packages(where="backend", include=["apkstudio", "apkstudio.*"]),
    python_requires=">=3.9",
    install_requires=server_requirements,
    extras_require={
        "postgres": [
            "asyncpg>=0.29.0",
        ],
        "dev": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.23.0",
            "faker>=22.0.0",
            "black>=24.1.0",
            "isort>=5.13.0",
            "mypy>=1.8.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "apkstudio-server=apkstudio.main:run",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Framework :: FastAPI",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development",
        "Topic :: Software Development :: Build Tools",
    ],
    keywords="apk android python fastapi ai-proxy build-simulation",
)
