"""Nova Store package setup."""

from setuptools import setup, find_packages

setup(
    name="novastore",
    version="0.1.0",
    description="Project store and command layer for a visual novel editor",
    author="Ricky",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.7.0",
        "pydantic-settings>=2.0.0",
        "click>=8.1.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=8.0.0",
            "black>=24.0.0",
            "ruff>=0.2.0",
            "mypy>=1.8.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "nova=cli.main:cli",
        ],
    },
)
