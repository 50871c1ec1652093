"""Setup script for shipit."""

from pathlib import Path

from setuptools import find_namespace_packages, setup

HERE = Path(__file__).parent


def read_version() -> str:
    """Read the fallback version declared in shipit/cli/__init__.py."""
    for line in (HERE / "shipit" / "cli" / "__init__.py").read_text().splitlines():
        line = line.strip()
        if line.startswith("__version__ = \""):
            return line.split('"')[1]
    return "0.0.0"


setup(
    name="shipit-cli",
    version=read_version(),
    description="Commit, push and deploy a project to GitHub and Vercel in one step",
    python_requires=">=3.10",
    packages=find_namespace_packages(include=["shipit", "shipit.*"]),
    install_requires=[
        "click>=8.1",
        "dependency-injector>=4.41",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "tomli>=2.0; python_version < '3.11'",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
    entry_points={
        "console_scripts": [
            "shipit=shipit.__main__:main",
        ],
    },
)
