import re
from pathlib import Path
from setuptools import setup, find_packages


def read_readme() -> str:
    readme_path = Path(__file__).resolve().parent / "README.md"
    return readme_path.read_text(encoding="utf-8") if readme_path.exists() else ""


def read_version() -> str:
    main_path = Path(__file__).resolve().parent / "cryptpipe" / "main.py"
    match = re.search(r"^\s*ENGINE_VERSION = \"([^\"]+)\"", main_path.read_text(encoding="utf-8"), re.MULTILINE)
    if match is None:
        raise RuntimeError("ENGINE_VERSION not found in cryptpipe/main.py")
    return match.group(1)


setup(
    name="cryptpipe",
    version=read_version(),
    packages=find_packages(include=["cryptpipe", "cryptpipe.*"]),
    install_requires=[
        "cryptography>=41.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": ["cryptpipe=cryptpipe.main:main"],
    },
    python_requires=">=3.10",
    description="Streaming cipher/hash pipeline with selective handle ownership and cooperative cancellation",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
)
