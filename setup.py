from setuptools import setup, find_packages

setup(
    name="blueprint-book",
    version="0.1.0",
    packages=find_packages(include=["blueprint", "blueprint.*"]),
    include_package_data=True,
    install_requires=[
        "structlog>=23.1.0",
        "pydantic>=2.0.0",
        "typer>=0.9.0",
        "rich>=13.0.0",
        "psutil>=5.9.8",
        "pyyaml>=6.0.1",
        "toml>=0.10.2; python_version < '3.11'",
        "PyMuPDF>=1.23.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "blueprint=blueprint.cli:main",
        ],
    },
    python_requires=">=3.9",
)
