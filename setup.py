# setup.py
from setuptools import setup, find_packages

setup(
    name="put-lang",
    version="0.1.0",
    description="PUT: a small expression language with first-class tensors",
    python_requires=">=3.10",
    packages=find_packages(include=["put", "put.*"]),
    install_requires=[
        "numpy",
        "typer",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "put=put.cli:main",
        ],
    },
    zip_safe=False,
)
