# setup.py - Package build
from setuptools import setup, find_packages

setup(
    name="dbltheory",
    version="0.1.0",
    description="Double theories, their models, validation and motif search",
    packages=find_packages(include=["dbltheory", "dbltheory.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
