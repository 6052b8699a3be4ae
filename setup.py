# setup.py
from setuptools import setup, find_packages

setup(
    name="minigo",
    version="0.1.0",
    description="A tree-walking interpreter for a small, dynamically typed subset of Go",
    packages=find_packages(include=["minigo", "minigo.*"]),
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["minigo=minigo.__main__:main"],
    },
    zip_safe=False,
)
