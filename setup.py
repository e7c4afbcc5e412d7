# setup.py
from setuptools import setup, find_packages

setup(
    name="fcakit",
    version="0.1.0",
    description="Formal Concept Analysis: contexts, concept lattices, implications and deltas",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "numpy>=1.24",
        "pandas>=2.0",
    ],
    extras_require={
        "dev": ["pytest>=7"],
    },
    python_requires=">=3.9",
    include_package_data=True,
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
