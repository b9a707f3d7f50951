from setuptools import setup, find_packages

setup(
    name="mvc-bnb",
    version="0.1",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.8",
    install_requires=[
        "networkx>=2.8",
        "numpy>=1.22",
        "matplotlib>=3.5",
        "pandas>=1.4",
        "pulp>=2.7",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
)
