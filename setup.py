from setuptools import find_packages, setup

setup(
    name="wigner",
    version="1.0.0",
    description="Wigner 3j symbols, Wigner d-matrices and Legendre polynomials by stable recursion",
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "rich>=12",
        "torch",
    ],
    extras_require={
        "test": ["pytest"],
    },
    packages=find_packages(exclude=["tests", "tests.*"]),
    entry_points={
        "console_scripts": ["wigner=wigner.__main__:main"],
    },
)
