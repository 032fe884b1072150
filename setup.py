from setuptools import setup, find_packages

setup(
    name="dumbbrain",
    version="0.1.0",
    description="DumbBrain — a minimal typed expression language: lexer, parser, binder, evaluator",
    packages=find_packages(include=["dumbbrain", "dumbbrain.*"]),
    python_requires=">=3.10",
    install_requires=[
        "llvmlite>=0.41.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "hypothesis>=6.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "dumbbrain=dumbbrain.cli:main",
        ],
    },
)
