# setup.py
from setuptools import setup, find_packages

setup(
    name="mal-lisp",
    version="0.1.0",
    description="Evaluator core for a small Lisp dialect: values, environments, special forms, TCO and macros",
    packages=find_packages(include=["mal", "mal.*"]),
    package_data={"mal": ["prelude/*.mal"]},
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["mal=mal.interpreter:main"],
    },
    zip_safe=False,
)
