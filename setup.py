# setup.py
from setuptools import setup, find_packages

setup(
    name="cljcompat",
    version="0.1.0",
    description="Sequence adapter and Clojure-style call binding (multi-arity, keywords, destructuring, records)",
    packages=find_packages(include=["cljcompat", "cljcompat.*"]),
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    zip_safe=False,
)
