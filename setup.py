from setuptools import setup, find_packages

setup(
    name="sew",
    version="0.1.0",
    description="Compose raw byte sequences such as test network frames from shell arguments",
    author="Garrett Johnson",
    packages=find_packages(include=["sew"]),
    python_requires=">=3.11",
    install_requires=[
        "numpy>=1.23.0",
    ],
    extras_require={
        "test": ["pytest", "flake8"],
    },
    entry_points={
        "console_scripts": ["sew=sew.cli:main"],
    },
)
