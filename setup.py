from setuptools import setup, find_packages

setup(
    name="valleyflow",
    version="1.0.0",
    description="Voice dictation desktop front-end: state store and backend event bridge",
    author="",
    python_requires=">=3.8",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "rich>=12.5.0",
        "pyyaml>=6.0.0",
        "pypubsub>=4.0.3",
        "pyperclip>=1.8.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "valleyflow=valleyflow.main:main",
        ],
    },
)
