from setuptools import setup, find_packages

setup(
    name="extconfig",
    version="1.0.0",
    description="Extension discovery and load-order configuration for a content-management system",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["main"],
    python_requires=">=3.10",
    install_requires=[
        "click",
        "importlib-metadata",
        "pydantic>=2",
        "python-dotenv",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "extconfig=extconfig.cli.cli:main",
        ],
    },
)
