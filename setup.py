from setuptools import setup, find_packages

setup(
    name="restify",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "httpx>=0.26",
        "pydantic>=2.0",
        "structlog>=23.1",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-httpx",
            "hypothesis",
        ],
    },
    description="Fluent HTTP client for calling REST services.",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
)
