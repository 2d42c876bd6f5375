from setuptools import setup, find_packages

setup(
    name="argwire",
    version="0.1.0",
    description="Declarative command-line argument parsing into typed bindings.",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    author="Roland Thomas Jr",
    author_email="roland@rtj.dev",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "rich",
        "pydantic>=2",
        "pyyaml",
        "toml",
        "python-dateutil",
        "python-json-logger>=3",
    ],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Development Status :: 3 - Alpha",
    ],
)
