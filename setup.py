from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="arcio",
    version="0.1.0",
    author="Tim Hosking",
    author_email="github.com/Munger",
    description="Read-only asset I/O for game and application asset servers, backed by a single archive",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/Munger/arcio",
    project_urls={
        "Bug Tracker": "https://github.com/Munger/arcio/issues",
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: System :: Filesystems",
        "Topic :: System :: Archiving",
    ],
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
)
