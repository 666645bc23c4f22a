from setuptools import find_packages, setup

version = ("0", "1", "0")

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(name="pystreambuffer",
    version=".".join(version),
    description="Lazy, size-bounded batching of splittable sequences",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={'streambuffer': ['log/config/*.yaml']},
    python_requires=">=3.8",
    install_requires=[
        'pyyaml>=6.0',
        'colorama>=0.4',
        'loggingdecorators>=0.1.3'
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
)
