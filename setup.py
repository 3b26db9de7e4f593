from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="placecountry",
    version="0.1.0",
    author="",
    author_email="",
    description="Resolve free-text genealogical place strings to ISO 3166-1 countries",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={
        'placecountry': ['countries/data/*.yaml', 'countries/data/*.parquet'],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=[
        "pandas>=1.3.0,<3",
        "rapidfuzz>=2.0.0",
        "pyarrow>=10.0.0",
        "pycountry>=22.1.10",
        "country_converter>=1.0.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "dev": ["pytest>=7.0.0"],
    },
)
