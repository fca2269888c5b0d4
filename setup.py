# setup.py
from setuptools import setup, find_packages

setup(
    name="subdb-client",
    version="1.0.0",
    description="Client for the SubDB subtitle database: file fingerprinting, search, download and upload",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    install_requires=[
        "requests>=2.28",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'subdb=subdb.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
