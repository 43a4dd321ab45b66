# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="inodefs",
    version="0.1.0",
    description="In-memory hierarchical filesystem simulator with a small shell",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["inodefs*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'inodefs=inodefs.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
