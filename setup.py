# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="wxsgen",
    version="0.1.0",
    description="Generate WiX installer manifests (.wxs) from a directory tree",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["wxsgen", "wxsgen.*"]),
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'wxsgen=wxsgen.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
