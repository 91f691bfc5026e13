# setup.py
from setuptools import setup, find_packages

setup(
    name="treerewriter",
    version="0.1.0",
    description="Rewrite a literal identifier in every file of a directory tree whose path matches a marker",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={
        "treerewriter": ["interface/locales/*.json"],
    },
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'treerewriter=treerewriter.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
