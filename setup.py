# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="lernadocs",
    version="1.0.0",
    description="Regroup documentation nodes of a multi-package workspace by package",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["lernadocs", "lernadocs.*"]),
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'lernadocs=lernadocs.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
