# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="syntaxscope",
    version="1.0.0",
    description="Terminal viewer for the tokens, syntax tree, symbol table and errors reported by a code analyzer service",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["syntaxscope", "syntaxscope.*"]),
    package_data={"syntaxscope.interface": ["locales/*.json"]},
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=[
        "requests",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'syntaxscope=syntaxscope.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
