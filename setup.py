from setuptools import setup, find_packages

setup(
    name="mkdocs-jsdoc",
    version="1.0.0",
    description="MkDocs plugin with JSDoc symbol and doc-comment helpers",
    keywords="mkdocs jsdoc javascript documentation python",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "mkdocs>=1.4",
    ],
    extras_require={
        "test": ["pytest", "jinja2"],
    },
    classifiers = [
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Documentation",
        "Topic :: Software Development :: Documentation",
        "Framework :: MkDocs",
    ],
    entry_points={
        "mkdocs.plugins": [
            "jsdoc = mkdocs_jsdoc.plugin:JsdocPlugin",
        ],
    },
)
