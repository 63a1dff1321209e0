"""tmuxlib lives at <https://github.com/tmuxlib/tmuxlib>.

tmuxlib
-------

Typed async client for the tmux terminal multiplexer.

"""

from setuptools import find_packages, setup

about = {}
with open("src/tmuxlib/__about__.py") as fp:
    exec(fp.read(), about)

with open("requirements/test.txt") as f:
    tests_reqs = [line for line in f.read().split("\n") if line]

with open("README.md", encoding="utf-8") as f:
    readme = f.read()


setup(
    name=about["__title__"],
    version=about["__version__"],
    url=about["__github__"],
    download_url=about["__pypi__"],
    project_urls={
        "Documentation": about["__docs__"],
        "Code": about["__github__"],
        "Issue tracker": about["__tracker__"],
        "Changes": about["__changes__"],
    },
    license=about["__license__"],
    author=about["__author__"],
    author_email=about["__email__"],
    description=about["__description__"],
    long_description=readme,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages("src"),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "typing_extensions; python_version < '3.11'",
    ],
    extras_require={
        "test": tests_reqs,
    },
    entry_points={
        "pytest11": [
            "tmuxlib = tmuxlib.pytest_plugin",
        ],
    },
    zip_safe=False,
    keywords=about["__title__"],
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX",
        "Operating System :: MacOS :: MacOS X",
        "Framework :: AsyncIO",
        "Framework :: Pytest",
        "Intended Audience :: Developers",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Programming Language :: Python :: Implementation :: PyPy",
        "Typing :: Typed",
        "Topic :: Utilities",
        "Topic :: System :: Shells",
    ],
)
