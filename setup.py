import codecs
import os

from setuptools import find_packages, setup

PROJECT_ROOT = os.path.dirname(os.path.realpath(__file__))
README_FILE = os.path.join(PROJECT_ROOT, "README.md")
REQUIREMENTS_FILE = os.path.join(PROJECT_ROOT, "requirements.txt")
REQUIREMENTS_DEV_FILE = os.path.join(PROJECT_ROOT, "requirements-dev.txt")
VERSION_FILE = os.path.join(PROJECT_ROOT, "tilde", "version.py")


def get_long_description():
    with codecs.open(README_FILE, "rt") as buff:
        return buff.read()


def get_requirements(path):
    with codecs.open(path) as buff:
        return buff.read().splitlines()


def get_version():
    with open(VERSION_FILE, encoding="utf-8") as buff:
        namespace = {}
        exec(buff.read(), namespace)  # pylint: disable=exec-used
    return namespace["__version__"]


setup(
    name="tilde",
    version=get_version(),
    description="Symbolic model formulas: parse, expand, bind to a schema and evaluate",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    python_requires=">=3.8",
    install_requires=get_requirements(REQUIREMENTS_FILE),
    extras_require={"test": get_requirements(REQUIREMENTS_DEV_FILE)},
    packages=find_packages(exclude=["tests", "test_*"]),
    license="MIT",
)
