##############################################################################
# Copyright (c) TableRecord Project developers. See top-level LICENSE file
# for dates and other details. No copyright assignment is required to
# contribute to TableRecord.
##############################################################################

import os

from setuptools import find_packages, setup


version = __import__("tablerecord").VERSION

here = os.path.abspath(os.path.dirname(__file__))

extras = ["dev"]


def readme():
    with open(os.path.join(here, "README.md")) as f:
        return f.read()


def reqs(filename):
    """Read a file under `requirements/`, following `-r other.txt` includes.
    Example:
        reqs('release.txt')  # requirements/release.txt
    Returns:
        List[str]: the requirement specifiers listed in the file.
    """
    requirements = []
    with open(os.path.join(here, "requirements", filename)) as req_file:
        for line in req_file:
            req = line.split("#", 1)[0].strip()
            if not req or req.startswith("-e"):
                continue
            if req.startswith("-r "):
                requirements.extend(reqs(req.split()[1]))
            else:
                requirements.append(req)
    return requirements


setup(
    name="tablerecord",
    author="TableRecord Dev team",
    version=version,
    description="Active-record persistence for plain Python dataclasses.",
    long_description=readme(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
    keywords="active record orm sqlite dataclass",
    license="MIT",
    packages=find_packages(exclude=["tests.*", "tests"]),
    install_requires=reqs("release.txt"),
    extras_require={x: reqs(x + ".txt") for x in extras},
    entry_points={
        "console_scripts": [
            "tablerecord=tablerecord.main:main",
        ]
    },
    include_package_data=True,
    zip_safe=False,
)
