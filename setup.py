import os

from setuptools import setup


def rel(*xs):
    return os.path.join(os.path.abspath(os.path.dirname(__file__)), *xs)


with open(rel("distlock", "__init__.py")) as f:
    version_marker = "__version__ = "
    for line in f:
        if line.startswith(version_marker):
            _, version = line.split(version_marker)
            version = version.strip().strip('"')
            break
    else:
        raise RuntimeError("Version marker not found.")


dependencies = ["redis~=5.0", "prometheus-client>=0.2", "typing-extensions>=3.8"]

extra_dependencies = {
    "dev": [
        # Linting
        "flake8",
        "flake8-bugbear",
        "flake8-quotes",
        "isort",
        "black~=23.12",
        "mypy~=1.10.0",
        "types-redis",
        # Misc
        "pre-commit",
        "bumpversion",
        "hiredis",
        "twine",
        # Testing
        "pytest",
        "pytest-cov",
        "pytest-timeout",
        "freezegun",
    ],
}

setup(
    name="distlock",
    version=version,
    author="The Distlock Authors",
    description="Distributed leases on Redis for Python 3.",
    packages=[
        "distlock",
        "distlock.backends",
        "distlock.helpers",
    ],
    package_data={"distlock": ["py.typed"]},
    include_package_data=True,
    install_requires=dependencies,
    python_requires=">=3.9",
    extras_require=extra_dependencies,
    classifiers=[
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3 :: Only",
        "Topic :: System :: Distributed Computing",
        "License :: OSI Approved :: GNU Lesser General Public License v3 or later (LGPLv3+)",
    ],
)
