[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "radcavity"
version = "0.1.0"
description = "Polariton band structure of an electron in a periodic potential coupled to a cavity photon mode, beyond the long-wavelength approximation"
requires-python = ">=3.10"
keywords = [
    "cavity QED",
    "polaritons",
    "light-matter coupling",
    "dispersion",
    "hamiltonian",
    "linear algebra",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = [
    "numpy",
    "scipy",
    "tqdm",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["radcavity"]

[tool.pytest.ini_options]
addopts = "-ra"
