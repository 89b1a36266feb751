[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sysprog"
version = "0.1.0"
description = "An adder CGI program, robust I/O and simple output helpers, and a job-control shell with its test programs"
requires-python = ">=3.10"
dependencies = []
keywords = ["cgi", "shell", "job control", "robust io", "signals"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: System :: Shells",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
adder = "sysprog.adder:main"
proxy = "sysprog.proxy:main"
tsh = "sysprog.tsh:main"
myspin = "sysprog.testprogs:myspin_main"
mysplit = "sysprog.testprogs:mysplit_main"
myint = "sysprog.testprogs:myint_main"
mystop = "sysprog.testprogs:mystop_main"

[tool.hatch.build.targets.wheel]
packages = ["sysprog"]

[tool.pytest.ini_options]
addopts = "-ra"
