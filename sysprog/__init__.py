"""CGI adder, robust I/O and output helpers, and a job-control shell with its test programs."""

__version__ = "0.1.0"