"""A small interactive command shell with pipes, redirections, quoting and expansion."""

__version__ = "0.1.0"