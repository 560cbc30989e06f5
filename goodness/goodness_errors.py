#!/usr/bin/env python3


class InputUnavailable(RuntimeError):
    """The word list (or the hashed scratch file) could not be read."""


class InvalidConfiguration(ValueError):
    """A run was configured with values the search cannot work with."""
