"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant is referenced by the corresponding
:class:`~swagkit.exceptions.SwagkitError` subclass. Scripts wrapping
``swagkit validate`` only need to look at the exit status::

    $ swagkit validate swagger.json
    $ echo $?
    1   # the document has errors or warnings
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""The command failed: a document could not be loaded, validated, or converted."""

EXIT_INVALID_USAGE = 2
"""The command line itself was malformed (reported by the CLI framework)."""

EXIT_INTERRUPTED = 130
"""The user interrupted the command with Ctrl-C."""
