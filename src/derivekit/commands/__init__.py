"""Sub-commands of the ``derivekit`` CLI.

* :mod:`~derivekit.commands.inspect` -- ``endpoints`` and ``actions``.
* :mod:`~derivekit.commands.call` -- ``call``.
"""
