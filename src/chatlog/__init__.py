"""chatlog — reader for newline-delimited JSON chat exports.

Loads a chat log (one JSON record per line, with optional blank lines and
``//`` comment lines), decodes every candidate line independently, and
reports how many messages were recovered.  Lines that fail to decode are
kept as :class:`~chatlog.parser.ParseError` entries instead of aborting
the run.
"""

__version__ = "0.1.0"
