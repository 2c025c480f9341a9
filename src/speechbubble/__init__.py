"""Speechbubble - Speech-bubble outline and text-flow geometry.

Speechbubble computes the vector outline of a comic dialogue balloon (body plus
a tapering tail pointing at the speaker) and flows text line by line through
the balloon's actual interior.

Example:
    $ speechbubble render --text "Hello there!" --tip 60,160 -o bubble.svg

This will write bubble.svg containing the outline path and positioned text.
"""

__version__ = "0.1.0"
__author__ = "Speechbubble contributors"

__all__ = ["__author__", "__version__"]
