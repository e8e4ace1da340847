"""
iRdiscordbot - Discord bot for iRacing league servers.

Answers chat commands (!summary, !standings, !stats, ...) with images
rendered by the iRacing visualizer service, picking the racing series,
week and team from the message and the channel/guild it was posted in.
"""

__version__ = "0.1.0"
