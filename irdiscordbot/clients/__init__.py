"""
Remote Data Clients.

Async HTTP access to the iRacing visualizer's series listing and to the
joke API used by the !joke easter egg.
"""

from irdiscordbot.clients.visualizer import VisualizerClient

__all__ = ["VisualizerClient"]
