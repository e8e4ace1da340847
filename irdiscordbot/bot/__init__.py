"""
Discord Bot Layer.

Connects to Discord, hands every guild message to the command engine and
turns the engine's replies into Discord messages and embeds.
"""

from irdiscordbot.bot.client import IRacingBot

__all__ = ["IRacingBot"]
