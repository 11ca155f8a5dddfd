"""Building blocks for a block-game server: wire buffers, packets, NBT, chat, chunks, encryption and tasks."""

__version__ = "0.0.1"