"""
Chessrelay - Real-time matchmaking and session relay for two-player chess.

The relay keeps just enough state to referee turn order:
- Room codes and an in-memory room registry
- Seat assignment (white first, black second) with reconnection
- Side-to-move and the last applied move
- Broadcasts of room state to everyone seated

There is no rules engine. Move legality is a pluggable hook.
"""

__version__ = "0.1.0"
