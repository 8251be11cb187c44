"""Minesweeper game logic with board generation run as a Temporal activity."""
