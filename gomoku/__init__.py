"""
Gomoku: alpha-beta search and neuro-evolutionary training for
five-in-a-row on a 15x15 board.
"""
__version__ = '0.1.0'
