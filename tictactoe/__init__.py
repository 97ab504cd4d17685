"""
Timed Tic-Tac-Toe: two players, 3x3 to 5x5 boards, a per-turn countdown and
a running score across rounds.
"""
