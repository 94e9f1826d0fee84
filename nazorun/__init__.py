"""nazorun — puzzle speedruns in the terminal.

Solve the ordered questions of a puzzle against the clock. Every question is
timed separately, answers are judged case-insensitively against the accepted
set, and completed runs are ranked per puzzle.

Usage:
    python -m nazorun list                # Show puzzles
    python -m nazorun play 1              # Solve puzzle 1
    python -m nazorun ranking 1           # Leaderboard
"""

__version__ = "0.1.0"
