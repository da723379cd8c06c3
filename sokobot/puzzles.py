"""
Built-in Sokoban puzzle collection.

Small levels, trivial to moderate, in the standard text format
(see sokobot.parsing).
"""

PUZZLES: dict[str, str] = {}

# ------------------------------------------------------------------
# 1-box puzzles
# ------------------------------------------------------------------

PUZZLES["Corridor"] = """\
#####
#@$.#
#####"""

PUZZLES["One Box"] = """\
####
#. #
#$ #
#@ #
####"""

PUZZLES["One Box Wide"] = """\
######
#.   #
# $  #
#  @ #
######"""

PUZZLES["Around the Corner"] = """\
#######
#@    #
# $   #
#   # #
#.  # #
#######"""

# The wall over the box forces a detour: 5 pushes, Manhattan bound 3.
PUZZLES["Detour"] = """\
########
#   .  #
#  ##  #
#  $   #
#  @   #
########"""

# ------------------------------------------------------------------
# 2-box puzzles
# ------------------------------------------------------------------

PUZZLES["Two Box Line"] = """\
######
#    #
# @  #
# $$ #
# .. #
######"""

PUZZLES["Two Box Across"] = """\
######
# .  #
#  $ #
# $  #
#  . #
# @  #
######"""

# ------------------------------------------------------------------
# 3+ box puzzles
# ------------------------------------------------------------------

PUZZLES["Three Down"] = """\
#######
#     #
# $$$ #
#     #
# ... #
#  @  #
#######"""

PUZZLES["Three Box L"] = """\
######
#    #
# @$ #
# $  #
# $ .#
#  ..#
######"""


def get_puzzle_names() -> list[str]:
    """Return all puzzle names in order."""
    return list(PUZZLES.keys())


def get_puzzle(name: str) -> str:
    return PUZZLES[name]
