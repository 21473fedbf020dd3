"""
Built-in Sokoban puzzle collection.

Every puzzle here solves in well under a second.  "Crossroads" is the
largest: two boxes that must each be walked round a wall block to reach
their target.

Standard format:
  # = wall, ' ' = floor, . = target, $ = box, @ = player,
  * = box on target, + = player on target
"""

PUZZLES: dict[str, str] = {}

# ------------------------------------------------------------------
# 1-box puzzles
# ------------------------------------------------------------------

PUZZLES["One Box"] = """\
####
#. #
#$ #
#@ #
####"""

PUZZLES["Single Push"] = """\
#####
#   #
#@$.#
#   #
#####"""

PUZZLES["Corridor"] = """\
#######
#@ $ .#
#######"""

PUZZLES["Side Step"] = """\
######
#   .#
#  $ #
# @  #
######"""

# ------------------------------------------------------------------
# 2- and 3-box puzzles
# ------------------------------------------------------------------

PUZZLES["Twin Drop"] = """\
#######
#  @  #
# $ $ #
# . . #
#######"""

PUZZLES["Three Shelf"] = """\
########
#   .  #
# $$$  #
#  @ ..#
########"""

# ------------------------------------------------------------------
# Larger 2-box puzzle (8x10)
# ------------------------------------------------------------------

PUZZLES["Crossroads"] = """\
##########
#        #
# ##  ## #
# # @  # #
#  $  $  #
# ###### #
#.      .#
##########"""


def get_puzzle_names() -> list[str]:
    """Return all puzzle names in order."""
    return list(PUZZLES.keys())


def get_puzzle(name: str) -> str:
    """Return the level text for a named puzzle."""
    return PUZZLES[name]
