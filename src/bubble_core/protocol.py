"""Bubble Babble format constants.

Single source of truth for the alphabets and group layout.
Keep this file stable. Encoder and decoder must remain synchronized.
"""

# Alphabets
VOWELS = "aeiouy"
CONSONANTS = "bcdfghklmnprstvzx"

# Consonant index 16 ("x") only ever marks the checksum-only group
CHECKSUM_CONSONANT = 16

DELIMITER = "x"
SEPARATOR = "-"

# Running checksum: c = (c * 5 + b1 * 7 + b2) % 36
CHECKSUM_SEED = 1
CHECKSUM_MODULUS = 36

# Group layout: [V C V C - C] per byte pair, [V C V] for the final group
PAIR_LEN = 6
FINAL_LEN = 3
# Empty input encodes to delimiter + final group + delimiter
MIN_ENCODED_LEN = FINAL_LEN + 2
