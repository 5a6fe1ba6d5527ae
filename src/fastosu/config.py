"""Global constants for the beatmap scanner."""

# Bounded string fields hold at most this many bytes of content
MAX_STRING_BYTES = 255

# Hit object type bits
SLIDER_BIT = 0b00000010
NEW_COMBO_BIT = 0b00000100
SPINNER_BIT = 0b00001000

# First line of a .osu file: "osu file format v14"
FORMAT_HEADER = b"osu file format v"
UTF8_BOM = b"\xef\xbb\xbf"

TEXT_ENCODING = "utf-8"
