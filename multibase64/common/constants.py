"""Constants used throughout the codec."""

# Metadata header format version
CURRENT_VERSION = 1

# Cipher defaults
DEFAULT_SALT_LENGTH = 8
DEFAULT_IV_LENGTH = 12
DEFAULT_PBKDF2_ITERATIONS = 100_000
MIN_PBKDF2_ITERATIONS = 10_000
KEY_LENGTH = 32

# Accepted option ranges (inclusive)
SALT_LENGTH_RANGE = (8, 32)
IV_LENGTH_RANGE = (12, 16)

# The envelope config byte stores (salt - 8) and (iv - 12) in four bits each
MAX_ENVELOPE_SALT_LENGTH = 8 + 0x0F
MAX_ENVELOPE_IV_LENGTH = 12 + 0x0F

# First byte values in (0, 30) are sniffed as a metadata length prefix
METADATA_SNIFF_LIMIT = 30
MAX_METADATA_LENGTH = 255

UTF8 = "utf-8"
AUTO_DETECT = "auto-detect"
