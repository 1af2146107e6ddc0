from bayan.core.models import ChecksumKind

CHECKSUM_ALIASES = {
    "crc32": ChecksumKind.CRC32,
    "crc": ChecksumKind.CRC32,
    "xxhash": ChecksumKind.XXHASH,
    "xxh32": ChecksumKind.XXHASH,
}

CHECKSUM_CHOICES = list(CHECKSUM_ALIASES.keys())

CHECKSUM_HELP_TEXT = (
    "Checksum applied to every block:\n"
    "  crc32      : CRC-32 (default)\n"
    "  xxhash     : xxHash32, faster on large blocks\n"
)

LEVEL_HELP_TEXT = (
    "Scanning level:\n"
    "  0 : only files directly inside the given directories (default)\n"
    "  1 : all nested directories as well\n"
)

EPILOG_TEXT = """
Examples:
  Find duplicates in the current directory
  %(prog)s

  Scan two trees recursively, skipping a cache directory
  %(prog)s -d ~/Photos /mnt/backup/Photos -l 1 -e ~/Photos/.cache

  Only JPEG files of at least 100KB, compared in 64KB blocks
  %(prog)s -d ~/Photos -l 1 -m "*.jpg" "*.jpeg" -s 100K -b 64K

  Keep one file per group and move the rest to trash without a prompt
  %(prog)s -d ~/Downloads --keep-one --force
"""
