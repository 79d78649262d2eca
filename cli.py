#!/usr/bin/env python3
"""
binarykit command line interface.

Reads a sequence of fields from a binary file or hex string and prints
one line per field with the bit offset it was read at.

Usage:
    python cli.py <input> <field>...
    python cli.py -x <hexstring> <field>...

Examples:
    python cli.py header.bin 4 4 16 B s4    # nibble, nibble, u16, byte, 4 chars
    python cli.py -x A5FF 1 3 b r 8         # re-read the first byte after r
"""

import sys

from binarykit import BinaryError, BitReader, __version__


def print_version() -> None:
    """Print version information."""
    print(f"binarykit {__version__}")


def print_help(prog_name: str) -> None:
    """Print help message."""
    print(f"binarykit bit field reader (v{__version__})")
    print("=" * 38)
    print()
    print("Usage:")
    print(f"  {prog_name} <input> <field>...")
    print(f"  {prog_name} -x <hexstring> <field>...")
    print()
    print("Options:")
    print("  -x             Read from a hex string instead of a file")
    print("  -h, --help     Show this help message")
    print("  -v, --version  Show version information")
    print()
    print("Fields (read in order, MSB-first):")
    print("  N              Unsigned integer of N bits (e.g., 4, 12)")
    print("  b              Boolean (1 bit)")
    print("  c              Character (1 byte, code point 0-255)")
    print("  B              Byte")
    print("  sN             UTF-8 string of N bytes (e.g., s4)")
    print("  r              Reset the cursor to bit 0")
    print()
    print("Output:")
    print("  <bit offset>  <field>  <value>")
    print()
    print("Examples:")
    print(f"  {prog_name} header.bin 4 4 16 B s4")
    print(f"  {prog_name} -x A5FF 1 3 b r 8")
    print()


def is_valid_field(token: str) -> bool:
    """Check that a field token is one of the supported forms."""
    if token in ("b", "c", "B", "r"):
        return True
    if token.startswith("s"):
        return token[1:].isascii() and token[1:].isdigit()
    return token.isascii() and token.isdigit()


def read_field(reader: BitReader, token: str) -> str:
    """Read one field and return its printable value.

    Raises:
        BinaryError: If the field cannot be read
    """
    if token == "b":
        return str(reader.read_bool())
    if token == "c":
        return repr(reader.read_character())
    if token == "B":
        return f"0x{reader.read_byte():02X}"
    if token == "r":
        reader.reset_cursor()
        return "-"
    if token.startswith("s"):
        return repr(reader.read_string(int(token[1:])))

    width = int(token)
    value = reader.read_bits(width)
    return f"{value} (0b{value:0{max(width, 1)}b})"


def do_read(reader: BitReader, fields: list) -> int:
    """Read all fields from a reader.

    Args:
        reader: Reader positioned at bit 0.
        fields: Field tokens, validated by is_valid_field.

    Returns:
        0 on success, 1 on error.
    """
    for token in fields:
        offset = reader.position
        try:
            value = read_field(reader, token)
        except BinaryError as e:
            print(f"Error: Cannot read field '{token}' at bit {offset}: {e}", file=sys.stderr)
            return 1
        print(f"{offset:>8}  {token:<6}  {value}")

    print(f"Cursor:      bit {reader.position} ({reader.remaining} bits remaining)")
    return 0


def load_file(input_path: str) -> "BitReader | None":
    """Create a reader over the contents of a file."""
    try:
        with open(input_path, "rb") as f:
            input_data = f.read()
    except OSError as e:
        print(f"Error: Cannot open input file: {input_path} ({e})", file=sys.stderr)
        return None

    return BitReader(input_data)


def main() -> int:
    """CLI entry point."""
    args = sys.argv
    prog_name = args[0] if args else "cli.py"

    # Check for help flag or no arguments
    if len(args) < 2:
        print_help(prog_name)
        return 1

    if args[1] in ("-h", "--help"):
        print_help(prog_name)
        return 0

    if args[1] in ("-v", "--version"):
        print_version()
        return 0

    hex_mode = args[1] == "-x"
    arg_offset = 3 if hex_mode else 2

    if len(args) <= arg_offset:
        print("Error: At least one field is required", file=sys.stderr)
        print(f"Usage: {prog_name} [-x] <input> <field>...", file=sys.stderr)
        return 1

    fields = args[arg_offset:]
    for token in fields:
        if not is_valid_field(token):
            print(f"Error: Invalid field: {token}", file=sys.stderr)
            return 1

    if hex_mode:
        reader = BitReader.from_hex(args[2])
        if reader is None:
            print(f"Error: Invalid hex string: {args[2]}", file=sys.stderr)
            return 1
    else:
        reader = load_file(args[1])
        if reader is None:
            return 1

    return do_read(reader, fields)


if __name__ == "__main__":
    sys.exit(main())
