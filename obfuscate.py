"""
Obfuscate a secret for pasting into questions.py.

Usage: python obfuscate.py <plaintext>
Prints the plaintext and its obfuscated form separated by a space.
"""
import argparse
import sys

from obf import deobfuscate, obfuscate


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="XOR-obfuscate a secret string")
    parser.add_argument("target", help="String to obfuscate")
    parser.add_argument(
        "--reverse", action="store_true",
        help="Treat the target as obfuscated and print the recovered plaintext instead"
    )
    args = parser.parse_args(argv)

    transform = deobfuscate if args.reverse else obfuscate
    try:
        result = transform(args.target)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(f"{args.target} {result}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
